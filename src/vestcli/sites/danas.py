"""Danas news site."""

import logging
from datetime import datetime

from bs4 import BeautifulSoup, Tag
from dateutil.tz import tzlocal

from ..engine.blocks import Boxed, ContentBlock, Lead, Paragraph, Subtitle
from ..models import FeedEntry, RemoteBody
from .base import NewsSite, blockquote_paragraphs, element_text, parse_article_content

logger: logging.Logger = logging.getLogger(name=__name__)

TIME_FORMAT = "%d.%m.%Y. %H:%M"
# Articles published today only show the time
TODAY_FORMAT = "danas %H:%M"


def parse_published(text: str, now: datetime | None = None) -> datetime:
    """Parse the publish time shown in the Danas article list.

    Raises:
        ValueError: If text is in neither of the formats Danas uses
    """
    text = text.strip()
    try:
        published: datetime = datetime.strptime(text, TIME_FORMAT)
    except ValueError:
        time_of_day: datetime = datetime.strptime(text, TODAY_FORMAT)
        today: datetime = now or datetime.now(tz=tzlocal())
        published = today.replace(hour=time_of_day.hour, minute=time_of_day.minute, second=0, microsecond=0)
    if published.tzinfo is None:
        published = published.replace(tzinfo=tzlocal())
    return published


class Danas(NewsSite):
    """Danas has no usable feed, its article list page is scraped instead."""

    name = "Danas"
    label = "D"
    feed_url = "https://www.danas.rs/najnovije-vesti/"
    title_selector = ".post-title"

    def feed_page_url(self, page: int) -> str:
        return f"{self.feed_url}page/{page + 1}"

    def parse_feed(self, text: str) -> list[FeedEntry]:
        soup = BeautifulSoup(markup=text, features="html.parser")
        entries: list[FeedEntry] = []
        for article in soup.select(selector="article"):
            link: Tag | None = article.select_one(selector="h3 a")
            title: Tag | None = article.select_one(selector="h3")
            published: Tag | None = article.select_one(selector=".published")
            if link is None or title is None or published is None or not link.get("href"):
                continue
            try:
                timestamp: datetime = parse_published(text=published.get_text())
            except ValueError as err:
                logger.debug(msg=f"Skipping {self} article with bad time: {err}")
                continue
            entries.append(
                FeedEntry(
                    title=self.entry_title(title=element_text(element=title)),
                    published=timestamp,
                    body=RemoteBody(url=str(link["href"])),
                    site=self.name,
                )
            )
        return entries

    def parse_element(self, element: Tag) -> ContentBlock | None:
        """Make a block out of one child of the article content."""
        text: str = element_text(element=element)
        if element.name == "p":
            return Paragraph(text=text) if text else None
        if element.name == "div" and "post-intro-content" in (element.get("class") or []):
            return Lead(text=text) if text else None
        if element.name == "blockquote":
            return Boxed(paragraphs=blockquote_paragraphs(blockquote=element))
        if element.name == "h2":
            return Subtitle(text=text) if text else None
        return None

    def parse_article(self, html: str) -> list[ContentBlock]:
        return parse_article_content(
            html=html, content_selector=".content div.flex .w-full", parse_element=self.parse_element
        )
