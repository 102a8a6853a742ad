"""N1 news site."""

import logging

import feedparser
from bs4 import Tag

from ..engine.blocks import Boxed, ContentBlock, Lead, Paragraph, Subtitle
from ..models import FeedEntry, RemoteBody
from .base import NewsSite, blockquote_paragraphs, element_text, parse_article_content, parse_timestamp

logger: logging.Logger = logging.getLogger(name=__name__)


class N1(NewsSite):
    """N1 publishes an RSS feed and links to full article pages."""

    name = "N1"
    label = "N1"
    feed_url = "https://n1info.rs/feed/"
    title_selector = ".entry-title"

    def feed_page_url(self, page: int) -> str:
        return self.feed_url if page == 0 else f"{self.feed_url}?paged={page + 1}"

    def parse_feed(self, text: str) -> list[FeedEntry]:
        parsed = feedparser.parse(text)
        entries: list[FeedEntry] = []
        for item in parsed.entries:
            try:
                entries.append(
                    FeedEntry(
                        title=self.entry_title(title=item["title"]),
                        published=parse_timestamp(text=item["published"]),
                        body=RemoteBody(url=item["link"]),
                        site=self.name,
                    )
                )
            except (KeyError, ValueError, OverflowError) as err:
                logger.debug(msg=f"Skipping {self} feed item without {err}")
        return entries

    def parse_element(self, element: Tag) -> ContentBlock | None:
        """Make a block out of one child of the article content."""
        if element.name == "p":
            text: str = element_text(element=element)
            if not text:
                return None
            inner: Tag | None = element.find(recursive=False)
            if inner is not None and inner.get("data-attribute-id") == "emphasized-text":
                return Lead(text=text)
            return Paragraph(text=text)
        if element.name == "section":
            blockquote: Tag | None = element.find(name="blockquote")
            if blockquote is None:
                return None
            return Boxed(paragraphs=blockquote_paragraphs(blockquote=blockquote))
        if element.name == "h2":
            text = element_text(element=element)
            return Subtitle(text=text) if text else None
        return None

    def parse_article(self, html: str) -> list[ContentBlock]:
        return parse_article_content(html=html, content_selector=".entry-content", parse_element=self.parse_element)
