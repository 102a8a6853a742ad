"""Common behaviour of the supported news sites."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime

import httpx
from bs4 import BeautifulSoup, Tag
from dateutil import parser as date_parser
from dateutil.tz import tzlocal

from ..engine.blocks import ContentBlock
from ..exceptions import ParseError
from ..models import FeedEntry

logger: logging.Logger = logging.getLogger(name=__name__)


def element_text(element: Tag) -> str:
    """Get the text of an element with whitespace collapsed."""
    return " ".join(element.get_text().split())


def parse_timestamp(text: str) -> datetime:
    """Parse a timestamp, assuming local time when it has no timezone.

    Raises:
        ValueError: If text isn't a timestamp
    """
    published: datetime = date_parser.parse(timestr=text)
    if published.tzinfo is None:
        published = published.replace(tzinfo=tzlocal())
    return published


class NewsSite(ABC):
    """A news site vestcli can read.

    Subclasses say where the feed is and how to turn the site's pages into
    feed entries and content blocks.
    """

    name: str = ""
    label: str = ""
    feed_url: str = ""
    # CSS selector of the headline on article pages
    title_selector: str = ""

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def entry_title(self, title: str) -> str:
        """Prefix a title with the site label so entries of different sites can be told apart."""
        return f"({self.label}) {title.strip()}"

    def plain_title(self, title: str) -> str:
        """Remove the site label added by entry_title."""
        prefix: str = f"({self.label}) "
        return title[len(prefix) :] if title.startswith(prefix) else title

    def article_title(self, html: str) -> str | None:
        """Get the headline of an article page, None when it has none."""
        if not self.title_selector:
            return None
        soup = BeautifulSoup(markup=html, features="html.parser")
        heading: Tag | None = soup.select_one(selector=self.title_selector)
        if heading is None:
            return None
        return element_text(element=heading) or None

    def feed_page_url(self, page: int) -> str:
        return self.feed_url

    def fetch_feed(self, http: httpx.Client, page: int = 0) -> list[FeedEntry]:
        """Download and parse one page of the site's feed.

        Raises:
            httpx.HTTPError: If the page can't be downloaded
            ParseError: If the response isn't a feed page
        """
        url: str = self.feed_page_url(page=page)
        logger.debug(msg=f"Fetching {self} feed page {page} from {url}")
        response: httpx.Response = http.get(url=url)
        response.raise_for_status()
        return self.parse_feed(text=response.text)

    @abstractmethod
    def parse_feed(self, text: str) -> list[FeedEntry]:
        """Turn a downloaded feed page into entries."""

    @abstractmethod
    def parse_article(self, html: str) -> list[ContentBlock]:
        """Turn article HTML into content blocks.

        Raises:
            ParseError: If the HTML has no usable content
        """


def parse_article_content(
    html: str,
    content_selector: str,
    parse_element: Callable[[Tag], ContentBlock | None],
) -> list[ContentBlock]:
    """Turn the children of an article's content element into blocks.

    Args:
        html: Article page
        content_selector: CSS selector of the element holding the article body
        parse_element: Function making a block out of a child, or None to skip it

    Returns:
        Blocks of the article body

    Raises:
        ParseError: If the content element is missing or yields no blocks
    """
    soup = BeautifulSoup(markup=html, features="html.parser")
    content: Tag | None = soup.select_one(selector=content_selector)
    if content is None:
        raise ParseError("No content in the HTML")
    blocks: list[ContentBlock] = [
        block
        for block in (parse_element(child) for child in content.find_all(recursive=False))
        if block is not None
    ]
    if not blocks:
        raise ParseError("Couldn't scrape content from article HTML")
    return blocks


def blockquote_paragraphs(blockquote: Tag) -> list[str]:
    """Get the text of the paragraphs directly inside a blockquote."""
    paragraphs: list[str] = [element_text(element=p) for p in blockquote.find_all(name="p", recursive=False)]
    return [paragraph for paragraph in paragraphs if paragraph] or [element_text(element=blockquote)]
