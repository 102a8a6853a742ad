"""Insajder news site."""

import json
import logging

import httpx
from bs4 import BeautifulSoup, Tag

from ..engine.blocks import ContentBlock, Paragraph, Subtitle
from ..exceptions import ParseError
from ..models import FeedEntry, FetchedBody
from .base import NewsSite, element_text, parse_timestamp

logger: logging.Logger = logging.getLogger(name=__name__)

PAGE_SIZE = 50
QUERY = (
    "{items:swp_article(limit:%d,offset:%d,order_by:{published_at:desc})"
    "{lead published_at title body}}"
)


class Insajder(NewsSite):
    """Insajder serves its articles, bodies included, from a GraphQL API."""

    name = "Insajder"
    label = "Δ"
    feed_url = "https://insajder2-hasura.superdesk.org/v1/graphql"

    def fetch_feed(self, http: httpx.Client, page: int = 0) -> list[FeedEntry]:
        query: str = QUERY % (PAGE_SIZE, page * PAGE_SIZE)
        logger.debug(msg=f"Fetching {self} feed page {page}")
        response: httpx.Response = http.post(url=self.feed_url, json={"query": query})
        response.raise_for_status()
        return self.parse_feed(text=response.text)

    def parse_feed(self, text: str) -> list[FeedEntry]:
        try:
            items: list[dict] = json.loads(text)["data"]["items"]
        except (ValueError, KeyError, TypeError) as err:
            raise ParseError(f"Unexpected response from {self}: {err}") from err
        entries: list[FeedEntry] = []
        for item in items:
            try:
                entries.append(
                    FeedEntry(
                        title=self.entry_title(title=item["title"]),
                        published=parse_timestamp(text=item["published_at"]),
                        body=FetchedBody(html=item["body"] or "", lead=item.get("lead") or ""),
                        site=self.name,
                    )
                )
            except (KeyError, ValueError, OverflowError) as err:
                logger.debug(msg=f"Skipping {self} item: {err}")
        return entries

    def parse_element(self, element: Tag) -> ContentBlock | None:
        text: str = element_text(element=element)
        if not text:
            return None
        if element.name == "p":
            return Paragraph(text=text)
        if element.name == "h2":
            return Subtitle(text=text)
        return None

    def parse_article(self, html: str) -> list[ContentBlock]:
        soup = BeautifulSoup(markup=html, features="html.parser")
        blocks: list[ContentBlock] = [
            block for block in (self.parse_element(child) for child in soup.find_all(recursive=False))
            if block is not None
        ]
        if not blocks:
            raise ParseError("Couldn't scrape content from article HTML")
        return blocks
