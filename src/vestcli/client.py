"""Client module for vestcli."""

import logging
from collections.abc import Iterable

import httpx

from .cache import LimitedSizeDict
from .engine.blocks import ContentBlock, Lead, Title
from .exceptions import FetchError
from .models import FeedEntry, FetchedBody, merge_site_batches
from .sites import SITES, NewsSite
from .utils.decorators import raise_fetch_error
from .utils.url import clean_entry_url

logger: logging.Logger = logging.getLogger(name=__name__)

USER_AGENT = "vestcli (+https://github.com/vestcli/vestcli)"


class NewsClient:
    """Fetches feed entries and article bodies from the configured news sites."""

    def __init__(  # noqa: PLR0913
        self,
        sites: Iterable[NewsSite] | None = None,
        timeout: float = 10.0,
        cache_size: int = 100,
        clean_urls: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            sites: Sites to read the feed from, all supported sites if None
            timeout: Timeout of each request in seconds
            cache_size: Number of parsed articles to keep
            clean_urls: Whether to strip tracking parameters from article URLs
            transport: httpx transport, used by tests to fake the network
        """
        self.sites: list[NewsSite] = list(sites) if sites is not None else list(SITES.values())
        self.clean_urls: bool = clean_urls
        self.cache: LimitedSizeDict = LimitedSizeDict(max_size=cache_size)
        self.http = httpx.Client(
            follow_redirects=True,
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            transport=transport,
        )

    @raise_fetch_error
    def fetch_site(self, site: NewsSite, page: int = 0) -> list[FeedEntry]:
        """Fetch one page of a single site's feed."""
        entries: list[FeedEntry] = site.fetch_feed(http=self.http, page=page)
        if self.clean_urls:
            entries = [clean_entry_url(entry=entry) for entry in entries]
        logger.info(msg=f"Got {len(entries)} entries from {site}")
        return entries

    def fetch_batches(self, page: int = 0) -> list[list[FeedEntry]]:
        """Fetch one page of the feed of every site.

        A site that fails is logged and left out.

        Args:
            page: Page of the feeds, 0 for the newest entries

        Returns:
            Entries of each site that answered

        Raises:
            FetchError: If no site returned any entries
        """
        batches: list[list[FeedEntry]] = []
        for site in self.sites:
            try:
                batches.append(self.fetch_site(site=site, page=page))
            except FetchError as err:
                logger.error(msg=f"Couldn't get articles from {site}: {err}")
        if not any(batches):
            raise FetchError("Couldn't get any articles from the feed (check logs)")
        return batches

    def fetch_entries(self, page: int = 0) -> list[FeedEntry]:
        """Fetch one page of the feed of every site merged into one list, newest first.

        Raises:
            FetchError: If no site returned any entries
        """
        return merge_site_batches(batches=self.fetch_batches(page=page))

    def _site(self, name: str) -> NewsSite:
        for site in self.sites:
            if site.name == name:
                return site
        try:
            return SITES[name]
        except KeyError:
            raise FetchError(f"No support for site {name}") from None

    @raise_fetch_error
    def fetch_body(self, entry: FeedEntry) -> list[ContentBlock]:
        """Get the content blocks of an entry's article.

        Bodies that came with the feed are parsed, others are downloaded first.

        Raises:
            FetchError: If the article can't be downloaded or has no content
        """
        cache_key: tuple[str, str, str] = (entry.site, entry.published.isoformat(), entry.title)
        if cache_key in self.cache:
            return self.cache[cache_key]

        site: NewsSite = self._site(name=entry.site)
        title: str = site.plain_title(title=entry.title)
        if isinstance(entry.body, FetchedBody):
            blocks: list[ContentBlock] = [Title(text=title)]
            if entry.body.lead.strip():
                blocks.append(Lead(text=entry.body.lead))
            blocks.extend(site.parse_article(html=entry.body.html))
        else:
            logger.debug(msg=f"Downloading {entry.body.url}")
            response: httpx.Response = self.http.get(url=entry.body.url)
            response.raise_for_status()
            blocks = [Title(text=site.article_title(html=response.text) or title)]
            blocks.extend(site.parse_article(html=response.text))

        self.cache[cache_key] = blocks
        return blocks

    def close(self) -> None:
        self.http.close()
