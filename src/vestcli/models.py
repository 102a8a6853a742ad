"""Feed entries and the feed they are kept in."""

import json
import logging
import time
from collections.abc import Collection, Iterable
from dataclasses import dataclass
from datetime import datetime
from itertools import chain, takewhile
from pathlib import Path
from typing import Any

from .engine.blocks import Boxed

logger: logging.Logger = logging.getLogger(name=__name__)

DATE_FORMAT = "%d.%m.%Y. %H:%M"


@dataclass(frozen=True)
class FetchedBody:
    """Article body that came together with the feed."""

    html: str
    lead: str = ""


@dataclass(frozen=True)
class RemoteBody:
    """Article body that has to be downloaded from url."""

    url: str


Body = FetchedBody | RemoteBody


@dataclass(frozen=True)
class FeedEntry:
    """One news item of the feed."""

    title: str
    published: datetime
    body: Body
    site: str

    def to_block(self, date_format: str = DATE_FORMAT) -> Boxed:
        """Get the block the entry is shown as in the feed."""
        return Boxed(paragraphs=(self.title, self.published.strftime(date_format)))

    def to_dict(self) -> dict[str, Any]:
        if isinstance(self.body, FetchedBody):
            body: dict[str, str] = {"type": "fetched", "html": self.body.html, "lead": self.body.lead}
        else:
            body = {"type": "remote", "url": self.body.url}
        return {
            "title": self.title,
            "published": self.published.isoformat(),
            "site": self.site,
            "body": body,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FeedEntry":
        """Create an entry from the output of to_dict.

        Raises:
            ValueError: If the data isn't a valid entry
        """
        try:
            raw_body: dict[str, str] = data["body"]
            if raw_body["type"] == "fetched":
                body: Body = FetchedBody(html=raw_body["html"], lead=raw_body.get("lead", ""))
            elif raw_body["type"] == "remote":
                body = RemoteBody(url=raw_body["url"])
            else:
                raise ValueError(f"Unknown body type {raw_body['type']!r}")
            return cls(
                title=data["title"],
                published=datetime.fromisoformat(data["published"]),
                body=body,
                site=data["site"],
            )
        except (KeyError, TypeError) as err:
            raise ValueError(f"Invalid feed entry {data!r}: {err}") from err


def _sorted_unique(entries: Iterable[FeedEntry]) -> list[FeedEntry]:
    """Sort entries newest first and drop repeated ones."""
    seen: set[tuple[datetime, str]] = set()
    unique: list[FeedEntry] = []
    for entry in sorted(entries, key=lambda e: e.published, reverse=True):
        key: tuple[datetime, str] = (entry.published, entry.title)
        if key not in seen:
            seen.add(key)
            unique.append(entry)
    return unique


def merge_site_batches(
    batches: Iterable[list[FeedEntry]], held_back: list[FeedEntry] | None = None
) -> list[FeedEntry]:
    """Combine the entries fetched from several sites into one feed page.

    Sites return pages covering different time spans. Entries older than the
    newest of the sites' oldest entries are dropped so that every site is
    represented over the whole returned span.

    Args:
        batches: Entries of each site
        held_back: If given, the dropped entries are added to it, newest first

    Returns:
        Entries sorted newest first without duplicates
    """
    batches = [batch for batch in batches if batch]
    if not batches:
        return []
    cutoff: datetime = max(min(entry.published for entry in batch) for batch in batches)
    entries: list[FeedEntry] = [entry for batch in batches for entry in batch]
    if held_back is not None:
        held_back.extend(_sorted_unique(entry for entry in entries if entry.published < cutoff))
    return _sorted_unique(entry for entry in entries if entry.published >= cutoff)


class Feed:
    """Feed entries kept newest first."""

    def __init__(self, entries: Iterable[FeedEntry]) -> None:
        """Initialize the feed.

        Args:
            entries: Entries in any order
        """
        self.entries: list[FeedEntry] = _sorted_unique(entries)
        self.page: int = 0
        # Entries cut from the last merged page, they join the next one
        self.held_back: list[FeedEntry] = []
        self.refreshed_at: float = time.monotonic()

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> FeedEntry:
        return self.entries[index]

    @property
    def newest(self) -> FeedEntry | None:
        return self.entries[0] if self.entries else None

    @property
    def oldest(self) -> FeedEntry | None:
        return self.entries[-1] if self.entries else None

    def merge_new(self, batch: Iterable[FeedEntry]) -> list[FeedEntry]:
        """Put the entries newer than the newest known one in front of the feed.

        Args:
            batch: Freshly fetched entries

        Returns:
            The inserted entries, newest first
        """
        self.touch()
        ordered: list[FeedEntry] = _sorted_unique(batch)
        newest: FeedEntry | None = self.newest
        if newest is not None:
            ordered = list(takewhile(lambda entry: entry.published > newest.published, ordered))
        self.entries[:0] = ordered
        logger.info(msg=f"Merged {len(ordered)} new entries into the feed")
        return ordered

    def extend_old(self, batch: Iterable[FeedEntry]) -> list[FeedEntry]:
        """Add the entries older than the oldest known one at the end of the feed.

        Returns:
            The added entries, newest first
        """
        oldest: FeedEntry | None = self.oldest
        ordered: list[FeedEntry] = [
            entry for entry in _sorted_unique(batch) if oldest is None or entry.published < oldest.published
        ]
        self.entries.extend(ordered)
        self.page += 1
        logger.info(msg=f"Added {len(ordered)} older entries from page {self.page}")
        return ordered

    def merge_new_batches(self, batches: Iterable[list[FeedEntry]]) -> list[FeedEntry]:
        """Merge the newest page of every site into the feed.

        When the feed is empty the entries cut by merge_site_batches are held
        back for the next page.

        Args:
            batches: Entries of each site

        Returns:
            The inserted entries, newest first
        """
        held_back: list[FeedEntry] = []
        entries: list[FeedEntry] = merge_site_batches(batches=batches, held_back=held_back)
        if not self.entries:
            self.held_back = held_back
        return self.merge_new(batch=entries)

    def extend_old_batches(self, batches: Iterable[list[FeedEntry]]) -> list[FeedEntry]:
        """Add the next page of every site at the end of the feed.

        Held back entries are merged with their site's batch, so no entry is
        lost between pages.

        Returns:
            The added entries, newest first
        """
        by_site: dict[str, list[FeedEntry]] = {}
        for entry in chain(self.held_back, *batches):
            by_site.setdefault(entry.site, []).append(entry)
        held_back: list[FeedEntry] = []
        entries: list[FeedEntry] = merge_site_batches(batches=by_site.values(), held_back=held_back)
        self.held_back = held_back
        if held_back:
            logger.debug(msg=f"Holding back {len(held_back)} entries for the next page")
        return self.extend_old(batch=entries)

    def is_stale(self, interval: float) -> bool:
        """Check whether interval seconds passed since the last refresh."""
        return time.monotonic() - self.refreshed_at >= interval

    def touch(self) -> None:
        self.refreshed_at = time.monotonic()

    def to_json(self) -> str:
        return json.dumps([entry.to_dict() for entry in self.entries], indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str, known_sites: Collection[str] | None = None) -> "Feed":
        """Load a feed saved with to_json.

        Args:
            text: JSON text
            known_sites: Site names entries may refer to, None allows any

        Raises:
            ValueError: If the JSON isn't a saved feed or refers to an unknown site
        """
        data: Any = json.loads(text)
        if not isinstance(data, list):
            raise ValueError("Saved feed must be a list of entries")
        entries: list[FeedEntry] = [FeedEntry.from_dict(data=item) for item in data]
        if known_sites is not None:
            for entry in entries:
                if entry.site not in known_sites:
                    raise ValueError(f"Couldn't find the parser for {entry.site}")
        return cls(entries=entries)

    def save(self, path: Path) -> None:
        """Write the feed to path, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(data=self.to_json(), encoding="utf-8")
        logger.info(msg=f"Saved {len(self.entries)} entries to {path}")

    @classmethod
    def load(cls, path: Path, known_sites: Collection[str] | None = None) -> "Feed":
        """Read a feed written by save.

        Raises:
            OSError: If the file can't be read
            ValueError: If the file isn't a saved feed
        """
        feed: Feed = cls.from_json(text=path.read_text(encoding="utf-8"), known_sites=known_sites)
        logger.info(msg=f"Loaded {len(feed.entries)} entries from {path}")
        return feed
