"""Shared fixtures for the vestcli tests."""

from datetime import datetime, timedelta, timezone

import pytest
from rich.text import Text

from vestcli.engine.blocks import Boxed
from vestcli.engine.geometry import Geometry
from vestcli.engine.surface import ScreenGrid
from vestcli.engine.viewport import TextPad
from vestcli.models import FeedEntry, FetchedBody, RemoteBody

BASE_TIME = datetime(2025, 1, 6, 12, 0, tzinfo=timezone.utc)


class RecordingSurface:
    """A terminal surface that records the commands it gets."""

    def __init__(self) -> None:
        self.commands: list[tuple] = []

    def move_to(self, x: int, y: int) -> None:
        self.commands.append(("move_to", x, y))

    def write_line(self, line: Text) -> None:
        self.commands.append(("write_line", line.plain))

    def scroll_region_up(self, n: int) -> None:
        self.commands.append(("scroll_up", n))

    def scroll_region_down(self, n: int) -> None:
        self.commands.append(("scroll_down", n))

    def clear(self) -> None:
        self.commands.append(("clear",))


def entry_blocks(count: int, start: int = 0) -> list[Boxed]:
    """Feed entry blocks that are 4 rows high at width 20."""
    return [Boxed(paragraphs=(f"entry {i}",)) for i in range(start, start + count)]


def visible_plain(textpad: TextPad, grid: ScreenGrid) -> list[str]:
    """Get what the grid should show for the text pad's current top row."""
    lines: list[str] = [
        " " * textpad.geo.startx + line.plain
        for line in textpad.content[textpad.first : textpad.first + grid.height]
    ]
    return lines + [""] * (grid.height - len(lines))


def row_color(grid: ScreenGrid, y: int) -> str | None:
    """Get the highlight of a grid row: a color name, "dim" or None."""
    row = grid.rows[y]
    if row is None or not row[1].spans:
        return None
    style = row[1].spans[0].style
    if style.dim:
        return "dim"
    return style.color.name if style.color else None


def make_entry(minutes: int, title: str = "", site: str = "N1", fetched: bool = False) -> FeedEntry:
    """Make an entry published minutes after BASE_TIME."""
    body = FetchedBody(html="<p>Body</p>", lead="Lead") if fetched else RemoteBody(url=f"https://example.com/{minutes}")
    return FeedEntry(
        title=title or f"Entry {minutes}",
        published=BASE_TIME + timedelta(minutes=minutes),
        body=body,
        site=site,
    )


@pytest.fixture
def geo() -> Geometry:
    """A 20 column wide, 10 row high feed layout."""
    return Geometry(term_size=(20, 10), feed_width=20, article_width=30)


@pytest.fixture
def grid() -> ScreenGrid:
    return ScreenGrid(height=10)


@pytest.fixture
def recorder() -> RecordingSurface:
    return RecordingSurface()
