"""Terminal surface the document engine draws on."""

from typing import Protocol

from rich.text import Text


class TerminalSurface(Protocol):
    """Drawing commands the engine issues, applied in the order they are issued."""

    def move_to(self, x: int, y: int) -> None:
        """Move the cursor to column x of row y."""

    def write_line(self, line: Text) -> None:
        """Write line at the cursor, then move the cursor one row down, same column."""

    def scroll_region_up(self, n: int) -> None:
        """Scroll the screen content up by n rows, opening blank rows at the bottom."""

    def scroll_region_down(self, n: int) -> None:
        """Scroll the screen content down by n rows, opening blank rows at the top."""

    def clear(self) -> None:
        """Blank the whole screen."""


class ScreenGrid:
    """An in-memory screen that applies surface commands to a grid of rows.

    Each row holds at most one line and the column it starts at. Rows touched
    since the last call to take_damage are remembered so a renderer can repaint
    only those.
    """

    def __init__(self, height: int) -> None:
        """Create a blank screen.

        Args:
            height: Number of rows
        """
        self.rows: list[tuple[int, Text] | None] = [None] * height
        self.x: int = 0
        self.y: int = 0
        self._damaged: set[int] = set()
        self._scrolled: bool = False

    @property
    def height(self) -> int:
        return len(self.rows)

    def resize(self, height: int) -> None:
        """Change the number of rows; the screen is blanked."""
        self.rows = [None] * height
        self.x = self.y = 0
        self._scrolled = True

    def move_to(self, x: int, y: int) -> None:
        self.x, self.y = x, y

    def write_line(self, line: Text) -> None:
        if 0 <= self.y < self.height:
            self.rows[self.y] = (self.x, line)
            self._damaged.add(self.y)
        self.y += 1

    def scroll_region_up(self, n: int) -> None:
        if n <= 0:
            return
        n = min(n, self.height)
        self.rows = self.rows[n:] + [None] * n
        self._scrolled = True

    def scroll_region_down(self, n: int) -> None:
        if n <= 0:
            return
        n = min(n, self.height)
        self.rows = [None] * n + self.rows[: self.height - n]
        self._scrolled = True

    def clear(self) -> None:
        self.rows = [None] * self.height
        self._scrolled = True

    def plain_rows(self) -> list[str]:
        """Get the rows as plain text, indented by their start column."""
        return [
            "" if row is None else " " * row[0] + row[1].plain for row in self.rows
        ]

    def take_damage(self) -> set[int] | None:
        """Get the rows changed since the last call and forget them.

        Returns:
            Indexes of changed rows, or None if the whole screen moved
        """
        damaged: set[int] | None = None if self._scrolled else set(self._damaged)
        self._damaged.clear()
        self._scrolled = False
        return damaged
