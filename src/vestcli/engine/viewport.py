"""Scrollable window over a document buffer."""

import logging
from collections.abc import Iterable
from enum import Enum

from rich.text import Text

from .blocks import ContentBlock
from .buffer import Component, DocumentBuffer
from .geometry import Geometry
from .surface import TerminalSurface

logger: logging.Logger = logging.getLogger(name=__name__)


class Direction(Enum):
    """Scroll or selection direction."""

    UP = -1
    DOWN = 1


class TextPad:
    """A window of terminal height over the lines of a document buffer.

    Scrolling moves the terminal content with scroll commands and writes only
    the rows that scrolled into view.
    """

    def __init__(self, blocks: Iterable[ContentBlock], geo: Geometry) -> None:
        """Build the document at the current geometry width.

        Args:
            blocks: Content blocks of the document
            geo: Geometry shared with the other views

        Raises:
            LayoutError: If a block can't be laid out at the geometry width
        """
        self.geo: Geometry = geo
        self.components = DocumentBuffer(blocks=blocks, width=geo.width)
        self.content: list[Text] = self.components.to_lines()
        self.first: int = 0

    @property
    def height(self) -> int:
        return self.geo.term_height

    @property
    def max_first(self) -> int:
        return max(0, len(self.content) - self.height)

    def build(self) -> None:
        """Lay out the buffer at the geometry width and refresh the drawn lines."""
        self.components.rebuild(new_width=self.geo.width)
        self.reset_content()

    def reset_content(self) -> None:
        self.content = self.components.to_lines()

    def _write_rows(self, surface: TerminalSurface, screen_row: int, count: int) -> None:
        """Write count content lines starting at screen_row."""
        surface.move_to(x=self.geo.startx, y=screen_row)
        start: int = self.first + screen_row
        for line in self.content[start : start + count]:
            surface.write_line(line=line)

    def draw(self, surface: TerminalSurface) -> None:
        """Clear the terminal and draw every visible line."""
        surface.clear()
        self._write_rows(surface=surface, screen_row=0, count=self.height)

    def scroll_by_lines(self, surface: TerminalSurface, delta: int) -> int:
        """Scroll by delta lines, up when negative.

        The scroll is clamped to the document; only the rows revealed by the
        scroll are written.

        Args:
            surface: Terminal to draw on
            delta: Number of lines to scroll

        Returns:
            Number of lines actually scrolled, negative when scrolling up
        """
        if delta < 0:
            lines: int = min(-delta, self.first)
            if lines == 0:
                return 0
            self.first -= lines
            surface.scroll_region_down(n=lines)
            self._write_rows(surface=surface, screen_row=0, count=lines)
            return -lines

        lines = max(0, min(delta, len(self.content) - (self.first + self.height)))
        if lines == 0:
            return 0
        self.first += lines
        surface.scroll_region_up(n=lines)
        self._write_rows(surface=surface, screen_row=self.height - lines, count=lines)
        return lines

    def boundary_delta(self, direction: Direction) -> int:
        """Count the lines between the top row and the next component start.

        Args:
            direction: Look for the next start below (DOWN) or above (UP) the top row

        Returns:
            Line delta to that component start, 0 if there's none
        """
        if direction is Direction.DOWN:
            index: int | None = self.components.component_at_or_after(row=self.first + 1)
            if index is None:
                return len(self.content) - self.first
        else:
            if self.first == 0:
                return 0
            index = self.components.component_at_or_before(row=self.first - 1)
            if index is None:
                return -self.first
        return self.components[index].posy - self.first

    def scroll_to_component_boundary(self, surface: TerminalSurface, direction: Direction) -> int:
        """Scroll so that the next component in direction starts on the top row.

        Returns:
            Number of lines scrolled, negative when scrolling up
        """
        return self.scroll_by_lines(surface=surface, delta=self.boundary_delta(direction=direction))

    def page(self, surface: TerminalSurface, direction: Direction) -> int:
        """Scroll by one screen in direction."""
        return self.scroll_by_lines(surface=surface, delta=direction.value * max(1, self.height - 1))

    def first_visible_component(self) -> Component:
        index: int | None = self.components.component_at_or_before(row=self.first)
        return self.components[index if index is not None else 0]

    def last_visible_component(self) -> Component:
        index: int | None = self.components.component_at_or_before(row=self.first + self.height - 1)
        return self.components[index if index is not None else -1]

    def goto_top(self, surface: TerminalSurface) -> None:
        self.first = 0
        self.draw(surface=surface)

    def resize(self, surface: TerminalSurface, term_size: tuple[int, int]) -> None:
        """Lay the document out for a new terminal size and redraw it.

        Text is only wrapped again when the column width changed.
        """
        self.geo.resize(term_size=term_size)
        self.build()
        self.first = min(self.first, self.max_first)
        self.draw(surface=surface)
