"""Selection cursor over the entries of a feed."""

import logging
from collections.abc import Iterable
from enum import Enum

from rich.style import Style
from rich.text import Text

from ..exceptions import SelectionOutOfRange
from .blocks import ContentBlock
from .buffer import Component
from .surface import TerminalSurface
from .viewport import Direction, TextPad

logger: logging.Logger = logging.getLogger(name=__name__)

# Number of entry boundaries a click may scroll to bring the entry on screen
MAX_CLICK_SCROLLS = 2


class HighlightColor(Enum):
    """Colors a feed entry can be painted with."""

    SELECTED = "selected"
    NOT_SELECTED = "not_selected"
    NEW = "new"
    NOT_NEW = "not_new"
    READ = "read"

    def to_style(self, prev: Style | None) -> Style | None:
        """Get the style this color gives an entry currently styled prev.

        NOT_SELECTED and NOT_NEW only reset entries that carry the color they
        remove, so for example a read entry stays dim.

        Returns:
            New style, or None if the entry keeps its style
        """
        if self is HighlightColor.SELECTED:
            return Style(color="red")
        if self is HighlightColor.NEW:
            return Style(color="blue")
        if self is HighlightColor.READ:
            return Style(dim=True)
        removed: str = "red" if self is HighlightColor.NOT_SELECTED else "blue"
        if prev is not None and prev.color is not None and prev.color.name == removed:
            return Style.null()
        return None

    def apply(self, comp: Component) -> bool:
        """Store the color on a component.

        Returns:
            True if the stored style changed and the component must be redrawn
        """
        new_style: Style | None = self.to_style(prev=comp.style)
        if new_style is None:
            return False
        comp.style = new_style
        return True

    def styled(self, comp: Component) -> list[Text]:
        """Get the component lines painted with this color without storing it."""
        return comp.content(style=self.to_style(prev=comp.style))


class FeedCursor:
    """Keeps one feed entry selected while the feed scrolls, grows and resizes.

    Every component of the text pad is a feed entry, so the selected index is
    both the component index and the entry index. Transitions un-highlight the
    old selection, scroll if needed, then highlight the new selection.
    """

    def __init__(self, textpad: TextPad, selected: int = 0) -> None:
        """Initialize the cursor.

        Args:
            textpad: Text pad holding one component per feed entry
            selected: Initially selected entry
        """
        self.textpad: TextPad = textpad
        self.selected: int = selected
        self._check_selected()

    @property
    def entry_count(self) -> int:
        return len(self.textpad.components)

    def _rows_end(self, index: int) -> int:
        """Get the first row after entry index, the document end for the last one."""
        if index + 1 < self.entry_count:
            return self.textpad.components[index + 1].posy
        return len(self.textpad.content)

    def entry_rows(self, index: int) -> tuple[int, int]:
        """Get the rows [start, end) that entry index covers.

        Raises:
            SelectionOutOfRange: If index isn't an entry
        """
        if not 0 <= index < self.entry_count:
            raise SelectionOutOfRange(f"Entry {index} is outside the feed of {self.entry_count} entries")
        return self.textpad.components[index].posy, self._rows_end(index=index)

    def _check_selected(self) -> None:
        if not self.entry_count:
            self.selected = 0
            return
        try:
            self.entry_rows(index=self.selected)
        except SelectionOutOfRange as err:
            clamped: int = max(0, min(self.selected, self.entry_count - 1))
            logger.error(msg=f"{err}, selecting {clamped} instead")
            self.selected = clamped

    def is_visible(self, index: int) -> bool:
        """Check whether any row of entry index is on screen."""
        start, end = self.entry_rows(index=index)
        first: int = self.textpad.first
        return start < first + self.textpad.height and end > first

    def _paint(self, surface: TerminalSurface, index: int, lines: list[Text]) -> None:
        """Write the on-screen rows of entry index."""
        start, end = self.entry_rows(index=index)
        first: int = self.textpad.first
        top: int = max(start, first)
        bottom: int = min(end, first + self.textpad.height)
        if top >= bottom:
            return
        surface.move_to(x=self.textpad.geo.startx, y=top - first)
        for line in lines[top - start : bottom - start]:
            surface.write_line(line=line)

    def redraw_selected(self, surface: TerminalSurface, is_selected: bool) -> None:
        """Paint the selected entry highlighted or with its own style."""
        self._check_selected()
        if not self.entry_count:
            return
        color = HighlightColor.SELECTED if is_selected else HighlightColor.NOT_SELECTED
        comp: Component = self.textpad.components[self.selected]
        self._paint(surface=surface, index=self.selected, lines=color.styled(comp=comp))

    def _repaint(self, surface: TerminalSurface, index: int) -> None:
        """Refresh the drawn lines of entry index after its style changed."""
        comp: Component = self.textpad.components[index]
        start, end = self.entry_rows(index=index)
        self.textpad.content[start:end] = comp.content()
        if index == self.selected:
            self._paint(surface=surface, index=index, lines=HighlightColor.SELECTED.styled(comp=comp))
        else:
            self._paint(surface=surface, index=index, lines=comp.content())

    def draw(self, surface: TerminalSurface) -> None:
        """Redraw the whole feed with the selection highlighted."""
        self.textpad.draw(surface=surface)
        self.redraw_selected(surface=surface, is_selected=True)

    def move(self, surface: TerminalSurface, direction: Direction) -> bool:
        """Select the previous or the next entry.

        The feed scrolls by one entry when the entry after the new selection
        (before it, when moving up) isn't fully on screen.

        Returns:
            True if moving down was attempted past the last entry
        """
        at_end = False
        self.redraw_selected(surface=surface, is_selected=False)
        if direction is Direction.UP:
            if self.selected > 0:
                self.selected -= 1
                previous: int = max(self.selected - 1, 0)
                if self.textpad.components[previous].posy < self.textpad.first:
                    self.textpad.scroll_to_component_boundary(surface=surface, direction=direction)
        elif self.selected < self.entry_count - 1:
            self.selected += 1
            next_row: int = self._rows_end(index=min(self.selected + 1, self.entry_count - 1))
            if next_row - self.textpad.first >= self.textpad.height:
                self.textpad.scroll_to_component_boundary(surface=surface, direction=direction)
        else:
            at_end = True
        self.redraw_selected(surface=surface, is_selected=True)
        return at_end

    def page(self, surface: TerminalSurface, direction: Direction) -> None:
        """Scroll by one screen and select the first entry starting on it.

        When the feed can't scroll any further the first or the last entry is
        selected instead.
        """
        if not self.entry_count:
            return
        self.redraw_selected(surface=surface, is_selected=False)
        if self.textpad.page(surface=surface, direction=direction) == 0:
            self.selected = 0 if direction is Direction.UP else self.entry_count - 1
        else:
            index: int | None = self.textpad.components.component_at_or_after(row=self.textpad.first)
            self.selected = index if index is not None else self.entry_count - 1
        self.redraw_selected(surface=surface, is_selected=True)

    def click(self, surface: TerminalSurface, x: int, y: int) -> bool:
        """Select the entry under a mouse click.

        Args:
            surface: Terminal to draw on
            x: Clicked column
            y: Clicked screen row

        Returns:
            True if the click hit the entry that was already selected
        """
        geo = self.textpad.geo
        if not geo.startx <= x < geo.startx + geo.width or not 0 <= y < self.textpad.height:
            return False
        row: int = self.textpad.first + y
        if row >= len(self.textpad.content):
            return False
        index: int | None = self.textpad.components.component_at_or_before(row=row)
        if index is None:
            return False
        if index == self.selected:
            return True

        self.redraw_selected(surface=surface, is_selected=False)
        self.selected = index
        start, end = self.entry_rows(index=index)
        for _ in range(MAX_CLICK_SCROLLS):
            if start < self.textpad.first:
                scrolled: int = self.textpad.scroll_to_component_boundary(surface=surface, direction=Direction.UP)
            elif end > self.textpad.first + self.textpad.height:
                scrolled = self.textpad.scroll_to_component_boundary(surface=surface, direction=Direction.DOWN)
            else:
                break
            if scrolled == 0:
                break
        self.redraw_selected(surface=surface, is_selected=True)
        return False

    def _new_entries(self) -> list[int]:
        return [
            i for i, comp in enumerate(self.textpad.components) if comp.style is not None and comp.style.color is not None and comp.style.color.name == "blue"
        ]

    def _keep_selected_visible(self, limit: int) -> None:
        """Move the top row down by whole entries until the selection fits on screen."""
        for _ in range(limit):
            start, end = self.entry_rows(index=self.selected)
            if end <= self.textpad.first + self.textpad.height or start <= self.textpad.first:
                return
            delta: int = self.textpad.boundary_delta(direction=Direction.DOWN)
            new_first: int = min(self.textpad.first + delta, self.textpad.max_first)
            if new_first <= self.textpad.first:
                return
            self.textpad.first = new_first

    def prepend(self, surface: TerminalSurface, blocks: Iterable[ContentBlock], reveal: bool = False) -> int:
        """Insert new entries in front of the feed.

        The selection keeps pointing at the same entry. Entries that were new
        before are painted normally and the inserted ones are painted as new.

        Args:
            surface: Terminal to draw on
            blocks: Blocks of the new entries, newest first
            reveal: Show the new entries if the feed is scrolled to the top;
                otherwise the rows on screen stay where they are

        Returns:
            Number of inserted entries
        """
        previously_new: list[int] = self._new_entries()
        num_new: int = self.textpad.components.prepend(blocks=blocks)
        if num_new == 0:
            return 0

        self.textpad.components.rebuild(new_width=self.textpad.geo.width)
        for index in previously_new:
            HighlightColor.NOT_NEW.apply(comp=self.textpad.components[index + num_new])
        for index in range(num_new):
            HighlightColor.NEW.apply(comp=self.textpad.components[index])
        self.textpad.reset_content()
        if num_new == self.entry_count:
            self.selected = 0
            self.textpad.first = 0
            self.draw(surface=surface)
            logger.info(msg=f"Prepended {num_new} entries to an empty feed")
            return num_new
        self.selected += num_new
        self._check_selected()
        shift: int = self.textpad.components[num_new].posy
        logger.info(msg=f"Prepended {num_new} entries ({shift} rows), reveal={reveal}")

        if reveal and self.textpad.first == 0:
            self._keep_selected_visible(limit=num_new)
            self.draw(surface=surface)
            return num_new

        self.textpad.first += shift
        if self.textpad.first > self.textpad.max_first:
            # The old entries didn't fill the screen
            self.textpad.first = self.textpad.max_first
            self.draw(surface=surface)
            return num_new
        for index in previously_new:
            if self.is_visible(index=index + num_new):
                self._repaint(surface=surface, index=index + num_new)
        return num_new

    def append(self, surface: TerminalSurface, blocks: Iterable[ContentBlock]) -> int:
        """Add older entries at the end of the feed.

        Rows of the new entries that fall on screen are drawn.

        Returns:
            Number of appended entries
        """
        old_length: int = len(self.textpad.content)
        num_added: int = self.textpad.components.append(blocks=blocks)
        if num_added == 0:
            return 0
        self.textpad.build()
        if num_added == self.entry_count:
            self.draw(surface=surface)
            logger.info(msg=f"Appended {num_added} entries to an empty feed")
            return num_added
        screen_row: int = max(0, old_length - self.textpad.first)
        if screen_row < self.textpad.height:
            surface.move_to(x=self.textpad.geo.startx, y=screen_row)
            start: int = self.textpad.first + screen_row
            for line in self.textpad.content[start : self.textpad.first + self.textpad.height]:
                surface.write_line(line=line)
        logger.info(msg=f"Appended {num_added} entries")
        return num_added

    def mark(self, surface: TerminalSurface, index: int, color: HighlightColor) -> bool:
        """Store a color on entry index and repaint it if it changed.

        Returns:
            True if the entry changed
        """
        try:
            comp: Component = self.textpad.components[index]
            self.entry_rows(index=index)
        except (IndexError, SelectionOutOfRange) as err:
            logger.error(msg=f"Can't mark entry {index}: {err}")
            return False
        if not color.apply(comp=comp):
            return False
        self._repaint(surface=surface, index=index)
        return True

    def resize(self, surface: TerminalSurface, term_size: tuple[int, int]) -> None:
        """Lay the feed out for a new terminal size, keeping the selection on screen."""
        self.textpad.geo.resize(term_size=term_size)
        self.textpad.build()
        if not self.entry_count:
            self.textpad.first = 0
            self.draw(surface=surface)
            return
        start, _ = self.entry_rows(index=self.selected)
        if not self.is_visible(index=self.selected):
            self.textpad.first = start
        self.textpad.first = min(self.textpad.first, self.textpad.max_first)
        self.draw(surface=surface)

    def goto_top(self, surface: TerminalSurface) -> None:
        self.selected = 0
        self.textpad.first = 0
        self.draw(surface=surface)
