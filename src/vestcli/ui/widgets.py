"""Custom widgets for vestcli."""

import logging
import webbrowser

from rich.segment import Segment
from textual import events, on
from textual.geometry import Region, Size
from textual.message import Message
from textual.strip import Strip
from textual.widget import Widget
from textual.widgets import Markdown, MarkdownViewer

from ..engine.surface import ScreenGrid
from ..engine.viewport import Direction

logger: logging.Logger = logging.getLogger(name=__name__)

# Shared constants
ALLOW_IN_FULL_SCREEN: list[str] = [
    "pageup",
    "pagedown",
    "down",
    "up",
    "home",
    "end",
]

LEFT_BUTTON = 1
RIGHT_BUTTON = 3


class LinkableMarkdownViewer(MarkdownViewer):
    """An extended MarkdownViewer that allows web links to be clicked."""

    @on(message_type=Markdown.LinkClicked)
    def handle_link(self, event: Markdown.LinkClicked) -> None:
        """Open links in the default web browser.

        Args:
            event: Link clicked event
        """
        if event.href:
            event.prevent_default()
            webbrowser.open(url=event.href)


class TextPadView(Widget):
    """Shows the screen grid the document engine draws on.

    The engine issues its drawing commands to `grid`; `sync` then repaints
    the rows they touched.
    """

    DEFAULT_CSS = """
    TextPadView {
        width: 1fr;
        height: 1fr;
    }
    """

    class Clicked(Message):
        """Posted when a mouse button is pressed on the view."""

        def __init__(self, x: int, y: int, button: int) -> None:
            super().__init__()
            self.x: int = x
            self.y: int = y
            self.button: int = button

    class Wheel(Message):
        """Posted when the mouse wheel turns over the view."""

        def __init__(self, direction: Direction) -> None:
            super().__init__()
            self.direction: Direction = direction

    class Resized(Message):
        """Posted after the view got a new size and its grid was blanked."""

        def __init__(self, size: Size) -> None:
            super().__init__()
            self.size: Size = size

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.grid: ScreenGrid = ScreenGrid(height=0)

    @property
    def term_size(self) -> tuple[int, int]:
        """Get the (width, height) the engine lays its content out for."""
        return self.size.width, self.size.height

    def render_line(self, y: int) -> Strip:
        """Render one row of the grid.

        Args:
            y: Row of the widget

        Returns:
            The row as a strip as wide as the widget
        """
        width: int = self.size.width
        row = self.grid.rows[y] if 0 <= y < self.grid.height else None
        if row is None:
            return Strip.blank(cell_length=width, style=self.rich_style)
        x, line = row
        segments: list[Segment] = [Segment(text=" " * x)]
        segments.extend(line.render(console=self.app.console, end=""))
        strip = Strip(segments=segments).apply_style(style=self.rich_style)
        return strip.extend_cell_length(cell_length=width, style=self.rich_style).crop(start=0, end=width)

    def sync(self) -> None:
        """Repaint the rows changed since the last sync."""
        damaged: set[int] | None = self.grid.take_damage()
        if damaged is None:
            self.refresh()
            return
        for y in damaged:
            self.refresh(Region(x=0, y=y, width=self.size.width, height=1))

    def on_resize(self, event: events.Resize) -> None:
        self.grid.resize(height=event.size.height)
        logger.debug(msg=f"Text pad view resized to {event.size}")
        self.post_message(self.Resized(size=event.size))

    def on_click(self, event: events.Click) -> None:
        if event.button == LEFT_BUTTON:
            self.post_message(self.Clicked(x=event.x, y=event.y, button=event.button))

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if event.button == RIGHT_BUTTON:
            self.post_message(self.Clicked(x=event.x, y=event.y, button=event.button))

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        event.stop()
        self.post_message(self.Wheel(direction=Direction.DOWN))

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        event.stop()
        self.post_message(self.Wheel(direction=Direction.UP))
