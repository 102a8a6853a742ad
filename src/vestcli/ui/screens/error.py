"""Error screen for vestcli."""

import logging
from typing import ClassVar

from rich.style import Style
from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen

from ...engine.blocks import Boxed
from ...engine.buffer import Component
from ...engine.geometry import Geometry, View
from ...exceptions import LayoutError
from ..widgets import RIGHT_BUTTON, TextPadView

logger: logging.Logger = logging.getLogger(name=__name__)

ERROR_STYLE = Style(color="red")


class ErrorScreen(Screen[None]):
    """Shows an error message in a red box in the middle of the terminal."""

    BINDINGS: ClassVar[list[Binding | tuple[str, str] | tuple[str, str, str]]] = [
        ("q", "back", "Back"),
        ("backspace", "back", "Back"),
        ("escape", "back", "Back"),
        ("enter", "back", "Back"),
    ]

    def __init__(self, geo: Geometry, message: str) -> None:
        """Initialize the error screen.

        Args:
            geo: Geometry shared with the other views
            message: Error message to show
        """
        super().__init__()
        self.geo: Geometry = geo
        self.message: str = message
        logger.error(msg=message)

    def compose(self) -> ComposeResult:
        """Define the content layout of the error screen."""
        yield TextPadView(id="error")

    @property
    def view(self) -> TextPadView:
        return self.query_one(selector="#error", expect_type=TextPadView)

    def error_lines(self) -> list[Text]:
        """Lay the message out in a box at the current width.

        Falls back to the bare message when the terminal is too narrow for a box.
        """
        component = Component(block=Boxed(paragraphs=(self.message,)))
        try:
            component.build(width=self.geo.width, posy=0)
        except LayoutError as err:
            logger.warning(msg=f"Showing the error without a box: {err}")
            return [Text(self.message, style=ERROR_STYLE)]
        return component.content(style=ERROR_STYLE)

    def draw(self) -> None:
        view: TextPadView = self.view
        self.geo.change_view(view=View.ERROR)
        self.geo.resize(term_size=view.term_size)
        lines: list[Text] = self.error_lines()
        starty: int = max(0, (self.geo.term_height - len(lines)) // 2)
        view.grid.clear()
        view.grid.move_to(x=self.geo.startx, y=starty)
        for line in lines:
            view.grid.write_line(line=line)
        view.sync()

    def on_text_pad_view_resized(self, message: TextPadView.Resized) -> None:
        self.draw()

    def on_screen_resume(self) -> None:
        if self.is_mounted and self.view.size.height:
            self.draw()

    def on_text_pad_view_clicked(self, message: TextPadView.Clicked) -> None:
        if message.button == RIGHT_BUTTON:
            self.action_back()

    def action_back(self) -> None:
        """Close the error and return to the previous view."""
        self.dismiss()
