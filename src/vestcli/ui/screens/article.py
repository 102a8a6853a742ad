"""Article screen for vestcli."""

import logging
from typing import ClassVar

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen

from ...engine.blocks import ContentBlock
from ...engine.geometry import Geometry, View
from ...engine.viewport import Direction, TextPad
from ...exceptions import LayoutError
from ...utils.error_handling import log_and_notify
from ..widgets import RIGHT_BUTTON, TextPadView

logger: logging.Logger = logging.getLogger(name=__name__)

# Lines scrolled per turn of the mouse wheel
WHEEL_LINES = 3


class ArticleScreen(Screen[None]):
    """Shows the content blocks of one article as a scrollable text pad."""

    BINDINGS: ClassVar[list[Binding | tuple[str, str] | tuple[str, str, str]]] = [
        ("j", "scroll_lines(1)", "Line down"),
        ("down", "scroll_lines(1)", "Line down"),
        ("k", "scroll_lines(-1)", "Line up"),
        ("up", "scroll_lines(-1)", "Line up"),
        ("pagedown", "page(1)", "Page down"),
        ("space", "page(1)", "Page down"),
        ("pageup", "page(-1)", "Page up"),
        ("g", "go_top", "Top (gg)"),
        ("q", "back", "Back"),
        ("backspace", "back", "Back"),
        ("escape", "back", "Back"),
    ]

    def __init__(self, geo: Geometry, blocks: list[ContentBlock]) -> None:
        """Initialize the article screen.

        Args:
            geo: Geometry shared with the feed
            blocks: Content blocks of the article
        """
        super().__init__()
        self.geo: Geometry = geo
        self.blocks: list[ContentBlock] = blocks
        self.textpad: TextPad | None = None
        self.last_key: str = ""

    def compose(self) -> ComposeResult:
        """Define the content layout of the article screen."""
        yield TextPadView(id="article")

    @property
    def view(self) -> TextPadView:
        return self.query_one(selector="#article", expect_type=TextPadView)

    def layout_article(self) -> None:
        """Lay the article out for the current size of the view and draw it."""
        self.geo.change_view(view=View.ARTICLE)
        view: TextPadView = self.view
        try:
            if self.textpad is None:
                self.geo.resize(term_size=view.term_size)
                self.textpad = TextPad(blocks=self.blocks, geo=self.geo)
                self.textpad.draw(surface=view.grid)
            else:
                self.textpad.resize(surface=view.grid, term_size=view.term_size)
        except LayoutError as err:
            self.textpad = None
            view.grid.clear()
            log_and_notify(app=self.app, error=err, title="Terminal too narrow", severity="warning")
        view.sync()

    def on_text_pad_view_resized(self, message: TextPadView.Resized) -> None:
        self.layout_article()

    def on_screen_resume(self) -> None:
        if self.textpad is not None:
            self.layout_article()

    def on_text_pad_view_wheel(self, message: TextPadView.Wheel) -> None:
        self.action_scroll_lines(lines=message.direction.value * WHEEL_LINES)

    def on_text_pad_view_clicked(self, message: TextPadView.Clicked) -> None:
        if message.button == RIGHT_BUTTON:
            self.action_back()

    def action_scroll_lines(self, lines: int) -> None:
        """Scroll the article by a number of lines, up when negative."""
        self.last_key = ""
        if self.textpad is None:
            return
        self.textpad.scroll_by_lines(surface=self.view.grid, delta=lines)
        self.view.sync()

    def action_page(self, step: int) -> None:
        """Scroll the article by one screen."""
        self.last_key = ""
        if self.textpad is None:
            return
        self.textpad.page(surface=self.view.grid, direction=Direction(step))
        self.view.sync()

    def action_go_top(self) -> None:
        """Go to the start of the article when g is pressed twice."""
        if self.last_key != "g":
            self.last_key = "g"
            return
        self.last_key = ""
        if self.textpad is not None:
            self.textpad.goto_top(surface=self.view.grid)
            self.view.sync()

    def action_back(self) -> None:
        """Return to the feed."""
        self.dismiss()
