"""Feed screen for vestcli."""

import asyncio
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import ClassVar

from rich.text import Text
from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen

from ...client import NewsClient
from ...engine.blocks import ContentBlock
from ...engine.cursor import FeedCursor, HighlightColor
from ...engine.geometry import Geometry, View
from ...engine.viewport import Direction, TextPad
from ...exceptions import FetchError, LayoutError
from ...models import Feed, FeedEntry
from ...utils.error_handling import error_message, log_and_notify
from ..widgets import RIGHT_BUTTON, TextPadView
from .article import ArticleScreen
from .error import ErrorScreen

logger: logging.Logger = logging.getLogger(name=__name__)


class FeedScreen(Screen[None]):
    """Shows the feed entries and keeps one of them selected."""

    BINDINGS: ClassVar[list[Binding | tuple[str, str] | tuple[str, str, str]]] = [
        ("j", "move(1)", "Next article"),
        ("down", "move(1)", "Next article"),
        ("k", "move(-1)", "Previous article"),
        ("up", "move(-1)", "Previous article"),
        ("pagedown", "page(1)", "Page down"),
        ("pageup", "page(-1)", "Page up"),
        ("enter", "open_article", "Open article"),
        ("g", "go_top", "Newest (gg)"),
        ("r", "refresh_feed", "Refresh"),
        ("q", "app.quit", "Quit"),
    ]

    def __init__(  # noqa: PLR0913
        self,
        geo: Geometry,
        feed: Feed,
        client: NewsClient,
        date_format: str,
        reveal_new: bool = True,
    ) -> None:
        """Initialize the feed screen.

        Args:
            geo: Geometry shared with the article and error views
            feed: Feed whose entries are shown
            client: Client used to download articles and older entries
            date_format: strftime format of the publish times
            reveal_new: Show new entries when the feed is scrolled to the top
        """
        super().__init__()
        self.geo: Geometry = geo
        self.feed: Feed = feed
        self.client: NewsClient = client
        self.date_format: str = date_format
        self.reveal_new: bool = reveal_new
        self.cursor: FeedCursor | None = None
        self.read_entries: set[FeedEntry] = set()
        self.last_selected: int = 0
        self.loading_page: bool = False
        self.last_key: str = ""

    def compose(self) -> ComposeResult:
        """Define the content layout of the feed screen."""
        yield TextPadView(id="feed")

    @property
    def view(self) -> TextPadView:
        return self.query_one(selector="#feed", expect_type=TextPadView)

    def entry_blocks(self, entries: list[FeedEntry]) -> list[ContentBlock]:
        return [entry.to_block(date_format=self.date_format) for entry in entries]

    @contextmanager
    def feed_layout(self) -> Iterator[None]:
        """Lay text out at the feed width while another view may be showing."""
        previous: View = self.geo.view
        self.geo.change_view(view=View.FEED)
        try:
            yield
        finally:
            self.geo.change_view(view=previous)

    def draw_placeholder(self, message: str) -> None:
        """Show a single centered line instead of the feed."""
        grid = self.view.grid
        grid.clear()
        grid.move_to(x=0, y=grid.height // 2)
        grid.write_line(line=Text(message.center(self.view.size.width), style="dim"))
        self.view.sync()

    def build_feed(self) -> None:
        """Lay out every feed entry from scratch and draw the feed."""
        view: TextPadView = self.view
        self.geo.resize(term_size=view.term_size)
        if not len(self.feed):
            self.cursor = None
            self.draw_placeholder(message="Loading articles...")
            return
        try:
            with self.feed_layout():
                textpad = TextPad(blocks=self.entry_blocks(entries=self.feed.entries), geo=self.geo)
        except LayoutError as err:
            self.cursor = None
            view.grid.clear()
            view.sync()
            log_and_notify(app=self.app, error=err, title="Terminal too narrow", severity="warning")
            return
        self.cursor = FeedCursor(textpad=textpad, selected=min(self.last_selected, len(self.feed) - 1))
        for index, entry in enumerate(self.feed.entries):
            if entry in self.read_entries:
                HighlightColor.READ.apply(comp=textpad.components[index])
        textpad.reset_content()
        self.cursor.draw(surface=view.grid)
        view.sync()
        logger.debug(msg=f"Built feed of {len(self.feed)} entries with {self.geo!r}")

    def layout_feed(self) -> None:
        """Lay the feed out for the current size of the view and draw it."""
        self.geo.change_view(view=View.FEED)
        if self.cursor is None:
            self.build_feed()
            return
        try:
            self.cursor.resize(surface=self.view.grid, term_size=self.view.term_size)
        except LayoutError as err:
            self.last_selected = self.cursor.selected
            self.cursor = None
            self.view.grid.clear()
            log_and_notify(app=self.app, error=err, title="Terminal too narrow", severity="warning")
        self.view.sync()

    def on_text_pad_view_resized(self, message: TextPadView.Resized) -> None:
        self.layout_feed()

    def on_screen_resume(self) -> None:
        if self.is_mounted and self.view.size.height:
            self.layout_feed()
            self.app.check_refresh()

    def show_new_entries(self, entries: list[FeedEntry]) -> None:
        """Put freshly fetched entries in front of the feed on screen.

        The entries must already be in the feed model.
        """
        if self.cursor is None:
            if self.is_mounted and self.view.size.height:
                self.build_feed()
            return
        with self.feed_layout():
            count: int = self.cursor.prepend(
                surface=self.view.grid,
                blocks=self.entry_blocks(entries=entries),
                reveal=self.reveal_new,
            )
        self.view.sync()
        if count:
            self.notify(message=f"{count} new articles", title="Refresh", timeout=3)

    def mark_read(self, entry: FeedEntry) -> None:
        """Dim an opened entry."""
        self.read_entries.add(entry)
        if self.cursor is None:
            return
        try:
            index: int = self.feed.entries.index(entry)
        except ValueError:
            logger.error(msg=f"Opened entry {entry.title!r} isn't in the feed")
            return
        with self.feed_layout():
            self.cursor.mark(surface=self.view.grid, index=index, color=HighlightColor.READ)
        self.view.sync()

    def on_text_pad_view_wheel(self, message: TextPadView.Wheel) -> None:
        self.action_move(step=message.direction.value)

    def on_text_pad_view_clicked(self, message: TextPadView.Clicked) -> None:
        if message.button == RIGHT_BUTTON:
            self.app.exit()
            return
        if self.cursor is None:
            return
        self.last_key = ""
        hit_selected: bool = self.cursor.click(surface=self.view.grid, x=message.x, y=message.y)
        self.view.sync()
        if hit_selected:
            self.action_open_article()

    def action_move(self, step: int) -> None:
        """Select the next (1) or the previous (-1) entry."""
        self.last_key = ""
        if self.cursor is None:
            return
        at_end: bool = self.cursor.move(surface=self.view.grid, direction=Direction(step))
        self.view.sync()
        if at_end and not self.loading_page:
            self.load_next_page()

    def action_page(self, step: int) -> None:
        """Move one screen down (1) or up (-1)."""
        self.last_key = ""
        if self.cursor is None:
            return
        self.cursor.page(surface=self.view.grid, direction=Direction(step))
        self.view.sync()

    def action_go_top(self) -> None:
        """Select the newest entry when g is pressed twice."""
        if self.last_key != "g":
            self.last_key = "g"
            return
        self.last_key = ""
        if self.cursor is not None:
            self.cursor.goto_top(surface=self.view.grid)
            self.view.sync()

    def action_refresh_feed(self) -> None:
        """Check the sites for new articles now."""
        self.last_key = ""
        self.app.refresh_feed()

    def action_open_article(self) -> None:
        """Open the selected entry."""
        self.last_key = ""
        if self.cursor is None:
            return
        self.open_article(entry=self.feed[self.cursor.selected])

    @work(exclusive=True, group="article")
    async def open_article(self, entry: FeedEntry) -> None:
        """Download and show an article.

        Args:
            entry: Feed entry of the article
        """
        logger.info(msg=f"Opening {entry.title!r}")
        try:
            blocks: list[ContentBlock] = await asyncio.to_thread(self.client.fetch_body, entry)
        except FetchError as err:
            self.app.push_screen(
                screen=ErrorScreen(geo=self.geo, message=error_message(context="Couldn't get article content", error=err))
            )
            return
        self.mark_read(entry=entry)
        self.app.push_screen(screen=ArticleScreen(geo=self.geo, blocks=blocks))

    @work(exclusive=True, group="next_page")
    async def load_next_page(self) -> None:
        """Add the next page of older entries at the end of the feed."""
        page: int = self.feed.page + 1
        self.loading_page = True
        self.notify(message="Loading older articles...", title="Feed", timeout=2)
        try:
            batches: list[list[FeedEntry]] = await asyncio.to_thread(self.client.fetch_batches, page)
        except FetchError as err:
            self.loading_page = False
            self.app.push_screen(
                screen=ErrorScreen(geo=self.geo, message=error_message(context="Couldn't get next page", error=err))
            )
            return
        self.loading_page = False
        older: list[FeedEntry] = self.feed.extend_old_batches(batches=batches)
        if self.cursor is None:
            return
        with self.feed_layout():
            added: int = self.cursor.append(surface=self.view.grid, blocks=self.entry_blocks(entries=older))
            if added:
                self.cursor.move(surface=self.view.grid, direction=Direction.DOWN)
        self.view.sync()
        if not added:
            self.notify(message="No older articles", title="Feed", timeout=3)
