"""Main application class for vestcli."""

import asyncio
import logging
import sys
from importlib import metadata
from typing import ClassVar

from textual import work
from textual.app import App
from textual.binding import Binding

from ..client import NewsClient
from ..config import Configuration
from ..engine.geometry import Geometry
from ..exceptions import FetchError
from ..models import Feed, FeedEntry
from ..sites import SITES
from ..utils.error_handling import error_message, log_and_notify
from .screens import ErrorScreen, FeedScreen, HelpScreen

logger: logging.Logger = logging.getLogger(name=__name__)


class vestcli(App[None]):
    """A Textual app to read the latest news from N1, Danas and Insajder."""

    BINDINGS: ClassVar[list[Binding | tuple[str, str] | tuple[str, str, str]]] = [
        ("?", "toggle_help", "Help"),
        ("v", "show_version", "Show version"),
    ]

    CSS_PATH: str = "styles.tcss"

    def __init__(self) -> None:
        """Read the configuration and initialize the app."""
        super().__init__()

        try:
            # Load the configuration via the Configuration class sending it command line arguments
            self.configuration = Configuration(arguments=sys.argv[1:])

            self.client = NewsClient(
                sites=[SITES[name] for name in self.configuration.sites],
                timeout=self.configuration.timeout,
                cache_size=self.configuration.cache_size,
                clean_urls=self.configuration.clean_urls,
            )
        except Exception as e:
            logger.error(msg=f"Unexpected error: {e}")
            print(f"Error: {e}")
            sys.exit(1)

        # The real size is set when the first view is laid out
        self.geo = Geometry(
            term_size=(80, 24),
            feed_width=self.configuration.feed_width,
            article_width=self.configuration.article_width,
        )
        self.feed: Feed = self.load_feed() if self.configuration.resume else Feed(entries=[])
        self.is_loading: bool = False
        self.feed_screen = FeedScreen(
            geo=self.geo,
            feed=self.feed,
            client=self.client,
            date_format=self.configuration.date_format,
            reveal_new=self.configuration.reveal_new,
        )

    def load_feed(self) -> Feed:
        """Read the feed saved by the previous session.

        Returns:
            The saved feed, or an empty one if there's none or it can't be read
        """
        state_file = self.configuration.state_file
        try:
            return Feed.load(path=state_file, known_sites=SITES)
        except FileNotFoundError:
            logger.info(msg=f"No saved feed at {state_file}")
        except (OSError, ValueError) as err:
            logger.error(msg=f"Couldn't read the saved feed {state_file}: {err}")
        return Feed(entries=[])

    def save_feed(self) -> None:
        """Write the feed for the next session."""
        if not len(self.feed):
            return
        try:
            self.feed.save(path=self.configuration.state_file)
        except OSError as err:
            logger.error(msg=f"Couldn't save the feed to {self.configuration.state_file}: {err}")

    async def on_mount(self) -> None:
        """Show the feed and start checking for new articles."""
        self.push_screen(screen=self.feed_screen)
        self.set_interval(interval=1, callback=self.check_refresh)
        self.refresh_feed()

    def check_refresh(self) -> None:
        """Refresh the feed when the refresh interval has passed."""
        if not self.is_loading and self.feed.is_stale(interval=self.configuration.refresh_interval):
            self.refresh_feed()

    @work(exclusive=True, group="refresh")
    async def refresh_feed(self) -> None:
        """Fetch the newest entries of all sites and show the new ones."""
        self.is_loading = True
        try:
            batches: list[list[FeedEntry]] = await asyncio.to_thread(self.client.fetch_batches)
        except FetchError as err:
            self.feed.touch()
            if len(self.feed):
                log_and_notify(app=self, error=err, title="Refresh")
            else:
                self.push_screen(
                    screen=ErrorScreen(geo=self.geo, message=error_message(context="Couldn't get the feed", error=err))
                )
            return
        finally:
            self.is_loading = False
        new_entries: list[FeedEntry] = self.feed.merge_new_batches(batches=batches)
        self.feed_screen.show_new_entries(entries=new_entries)

    def action_show_version(self) -> None:
        """Show version information."""
        version_info: str = (
            f"vestcli version: {self.configuration.version}\n"
            f"Python: {sys.version.split()[0]}\n"
            f"Textual: {metadata.version(distribution_name='textual')}"
        )
        self.notify(
            title="Version Info",
            message=version_info,
            timeout=5,
            severity="information",
        )

    def action_toggle_help(self) -> None:
        """Toggle the help screen."""
        if isinstance(self.screen, HelpScreen):
            self.pop_screen()
        else:
            self.push_screen(screen=HelpScreen())

    def on_unmount(self) -> None:
        """Save the feed and clean up resources when app is closed."""
        self.save_feed()
        self.client.close()
