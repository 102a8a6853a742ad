"""Column layout derived from the terminal size and the current view."""

import logging
from enum import Enum

logger: logging.Logger = logging.getLogger(name=__name__)

FEED_WIDTH = 50
ARTICLE_WIDTH = 70


class View(Enum):
    """What the terminal is currently showing."""

    FEED = "feed"
    ARTICLE = "article"
    ERROR = "error"


class Geometry:
    """Size and horizontal position of the text column.

    One instance is shared by every view of a session; views read it when they
    lay out or draw their content.
    """

    def __init__(
        self,
        term_size: tuple[int, int],
        feed_width: int = FEED_WIDTH,
        article_width: int = ARTICLE_WIDTH,
    ) -> None:
        """Initialize the geometry for the feed view.

        Args:
            term_size: Terminal (width, height)
            feed_width: Maximum column width of the feed
            article_width: Maximum column width of articles and errors
        """
        self.feed_width: int = feed_width
        self.article_width: int = article_width
        self.term_width, self.term_height = term_size
        self.view: View = View.FEED
        self.max_width: int = feed_width
        self.width: int = 0
        self.startx: int = 0
        self._layout()

    def __repr__(self) -> str:
        return (
            f"Geometry(term={self.term_width}x{self.term_height}, "
            f"width={self.width}, startx={self.startx})"
        )

    def _layout(self) -> None:
        self.width = max(0, min(self.max_width, self.term_width))
        self.startx = max(0, (self.term_width - self.width) // 2)

    def change_view(self, view: View) -> None:
        """Switch the maximum column width to the one used by view."""
        self.view = view
        self.max_width = self.feed_width if view is View.FEED else self.article_width
        self._layout()

    def resize(self, term_size: tuple[int, int]) -> bool:
        """Update the terminal size.

        Args:
            term_size: New terminal (width, height)

        Returns:
            True if the column width changed and text has to be wrapped again
        """
        old_width: int = self.width
        self.term_width, self.term_height = term_size
        self._layout()
        logger.debug(msg=f"Resized to {self!r}")
        return self.width != old_width
