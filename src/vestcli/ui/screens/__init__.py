"""Screen modules for vestcli."""

from .article import ArticleScreen
from .error import ErrorScreen
from .feed import FeedScreen
from .help import HelpScreen

__all__: list[str] = [
    "ArticleScreen",
    "ErrorScreen",
    "FeedScreen",
    "HelpScreen",
]
