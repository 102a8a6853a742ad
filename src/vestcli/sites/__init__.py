"""News sites supported by vestcli."""

from .base import NewsSite
from .danas import Danas
from .insajder import Insajder
from .n1 import N1

SITES: dict[str, NewsSite] = {site.name: site for site in (N1(), Danas(), Insajder())}

__all__: list[str] = ["SITES", "Danas", "Insajder", "N1", "NewsSite"]
