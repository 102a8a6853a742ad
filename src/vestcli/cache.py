"""Cache module for vestcli."""

import logging
from collections import OrderedDict
from typing import Any

logger: logging.Logger = logging.getLogger(name=__name__)


class LimitedSizeDict(OrderedDict):
    """A dictionary of at most 'max_size' items that drops the least recently used one when full.

    Used to keep parsed articles around so opening the same entry twice doesn't
    download it again.
    """

    def __init__(self, max_size: int) -> None:
        """Initialize the LimitedSizeDict.

        Args:
            max_size: Maximum number of items to store in the dictionary
        """
        self.max_size: int = max_size
        super().__init__()

    def __getitem__(self, key) -> Any:
        """Get an item and mark it as recently used."""
        value: Any = super().__getitem__(key)
        self.move_to_end(key)
        return value

    def __setitem__(self, key, value) -> None:
        """Set an item, dropping the least recently used one if full.

        Args:
            key: Dictionary key
            value: Value to store
        """
        if key in self:
            self.move_to_end(key)
        super().__setitem__(key, value)
        if len(self) > self.max_size:
            oldest, _ = self.popitem(last=False)
            logger.debug(msg=f"Dropped {oldest!r} from cache")
