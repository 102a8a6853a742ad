"""Exceptions for vestcli."""


class LayoutError(ValueError):
    """Raised when a component can't be laid out at the requested width."""


class OutOfBuiltState(RuntimeError):
    """Raised when lines, posy or style of an unbuilt component are accessed.

    This is a programming error: components must be built before they are read.
    """


class SelectionOutOfRange(IndexError):
    """Raised when the selected feed entry index points outside the feed."""


class FetchError(Exception):
    """Raised when a feed or an article couldn't be fetched."""


class ParseError(FetchError):
    """Raised when fetched HTML doesn't contain any usable content."""
