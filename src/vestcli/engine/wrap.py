"""Greedy word wrapping for vestcli."""

from rich.cells import cell_len

from ..exceptions import LayoutError


def wrap_text(text: str, width: int) -> list[str]:
    """Wrap text into lines narrower than width.

    Words are separated by single spaces, so runs of spaces (for example an
    indent) are kept. A line is flushed as soon as the next word would make it
    reach width. A word longer than width is never split, it is put on a line
    of its own, after the leading spaces when it is the first word.

    Args:
        text: Text to wrap
        width: Number of terminal cells available

    Returns:
        Wrapped lines, at least one (an empty string for empty text)

    Raises:
        LayoutError: If width is negative
    """
    if width < 0:
        raise LayoutError(f"Can't wrap text at negative width {width}")

    lines: list[str] = []
    buf = ""
    for word in text.split(" "):
        if buf.strip(" ") and cell_len(buf) + cell_len(word) >= width:
            lines.append(buf[:-1])
            buf = ""
        buf += word + " "
    lines.append(buf.rstrip(" "))
    return lines
