"""Content blocks and the builders that lay them out as styled lines."""

from collections.abc import Callable
from dataclasses import dataclass

from rich.cells import cell_len, set_cell_size
from rich.style import Style
from rich.text import Text

from ..exceptions import LayoutError
from .wrap import wrap_text

PARAGRAPH_INDENT = 4
# Border, padding and margin on each side of a box
BOX_MARGIN = 3

TITLE_STYLE = Style(bold=True, bgcolor="grey23")
BOLD_STYLE = Style(bold=True)


@dataclass(frozen=True)
class Title:
    """Article or page title."""

    text: str


@dataclass(frozen=True)
class Subtitle:
    """Section heading inside an article."""

    text: str


@dataclass(frozen=True)
class Lead:
    """Emphasized introduction of an article."""

    text: str


@dataclass(frozen=True)
class Paragraph:
    """Plain paragraph of body text."""

    text: str


@dataclass(frozen=True)
class Boxed:
    """One or more paragraphs drawn inside a frame (quotes and feed entries)."""

    paragraphs: tuple[str, ...]

    def __post_init__(self) -> None:
        """Store paragraphs as a tuple so the block stays hashable."""
        object.__setattr__(self, "paragraphs", tuple(self.paragraphs))


ContentBlock = Title | Subtitle | Lead | Paragraph | Boxed


def _normalize(text: str) -> str:
    """Collapse newlines, tabs and repeated spaces into single spaces."""
    return " ".join(text.split())


def build_paragraph(text: str, width: int) -> list[Text]:
    """Build an indented paragraph preceded by a blank line.

    Raises:
        LayoutError: If width can't fit the indent and a character
    """
    if width <= PARAGRAPH_INDENT:
        raise LayoutError(f"Paragraph needs more than {PARAGRAPH_INDENT} columns, got {width}")
    indented: str = " " * PARAGRAPH_INDENT + _normalize(text=text)
    return [Text()] + [Text(line) for line in wrap_text(text=indented, width=width)]


def build_title(text: str, width: int) -> list[Text]:
    """Build a centered, highlighted title preceded by a blank line."""
    if width < 1:
        raise LayoutError(f"Title needs at least one column, got {width}")
    lines: list[Text] = [Text()]
    for line in wrap_text(text=_normalize(text=text), width=width):
        indent: str = " " * max(0, (width - cell_len(line)) // 2)
        lines.append(Text.assemble(indent, (line, TITLE_STYLE), indent))
    return lines


def build_lead(text: str, width: int) -> list[Text]:
    """Build a bold paragraph."""
    lines: list[Text] = build_paragraph(text=text, width=width)
    for line in lines:
        line.stylize(BOLD_STYLE)
    return lines


def build_subtitle(text: str, width: int) -> list[Text]:
    """Build a bold paragraph with an extra blank line above it."""
    return [Text()] + build_lead(text=text, width=width)


def build_boxed(paragraphs: tuple[str, ...], width: int) -> list[Text]:
    """Draw paragraphs inside a box frame.

    Every returned row is exactly width cells wide so the frame borders line
    up. The first row is blank and separates the box from what comes before it.

    Raises:
        LayoutError: If the frame doesn't fit
    """
    if width < 2 * BOX_MARGIN:
        raise LayoutError(f"Box needs at least {2 * BOX_MARGIN} columns, got {width}")
    inner: int = width - 2 * BOX_MARGIN

    rows: list[str] = []
    for i, paragraph in enumerate(paragraphs or ("",)):
        if i > 0:
            rows.append("")
        rows.extend(wrap_text(text=_normalize(text=paragraph), width=inner))

    lines: list[Text] = [Text(" " * width), Text(f" ┌{'─' * (width - 4)}┐ ")]
    for row in rows:
        if cell_len(row) > inner:
            row = set_cell_size(row, max(0, inner - 1)) + "…"
        lines.append(Text(f" │ {set_cell_size(row, inner)} │ "))
    lines.append(Text(f" └{'─' * (width - 4)}┘ "))
    return lines


BUILDERS: dict[type, Callable[[ContentBlock, int], list[Text]]] = {
    Title: lambda block, width: build_title(text=block.text, width=width),  # type: ignore[union-attr]
    Subtitle: lambda block, width: build_subtitle(text=block.text, width=width),  # type: ignore[union-attr]
    Lead: lambda block, width: build_lead(text=block.text, width=width),  # type: ignore[union-attr]
    Paragraph: lambda block, width: build_paragraph(text=block.text, width=width),  # type: ignore[union-attr]
    Boxed: lambda block, width: build_boxed(paragraphs=block.paragraphs, width=width),  # type: ignore[union-attr]
}


def build_block(block: ContentBlock, width: int) -> list[Text]:
    """Lay out any content block at the given width.

    Args:
        block: Block to build
        width: Number of terminal cells available

    Returns:
        Styled lines of the block

    Raises:
        LayoutError: If the block can't be laid out at width
    """
    try:
        builder = BUILDERS[type(block)]
    except KeyError:
        raise TypeError(f"Unknown content block: {block!r}") from None
    return builder(block, width)
