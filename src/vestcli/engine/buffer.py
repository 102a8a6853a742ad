"""Document buffer: an ordered sequence of laid out components."""

import bisect
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from rich.style import Style
from rich.text import Text

from ..exceptions import OutOfBuiltState
from .blocks import ContentBlock, build_block

logger: logging.Logger = logging.getLogger(name=__name__)


@dataclass
class BuiltContent:
    """Lines of a built component and where they start in the document."""

    lines: list[Text]
    posy: int
    style: Style | None = None


class Component:
    """A content block together with its laid out lines."""

    def __init__(self, block: ContentBlock) -> None:
        """Wrap a block; it has to be built before its lines can be read.

        Args:
            block: Content block to lay out
        """
        self.block: ContentBlock = block
        self._content: BuiltContent | None = None

    def __repr__(self) -> str:
        state: str = f"posy={self._content.posy}" if self._content else "unbuilt"
        return f"Component({self.block!r}, {state})"

    @property
    def is_built(self) -> bool:
        return self._content is not None

    def _built(self, attribute: str) -> BuiltContent:
        if self._content is None:
            raise OutOfBuiltState(f"Can't access {attribute} of {self!r} because it wasn't built")
        return self._content

    def build(self, width: int, posy: int) -> None:
        """Lay out the block at width, starting at row posy.

        A style set before the rebuild is kept.
        """
        style: Style | None = self._content.style if self._content else None
        self._content = BuiltContent(
            lines=build_block(block=self.block, width=width), posy=posy, style=style
        )

    @property
    def lines(self) -> list[Text]:
        return self._built(attribute="lines").lines

    @property
    def posy(self) -> int:
        return self._built(attribute="posy").posy

    @posy.setter
    def posy(self, value: int) -> None:
        self._built(attribute="posy").posy = value

    @property
    def style(self) -> Style | None:
        return self._built(attribute="style").style

    @style.setter
    def style(self, value: Style | None) -> None:
        self._built(attribute="style").style = value

    @property
    def height(self) -> int:
        return len(self.lines)

    def content(self, style: Style | None = None) -> list[Text]:
        """Get the lines painted with style, or with the stored style if None.

        Args:
            style: Style that overrides the stored one

        Returns:
            Copies of the lines with the style applied
        """
        style = style if style is not None else self.style
        if style is None:
            return list(self.lines)
        styled: list[Text] = []
        for line in self.lines:
            line = line.copy()
            line.stylize_before(style)
            styled.append(line)
        return styled


class DocumentBuffer:
    """Components laid out one after another at a common width.

    After every build each component starts where the previous one ends, so
    posy[i + 1] == posy[i] + height(i).
    """

    def __init__(self, blocks: Iterable[ContentBlock], width: int) -> None:
        """Create and build the buffer.

        Args:
            blocks: Content blocks in document order
            width: Width to lay the blocks out at

        Raises:
            LayoutError: If a block can't be laid out at width
        """
        self.items: list[Component] = [Component(block=block) for block in blocks]
        self.width: int = width
        posy = 0
        for comp in self.items:
            comp.build(width=width, posy=posy)
            posy += comp.height

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Component:
        return self.items[index]

    def __iter__(self) -> Iterator[Component]:
        return iter(self.items)

    @property
    def total_height(self) -> int:
        if not self.items:
            return 0
        last: Component = self.items[-1]
        return last.posy + last.height

    def rebuild(self, new_width: int) -> None:
        """Lay out the buffer again after a mutation or a resize.

        When the width is unchanged only unbuilt components are laid out and
        the rest just get their posy recomputed.

        Args:
            new_width: Width to lay the components out at
        """
        rewrap: bool = new_width != self.width
        logger.debug(msg=f"Rebuilding {len(self.items)} components at width {new_width} (rewrap={rewrap})")
        posy = 0
        for comp in self.items:
            if comp.is_built and not rewrap:
                comp.posy = posy
            else:
                comp.build(width=new_width, posy=posy)
            posy += comp.height
        self.width = new_width

    def prepend(self, blocks: Iterable[ContentBlock]) -> int:
        """Insert blocks in front of the document, keeping their order.

        The buffer has to be rebuilt before it's read again.

        Returns:
            Number of inserted components
        """
        new: list[Component] = [Component(block=block) for block in blocks]
        self.items[:0] = new
        return len(new)

    def append(self, blocks: Iterable[ContentBlock]) -> int:
        """Add blocks at the end of the document.

        The buffer has to be rebuilt before it's read again.

        Returns:
            Number of appended components
        """
        new: list[Component] = [Component(block=block) for block in blocks]
        self.items.extend(new)
        return len(new)

    def to_lines(self) -> list[Text]:
        """Flatten all components into the lines that are drawn."""
        return [line for comp in self.items for line in comp.content()]

    def component_at_or_before(self, row: int) -> int | None:
        """Find the component that owns row.

        Args:
            row: Row in the flattened document

        Returns:
            Index of the last component starting at or before row, or None if
            row is before the first component
        """
        index: int = bisect.bisect_right(self.items, row, key=lambda comp: comp.posy)
        return index - 1 if index > 0 else None

    def component_at_or_after(self, row: int) -> int | None:
        """Find the first component starting at or after row.

        Returns:
            Index of the component, or None if every component starts before row
        """
        index: int = bisect.bisect_left(self.items, row, key=lambda comp: comp.posy)
        return index if index < len(self.items) else None
