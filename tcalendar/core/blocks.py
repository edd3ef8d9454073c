from __future__ import annotations  # allows forward references in type hints
from abc import ABC, abstractmethod
import typing
from io import StringIO
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text


class Block:
    """Immutable rectangle of text lines. Width is the longest line."""

    def __init__(self, lines: typing.Iterable[str]) -> None:
        self._lines: tuple[str, ...] = tuple(lines)

    @property
    def lines(self) -> tuple[str, ...]:
        return self._lines

    @property
    def height(self) -> int:
        return len(self._lines)

    @property
    def width(self) -> int:
        return max((len(line) for line in self._lines), default=0)

    def padded_lines(self, width: int | None = None, height: int | None = None) -> list[str]:
        width = self.width if width is None else width
        height = self.height if height is None else height
        lines = [line.ljust(width) for line in self._lines]
        lines.extend(' ' * width for _ in range(height - len(lines)))
        return lines

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Block):
            return NotImplemented
        return self._lines == other._lines

    def __hash__(self) -> int:
        return hash(self._lines)

    def __repr__(self) -> str:
        return f'Block({list(self._lines)!r})'

    def __str__(self) -> str:
        return '\n'.join(line.rstrip() for line in self._lines)


class BlockComposer(ABC):
    """Text composition operations the calendar page is built with."""

    @abstractmethod
    def make_block(self, text: str) -> typing.Any:
        ...

    @abstractmethod
    def stack_vertical(self, top: typing.Any, bottom: typing.Any) -> typing.Any:
        ...

    @abstractmethod
    def concat_horizontal(self, left: typing.Any, right: typing.Any) -> typing.Any:
        ...

    @abstractmethod
    def normalize_heights(self, blocks: typing.Sequence[typing.Any]) -> list[typing.Any]:
        ...

    @abstractmethod
    def format_as_table(self, rows: typing.Sequence[typing.Sequence[typing.Any]]) -> typing.Any:
        ...


BORDERS: dict[str, box.Box] = {
    'ascii': box.ASCII2,
    'box': box.SQUARE,
}


class TextBlockComposer(BlockComposer):
    def __init__(self, border_style: str = 'ascii') -> None:
        # Unknown styles raise KeyError here, not at render time
        self.border: box.Box = BORDERS[border_style]

    def make_block(self, text: str) -> Block:
        return Block(text.split('\n'))

    def stack_vertical(self, top: Block, bottom: Block) -> Block:
        width = max(top.width, bottom.width)
        return Block(top.padded_lines(width) + bottom.padded_lines(width))

    def concat_horizontal(self, left: Block, right: Block) -> Block:
        height = max(left.height, right.height)
        left_lines = left.padded_lines(height=height)
        right_lines = right.padded_lines(height=height)
        return Block(a + b for a, b in zip(left_lines, right_lines))

    def normalize_heights(self, blocks: typing.Sequence[Block]) -> list[Block]:
        height = max((block.height for block in blocks), default=0)
        return [Block(block.padded_lines(height=height)) for block in blocks]

    def format_as_table(self, rows: typing.Sequence[typing.Sequence[Block]]) -> Block:
        if not rows:
            return Block([])

        column_count = max(len(row) for row in rows)
        empty = Block([''])
        grid = [list(row) + [empty] * (column_count - len(row)) for row in rows]
        column_widths = [max(row[i].width for row in grid) for i in range(column_count)]

        table = Table(box=self.border, show_header=False, show_lines=True, padding=(0, 1))
        for _ in range(column_count):
            table.add_column(no_wrap=True)
        for row in grid:
            # Text keeps descriptions like "[draft]" from being read as markup
            table.add_row(*(Text('\n'.join(cell.lines)) for cell in row))

        buffer = StringIO()
        console = Console(
            file=buffer,
            width=sum(column_widths) + 3 * column_count + 1,
            color_system=None,
            highlight=False
        )
        console.print(table)
        return Block(buffer.getvalue().rstrip('\n').split('\n'))
