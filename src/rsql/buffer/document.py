"""Line-addressable text storage for the editor buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .validation import OutOfRangeError

LINE_SEPARATOR = "\n"
BLOCK_SIZE = 256  # lines a block may hold before it splits


def _width(lines: Sequence[str]) -> int:
    """Characters spanned by ``lines`` with one separator each."""

    return sum(len(line) for line in lines) + len(lines)


class _FenwickTree:
    """Prefix sums over per-block totals.

    ``prefix(n)`` sums the first ``n`` entries and ``find(offset)`` returns the
    entry containing ``offset``; both run in ``O(log n)``.
    """

    def __init__(self) -> None:
        self._tree: List[int] = [0]
        self._size = 0

    def rebuild(self, values: Iterable[int]) -> None:
        totals = list(values)
        size = len(totals)
        tree = [0] * (size + 1)
        for position, value in enumerate(totals, start=1):
            tree[position] += value
            parent = position + (position & -position)
            if parent <= size:
                tree[parent] += tree[position]
        self._tree = tree
        self._size = size

    def add(self, entry: int, delta: int) -> None:
        position = entry + 1
        while position <= self._size:
            self._tree[position] += delta
            position += position & -position

    def prefix(self, count: int) -> int:
        total = 0
        position = count
        while position > 0:
            total += self._tree[position]
            position -= position & -position
        return total

    def find(self, offset: int) -> int:
        position = 0
        remaining = offset
        step = 1 << self._size.bit_length()
        while step:
            candidate = position + step
            if candidate <= self._size and self._tree[candidate] <= remaining:
                position = candidate
                remaining -= self._tree[candidate]
            step >>= 1
        return position


@dataclass(slots=True)
class _LineBlock:
    lines: List[str]
    width: int = 0

    @classmethod
    def of(cls, lines: List[str]) -> "_LineBlock":
        return cls(lines, _width(lines))

    def measure(self) -> None:
        self.width = _width(self.lines)

    def split(self, size: int) -> List["_LineBlock"]:
        return [
            _LineBlock.of(self.lines[start : start + size])
            for start in range(0, len(self.lines), size)
        ]


class TextStore:
    """Mutable character sequence addressable by index or by line.

    Indices count Unicode code points. The store always holds at least one
    (possibly empty) line; a trailing separator opens an empty last line.

    Lines live in blocks of at most ``block_size`` entries. Two Fenwick trees
    over the blocks track line counts and character widths, so locating a line
    or index costs ``O(log blocks + block_size)``. Splitting or joining lines
    only touches one block; the trees are rebuilt over blocks, not lines, when
    a block splits or empties.
    """

    def __init__(self, text: str = "", *, block_size: int = BLOCK_SIZE) -> None:
        if block_size < 2:
            raise ValueError("block_size must be at least 2")
        self._block_size = block_size
        lines = text.split(LINE_SEPARATOR)
        step = max(block_size // 2, 1)
        self._blocks: List[_LineBlock] = [
            _LineBlock.of(lines[start : start + step])
            for start in range(0, len(lines), step)
        ]
        self._length = len(text)
        self._line_count = len(lines)
        self._line_totals = _FenwickTree()
        self._width_totals = _FenwickTree()
        self._reindex()

    @classmethod
    def from_text(cls, text: str, *, block_size: int = BLOCK_SIZE) -> "TextStore":
        return cls(text, block_size=block_size)

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return self.text

    @property
    def text(self) -> str:
        return LINE_SEPARATOR.join(self._iter_lines())

    @property
    def len_chars(self) -> int:
        return self._length

    @property
    def line_count(self) -> int:
        return self._line_count

    @property
    def block_count(self) -> int:
        return len(self._blocks)

    def lines(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._iter_lines())

    def get_line(self, line: int) -> Optional[str]:
        if 0 <= line < self._line_count:
            block, offset = self._block_of(line)
            return self._blocks[block].lines[offset]
        return None

    def line_length(self, line: int) -> int:
        self._check_line(line)
        block, offset = self._block_of(line)
        return len(self._blocks[block].lines[offset])

    def line_to_char(self, line: int) -> int:
        self._check_line(line)
        block, offset = self._block_of(line)
        return self._width_totals.prefix(block) + _width(
            self._blocks[block].lines[:offset]
        )

    def char_to_line(self, index: int) -> int:
        self._check_index(index)
        block, offset, _ = self._seek(index)
        return self._line_totals.prefix(block) + offset

    def char(self, index: int) -> str:
        if index < 0 or index >= self._length:
            raise OutOfRangeError(f"Character index {index} out of range", index=index)
        block, offset, column = self._seek(index)
        text = self._blocks[block].lines[offset]
        return text[column] if column < len(text) else LINE_SEPARATOR

    def slice(self, start: int, end: int) -> str:
        self._check_range(start, end)
        block, offset, head = self._seek(start)
        remaining = end - start
        parts: List[str] = []
        for text in self._iter_lines(block, offset):
            chunk = text[head : head + remaining]
            parts.append(chunk)
            remaining -= len(chunk)
            if remaining == 0:
                break
            remaining -= 1
            head = 0
        return LINE_SEPARATOR.join(parts)

    def insert_char(self, index: int, char: str) -> None:
        if len(char) != 1:
            raise ValueError("insert_char expects exactly one character")
        self.insert(index, char)

    def insert(self, index: int, text: str) -> None:
        self._check_index(index)
        if not text:
            return
        block, offset, column = self._seek(index)
        current = self._blocks[block].lines[offset]
        merged = current[:column] + text + current[column:]
        self._replace(block, offset, offset + 1, merged.split(LINE_SEPARATOR))
        self._length += len(text)

    def remove(self, start: int, end: int) -> None:
        """Remove the characters in ``[start, end)``."""

        self._check_range(start, end)
        if start == end:
            return
        first, head_offset, head = self._seek(start)
        last, tail_offset, tail = self._seek(end)
        first_block = self._blocks[first]
        last_block = self._blocks[last]
        joined = (
            first_block.lines[head_offset][:head]
            + last_block.lines[tail_offset][tail:]
        )
        if first == last:
            self._replace(first, head_offset, tail_offset + 1, [joined])
        else:
            first_block.lines[head_offset:] = [joined]
            del last_block.lines[: tail_offset + 1]
            del self._blocks[first + 1 : last]
            first_block.measure()
            last_block.measure()
            self._reindex()
        self._length -= end - start

    def _replace(self, block: int, start: int, stop: int, lines: List[str]) -> None:
        target = self._blocks[block]
        removed = target.lines[start:stop]
        target.lines[start:stop] = lines
        delta = _width(lines) - _width(removed)
        target.width += delta
        if len(target.lines) > self._block_size:
            self._blocks[block : block + 1] = target.split(self._block_size // 2)
            self._reindex()
            return
        self._line_totals.add(block, len(lines) - len(removed))
        self._width_totals.add(block, delta)
        self._line_count += len(lines) - len(removed)

    def _reindex(self) -> None:
        self._blocks = [block for block in self._blocks if block.lines]
        self._line_totals.rebuild(len(block.lines) for block in self._blocks)
        self._width_totals.rebuild(block.width for block in self._blocks)
        self._line_count = self._line_totals.prefix(len(self._blocks))

    def _iter_lines(self, block: int = 0, offset: int = 0) -> Iterator[str]:
        yield from self._blocks[block].lines[offset:]
        for following in self._blocks[block + 1 :]:
            yield from following.lines

    def _block_of(self, line: int) -> Tuple[int, int]:
        block = self._line_totals.find(line)
        return block, line - self._line_totals.prefix(block)

    def _seek(self, index: int) -> Tuple[int, int, int]:
        """Return ``(block, line offset in block, column)`` for ``index``."""

        block = self._width_totals.find(index)
        local = index - self._width_totals.prefix(block)
        for offset, text in enumerate(self._blocks[block].lines):
            if local <= len(text):
                return block, offset, local
            local -= len(text) + 1
        raise OutOfRangeError(f"Character index {index} out of range", index=index)

    def _check_line(self, line: int) -> None:
        if line < 0 or line >= self._line_count:
            raise OutOfRangeError(f"Line {line} out of range", index=line)

    def _check_index(self, index: int) -> None:
        if index < 0 or index > self._length:
            raise OutOfRangeError(f"Character index {index} out of range", index=index)

    def _check_range(self, start: int, end: int) -> None:
        self._check_index(start)
        self._check_index(end)
        if start > end:
            raise OutOfRangeError(f"Range {start}..{end} is reversed", index=start)
