"""Projection of editor state onto a fixed-height screen region."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

from rsql.buffer import ScrollOffset

from .engine import EditorEngine

# Renderers draw a one-cell border around the text.
BORDER_OFFSET = 1


@dataclass(frozen=True, slots=True)
class ViewLine:
    index: int
    text: str
    selected: bool = False


@dataclass(frozen=True, slots=True)
class Viewport:
    """One redraw's worth of lines plus the on-screen cursor cell."""

    lines: Tuple[ViewLine, ...]
    cursor: Tuple[int, int]
    scroll: ScrollOffset

    @property
    def height(self) -> int:
        return len(self.lines)

    def texts(self) -> Tuple[str, ...]:
        return tuple(line.text for line in self.lines)


class ViewportProjector:
    """Read-only view over an ``EditorEngine``.

    Horizontal scroll is carried on the engine state but not applied here.
    """

    def __init__(self, engine: EditorEngine) -> None:
        self.engine = engine

    def iter_lines(self, height: int) -> Iterator[ViewLine]:
        """Yield exactly ``height`` lines starting at the vertical scroll offset."""

        store = self.engine.store
        selected = self.engine.selected_line
        top = self.engine.scroll.y
        for index in range(top, top + max(height, 0)):
            text = store.get_line(index)
            yield ViewLine(
                index=index,
                text=text if text is not None else "",
                selected=index == selected,
            )

    def cursor_position(self) -> Tuple[int, int]:
        column, line = self.engine.cursor
        row = max(line - self.engine.scroll.y, 0)
        return (column + BORDER_OFFSET, row + BORDER_OFFSET)

    def project(self, height: int) -> Viewport:
        return Viewport(
            lines=tuple(self.iter_lines(height)),
            cursor=self.cursor_position(),
            scroll=self.engine.scroll,
        )


__all__ = ["BORDER_OFFSET", "ViewLine", "Viewport", "ViewportProjector"]
