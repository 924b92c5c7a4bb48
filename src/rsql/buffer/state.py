"""Cursor, scroll, and selection state for an editor session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional


class Cursor(NamedTuple):
    column: int
    line: int


class ScrollOffset(NamedTuple):
    # Only ``y`` is applied when projecting the viewport.
    x: int
    y: int


@dataclass(slots=True)
class EditorState:
    """Mutable cursor + viewport info owned by the editor engine."""

    cursor: Cursor = Cursor(0, 0)
    scroll: ScrollOffset = ScrollOffset(0, 0)
    selected_line: Optional[int] = None

    def set_scroll(self, x: int, y: int) -> None:
        self.scroll = ScrollOffset(max(x, 0), max(y, 0))
