"""Errors and checks shared across buffer services."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .state import Cursor

if TYPE_CHECKING:
    from .document import TextStore


class OutOfRangeError(IndexError):
    """Raised when a line or character index falls outside the store."""

    def __init__(self, message: str, *, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class BufferValidationError(RuntimeError):
    """Raised when a cursor does not address a valid buffer position."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


def ensure_cursor(store: "TextStore", cursor: Cursor) -> Cursor:
    column, line = cursor
    if line < 0 or line >= store.line_count:
        raise BufferValidationError("Line out of range", cursor=cursor)
    if column < 0 or column > store.line_length(line):
        raise BufferValidationError("Column out of range", cursor=cursor)
    return cursor
