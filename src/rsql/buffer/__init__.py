"""Text storage, cursor state, and undo/redo data structures."""

from .document import TextStore
from .state import Cursor, EditorState, ScrollOffset
from .undo import IDLE_THRESHOLD, Edit, EditBatch, EditHistory, EditKind
from .validation import BufferValidationError, OutOfRangeError, ensure_cursor

__all__ = [
    "TextStore",
    "Cursor",
    "ScrollOffset",
    "EditorState",
    "Edit",
    "EditBatch",
    "EditHistory",
    "EditKind",
    "IDLE_THRESHOLD",
    "BufferValidationError",
    "OutOfRangeError",
    "ensure_cursor",
]
