"""Time-coalesced undo/redo history."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from rsql.runtime.clock import Clock, MonotonicClock

from .document import TextStore
from .state import Cursor

IDLE_THRESHOLD = 1.0  # seconds


class EditKind(str, Enum):
    INSERT = "insert"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class Edit:
    """One reversible primitive applied to a ``TextStore``."""

    kind: EditKind
    index: int
    text: str
    cursor_before: Cursor
    cursor_after: Cursor

    @property
    def end(self) -> int:
        return self.index + len(self.text)

    def apply(self, store: TextStore) -> None:
        if self.kind is EditKind.INSERT:
            store.insert(self.index, self.text)
        else:
            store.remove(self.index, self.end)

    def revert(self, store: TextStore) -> None:
        if self.kind is EditKind.INSERT:
            store.remove(self.index, self.end)
        else:
            store.insert(self.index, self.text)


@dataclass(slots=True)
class EditBatch:
    """Edits that undo and redo together."""

    timestamp: float
    edits: List[Edit] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.edits

    def push(self, edit: Edit, now: float) -> None:
        self.edits.append(edit)
        self.timestamp = now


class EditHistory:
    """Undo/redo stacks plus the open batch collecting fresh edits.

    Edits arriving within ``idle_threshold`` seconds of the previous one join
    the same batch. Once the open batch has been idle that long, the next
    edit closes it onto the undo stack and starts a new one.
    """

    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        idle_threshold: float = IDLE_THRESHOLD,
    ) -> None:
        if idle_threshold < 0:
            raise ValueError("idle_threshold must not be negative")
        self._clock: Clock = clock or MonotonicClock()
        self._idle_threshold = idle_threshold
        self._undo: List[EditBatch] = []
        self._redo: List[EditBatch] = []
        self._current = EditBatch(timestamp=self._clock.now())

    @property
    def idle_threshold(self) -> float:
        return self._idle_threshold

    @property
    def current(self) -> EditBatch:
        return self._current

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    @property
    def batch_count(self) -> int:
        """Undoable units, counting the open batch when it has edits."""

        return len(self._undo) + (0 if self._current.is_empty else 1)

    def can_undo(self) -> bool:
        return bool(self._undo) or not self._current.is_empty

    def can_redo(self) -> bool:
        return bool(self._redo)

    def is_stale(self) -> bool:
        elapsed = self._clock.elapsed_since(self._current.timestamp)
        return elapsed >= self._idle_threshold

    def record(self, edit: Edit) -> None:
        if self.is_stale():
            self.commit()
        self._current.push(edit, self._clock.now())
        self._redo.clear()

    def commit(self) -> bool:
        """Close the open batch onto the undo stack. Returns whether it had edits."""

        if self._current.is_empty:
            return False
        self._undo.append(self._current)
        self._current = EditBatch(timestamp=self._clock.now())
        return True

    def undo(self, store: TextStore) -> Optional[Cursor]:
        """Revert the newest batch and return the cursor it leaves behind."""

        self.commit()
        if not self._undo:
            return None
        batch = self._undo.pop()
        cursor: Optional[Cursor] = None
        for edit in reversed(batch.edits):
            edit.revert(store)
            cursor = edit.cursor_before
        self._redo.append(batch)
        return cursor

    def redo(self, store: TextStore) -> Optional[Cursor]:
        if not self._redo:
            return None
        batch = self._redo.pop()
        cursor: Optional[Cursor] = None
        for edit in batch.edits:
            edit.apply(store)
            cursor = edit.cursor_after
        self._undo.append(batch)
        return cursor


__all__ = ["IDLE_THRESHOLD", "Edit", "EditBatch", "EditHistory", "EditKind"]
