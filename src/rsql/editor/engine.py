"""Editor engine: applies commands to the text store, cursor, and history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from rsql.buffer import (
    IDLE_THRESHOLD,
    Cursor,
    Edit,
    EditHistory,
    EditKind,
    EditorState,
    OutOfRangeError,
    ScrollOffset,
    TextStore,
)
from rsql.buffer.document import LINE_SEPARATOR
from rsql.keymaps import CommandKind, EditorCommand
from rsql.runtime import telemetry
from rsql.runtime.clock import Clock


@dataclass(slots=True)
class CommandResult:
    """Outcome of ``EditorEngine.apply``.

    ``status`` is ``"ok"`` when the command changed something, ``"noop"``
    when it was accepted at a boundary without effect, and ``"passthrough"``
    for commands the session loop owns (quit, search).
    """

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None


_NOOP = "noop"
_PASSTHROUGH = "passthrough"


class EditorEngine:
    """Owns the text store, cursor, scroll offset, and edit history."""

    def __init__(
        self,
        *,
        name: str = "editor",
        store: Optional[TextStore] = None,
        state: Optional[EditorState] = None,
        history: Optional[EditHistory] = None,
        clock: Optional[Clock] = None,
        idle_threshold: float = IDLE_THRESHOLD,
    ) -> None:
        self.name = name
        self.store = store or TextStore()
        self.state = state or EditorState()
        self.history = history or EditHistory(
            clock=clock, idle_threshold=idle_threshold
        )
        self._handlers: Dict[CommandKind, Callable[[EditorCommand], CommandResult]] = {
            CommandKind.INSERT_CHAR: self._insert_char,
            CommandKind.NEWLINE: self._newline,
            CommandKind.BACKSPACE: self._backspace,
            CommandKind.MOVE_LEFT: self._move_left,
            CommandKind.MOVE_RIGHT: self._move_right,
            CommandKind.MOVE_UP: self._move_up,
            CommandKind.MOVE_DOWN: self._move_down,
            CommandKind.MOVE_BEGINNING_LINE: self._move_beginning_line,
            CommandKind.MOVE_END_LINE: self._move_end_line,
            CommandKind.UNDO: self._undo,
            CommandKind.REDO: self._redo,
        }

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        clock: Optional[Clock] = None,
        idle_threshold: float = IDLE_THRESHOLD,
    ) -> "EditorEngine":
        return cls(
            store=TextStore.from_text(text),
            clock=clock,
            idle_threshold=idle_threshold,
        )

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def scroll(self) -> ScrollOffset:
        return self.state.scroll

    @property
    def selected_line(self) -> Optional[int]:
        return self.state.selected_line

    @property
    def text(self) -> str:
        return self.store.text

    def apply(self, command: EditorCommand) -> CommandResult:
        handler = self._handlers.get(command.kind)
        if handler is None:
            return CommandResult(
                consumed=False, status=_PASSTHROUGH, message=command.kind.value
            )
        with telemetry.span(
            name=f"editor::{command.kind.value}",
            component="editor",
            metadata={"editor": self.name},
        ) as handle:
            result = handler(command)
            handle.add_metadata("status", result.status)
            handle.add_metadata("cursor", tuple(self.state.cursor))
        return result

    def follow_cursor(self, height: int) -> ScrollOffset:
        """Scroll vertically so the cursor line sits inside ``height`` rows."""

        x, y = self.state.scroll
        line = self.state.cursor.line
        if height > 0:
            if line < y:
                y = line
            elif line >= y + height:
                y = line - height + 1
        self.state.set_scroll(x, y)
        return self.state.scroll

    def set_scroll(self, x: int, y: int) -> None:
        self.state.set_scroll(x, y)

    def select_line(self, line: Optional[int]) -> None:
        if line is not None and not 0 <= line < self.store.line_count:
            raise OutOfRangeError(f"Line {line} out of range", index=line)
        self.state.selected_line = line

    def _cursor_index(self) -> int:
        column, line = self.state.cursor
        return self.store.line_to_char(line) + column

    def _record(
        self, kind: EditKind, index: int, text: str, before: Cursor, after: Cursor
    ) -> None:
        self.history.record(
            Edit(
                kind=kind,
                index=index,
                text=text,
                cursor_before=before,
                cursor_after=after,
            )
        )
        self.state.cursor = after

    def _insert_char(self, command: EditorCommand) -> CommandResult:
        char = command.char or ""
        if char == LINE_SEPARATOR:
            return self._newline(command)
        before = self.state.cursor
        index = self._cursor_index()
        self.store.insert_char(index, char)
        self._record(
            EditKind.INSERT, index, char, before, Cursor(before.column + 1, before.line)
        )
        return CommandResult(consumed=True)

    def _newline(self, command: EditorCommand) -> CommandResult:
        del command
        before = self.state.cursor
        index = self._cursor_index()
        self.store.insert(index, LINE_SEPARATOR)
        self._record(
            EditKind.INSERT, index, LINE_SEPARATOR, before, Cursor(0, before.line + 1)
        )
        return CommandResult(consumed=True)

    def _backspace(self, command: EditorCommand) -> CommandResult:
        del command
        index = self._cursor_index()
        if index == 0:
            return CommandResult(consumed=True, status=_NOOP)
        before = self.state.cursor
        if before.column > 0:
            after = Cursor(before.column - 1, before.line)
        else:
            # Joining onto the previous line: land where it used to end.
            previous = before.line - 1
            after = Cursor(self.store.line_length(previous), previous)
        removed = self.store.char(index - 1)
        self.store.remove(index - 1, index)
        self._record(EditKind.DELETE, index - 1, removed, before, after)
        return CommandResult(consumed=True)

    def _move_to(self, column: int, line: int) -> CommandResult:
        target = Cursor(max(column, 0), max(line, 0))
        if target == self.state.cursor:
            return CommandResult(consumed=True, status=_NOOP)
        self.state.cursor = target
        return CommandResult(consumed=True)

    def _move_left(self, command: EditorCommand) -> CommandResult:
        del command
        column, line = self.state.cursor
        return self._move_to(max(column - 1, 0), line)

    def _move_right(self, command: EditorCommand) -> CommandResult:
        del command
        column, line = self.state.cursor
        return self._move_to(min(column + 1, self.store.line_length(line)), line)

    def _move_up(self, command: EditorCommand) -> CommandResult:
        del command
        column, line = self.state.cursor
        if line == 0:
            return CommandResult(consumed=True, status=_NOOP)
        return self._move_to(min(column, self.store.line_length(line - 1)), line - 1)

    def _move_down(self, command: EditorCommand) -> CommandResult:
        del command
        column, line = self.state.cursor
        if line + 1 >= self.store.line_count:
            return CommandResult(consumed=True, status=_NOOP)
        return self._move_to(min(column, self.store.line_length(line + 1)), line + 1)

    def _move_beginning_line(self, command: EditorCommand) -> CommandResult:
        del command
        return self._move_to(0, self.state.cursor.line)

    def _move_end_line(self, command: EditorCommand) -> CommandResult:
        del command
        line = self.state.cursor.line
        return self._move_to(self.store.line_length(line), line)

    def _undo(self, command: EditorCommand) -> CommandResult:
        del command
        cursor = self.history.undo(self.store)
        if cursor is None:
            return CommandResult(consumed=True, status=_NOOP, message="nothing_to_undo")
        self.state.cursor = cursor
        telemetry.record_event(
            "editor.undo",
            data={"editor": self.name, "undo_depth": self.history.undo_depth},
        )
        return CommandResult(consumed=True, message="undo")

    def _redo(self, command: EditorCommand) -> CommandResult:
        del command
        cursor = self.history.redo(self.store)
        if cursor is None:
            return CommandResult(consumed=True, status=_NOOP, message="nothing_to_redo")
        self.state.cursor = cursor
        telemetry.record_event(
            "editor.redo",
            data={"editor": self.name, "redo_depth": self.history.redo_depth},
        )
        return CommandResult(consumed=True, message="redo")


__all__ = ["CommandResult", "EditorEngine"]
