"""Dataclasses describing key strokes, editor commands, and bindings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

# Named key codes. Anything else is a single character.
ENTER = "ENTER"
BACKSPACE = "BACKSPACE"
LEFT = "LEFT"
RIGHT = "RIGHT"
UP = "UP"
DOWN = "DOWN"

NAMED_KEYS = frozenset({ENTER, BACKSPACE, LEFT, RIGHT, UP, DOWN})

CTRL = "ctrl"


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def is_character(self) -> bool:
        return len(self.key) == 1

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{self.key}"
        return self.key

    def holds(self, modifiers: Iterable[str]) -> bool:
        return set(modifiers) <= set(self.modifiers)


class CommandKind(str, Enum):
    NEWLINE = "newline"
    BACKSPACE = "backspace"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_BEGINNING_LINE = "move_beginning_line"
    MOVE_END_LINE = "move_end_line"
    UNDO = "undo"
    REDO = "redo"
    SEARCH_MODE = "search_mode"
    QUIT = "quit"
    INSERT_CHAR = "insert_char"


@dataclass(frozen=True, slots=True)
class EditorCommand:
    """A command for the editor engine. ``char`` is set for INSERT_CHAR only."""

    kind: CommandKind
    char: str | None = None

    def __post_init__(self) -> None:
        if self.kind is CommandKind.INSERT_CHAR:
            if self.char is None or len(self.char) != 1:
                raise ValueError("INSERT_CHAR needs exactly one character")
        elif self.char is not None:
            raise ValueError(f"{self.kind.value} does not carry a character")

    @classmethod
    def insert_char(cls, char: str) -> "EditorCommand":
        return cls(CommandKind.INSERT_CHAR, char)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key stroke with an editor command.

    ``stroke.modifiers`` are the modifiers the binding requires; extra
    modifiers held on the incoming stroke do not prevent a match.
    """

    id: str
    stroke: KeyStroke
    command: CommandKind
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if self.command is CommandKind.INSERT_CHAR:
            raise ValueError("INSERT_CHAR is produced for plain characters, not bound")

    @property
    def key_signature(self) -> str:
        return self.stroke.token

    def matches(self, stroke: KeyStroke) -> bool:
        return stroke.key == self.stroke.key and stroke.holds(self.stroke.modifiers)


__all__ = [
    "ENTER",
    "BACKSPACE",
    "LEFT",
    "RIGHT",
    "UP",
    "DOWN",
    "NAMED_KEYS",
    "CTRL",
    "KeyStroke",
    "CommandKind",
    "EditorCommand",
    "Binding",
]
