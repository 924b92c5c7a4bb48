"""Key stroke models, the default binding table, and command resolution."""

from .defaults import DEFAULT_BINDINGS
from .models import (
    BACKSPACE,
    CTRL,
    DOWN,
    ENTER,
    LEFT,
    NAMED_KEYS,
    RIGHT,
    UP,
    Binding,
    CommandKind,
    EditorCommand,
    KeyStroke,
)
from .resolver import KeymapConflictError, KeymapResolver, map_key_to_command

__all__ = [
    "ENTER",
    "BACKSPACE",
    "LEFT",
    "RIGHT",
    "UP",
    "DOWN",
    "NAMED_KEYS",
    "CTRL",
    "Binding",
    "CommandKind",
    "EditorCommand",
    "KeyStroke",
    "DEFAULT_BINDINGS",
    "KeymapConflictError",
    "KeymapResolver",
    "map_key_to_command",
]
