"""Built-in key bindings for the editor."""

from __future__ import annotations

from .models import (
    BACKSPACE,
    CTRL,
    DOWN,
    ENTER,
    LEFT,
    RIGHT,
    UP,
    Binding,
    CommandKind,
    KeyStroke,
)


def _ctrl(char: str) -> KeyStroke:
    return KeyStroke(char, (CTRL,))


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(
        id="key.enter",
        stroke=KeyStroke(ENTER),
        command=CommandKind.NEWLINE,
        description="Insert a line break",
    ),
    Binding(
        id="key.backspace",
        stroke=KeyStroke(BACKSPACE),
        command=CommandKind.BACKSPACE,
        description="Delete the character before the cursor",
    ),
    Binding(
        id="key.left",
        stroke=KeyStroke(LEFT),
        command=CommandKind.MOVE_LEFT,
        description="Move left",
    ),
    Binding(
        id="key.right",
        stroke=KeyStroke(RIGHT),
        command=CommandKind.MOVE_RIGHT,
        description="Move right",
    ),
    Binding(
        id="key.up",
        stroke=KeyStroke(UP),
        command=CommandKind.MOVE_UP,
        description="Move up",
    ),
    Binding(
        id="key.down",
        stroke=KeyStroke(DOWN),
        command=CommandKind.MOVE_DOWN,
        description="Move down",
    ),
    Binding(
        id="ctrl.undo",
        stroke=_ctrl("u"),
        command=CommandKind.UNDO,
        description="Undo the last batch of edits",
    ),
    Binding(
        id="ctrl.redo",
        stroke=_ctrl("r"),
        command=CommandKind.REDO,
        description="Redo the last undone batch",
    ),
    Binding(
        id="ctrl.search",
        stroke=_ctrl("/"),
        command=CommandKind.SEARCH_MODE,
        description="Enter search mode",
    ),
    Binding(
        id="ctrl.quit",
        stroke=_ctrl("q"),
        command=CommandKind.QUIT,
        description="Quit the editor",
    ),
    # Emacs-style movement
    Binding(
        id="emacs.previous_line",
        stroke=_ctrl("p"),
        command=CommandKind.MOVE_UP,
        description="Move up",
    ),
    Binding(
        id="emacs.next_line",
        stroke=_ctrl("n"),
        command=CommandKind.MOVE_DOWN,
        description="Move down",
    ),
    Binding(
        id="emacs.backward_char",
        stroke=_ctrl("b"),
        command=CommandKind.MOVE_LEFT,
        description="Move left",
    ),
    Binding(
        id="emacs.forward_char",
        stroke=_ctrl("f"),
        command=CommandKind.MOVE_RIGHT,
        description="Move right",
    ),
    Binding(
        id="emacs.newline",
        stroke=_ctrl("m"),
        command=CommandKind.NEWLINE,
        description="Insert a line break",
    ),
    Binding(
        id="emacs.beginning_of_line",
        stroke=_ctrl("a"),
        command=CommandKind.MOVE_BEGINNING_LINE,
        description="Move to the start of the line",
    ),
    Binding(
        id="emacs.end_of_line",
        stroke=_ctrl("e"),
        command=CommandKind.MOVE_END_LINE,
        description="Move to the end of the line",
    ),
)


__all__ = ["DEFAULT_BINDINGS"]
