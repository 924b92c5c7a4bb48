"""Session loop step that wires key events into the editor and UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from rsql.editor import CommandResult, EditorEngine, Viewport, ViewportProjector
from rsql.keymaps import (
    BACKSPACE,
    CTRL,
    DOWN,
    ENTER,
    LEFT,
    RIGHT,
    UP,
    CommandKind,
    EditorCommand,
    KeymapResolver,
    KeyStroke,
)
from rsql.runtime import telemetry

EDIT_MODE = "edit"
SEARCH_MODE = "search"

_TEXTUAL_NAMED_KEYS: Dict[str, str] = {
    "enter": ENTER,
    "return": ENTER,
    "backspace": BACKSPACE,
    "left": LEFT,
    "right": RIGHT,
    "up": UP,
    "down": DOWN,
}

# Terminals report Ctrl+/ as the unit separator.
_CTRL_ALIASES: Dict[str, str] = {
    "slash": "/",
    "underscore": "/",
    "unit_separator": "/",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def normalize_textual_key(key: str, character: Optional[str] = None) -> Optional[KeyStroke]:
    """Translate a Textual key name (``"ctrl+u"``, ``"left"``, ``"a"``) into a stroke."""

    if not key:
        return None
    named = _TEXTUAL_NAMED_KEYS.get(key.lower())
    if named is not None:
        return KeyStroke(named)

    *modifiers, base = key.split("+")
    modifiers = [modifier.lower() for modifier in modifiers]
    if CTRL in modifiers:
        base = _CTRL_ALIASES.get(base, base)
        if len(base) == 1:
            return KeyStroke(base.lower(), tuple(modifiers))
        base = _TEXTUAL_NAMED_KEYS.get(base.lower(), base.upper())
        return KeyStroke(base, tuple(modifiers))

    if character and len(character) == 1 and character.isprintable():
        # Shift is already folded into the character itself.
        held = tuple(modifier for modifier in modifiers if modifier != "shift")
        return KeyStroke(character, held)

    if len(base) != 1:
        base = _TEXTUAL_NAMED_KEYS.get(base.lower(), base.upper())
    return KeyStroke(base, tuple(modifiers))


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the session to update Textual widgets."""

    update_view: Callable[[Viewport], None]
    update_status: Callable[[str], None] = _noop
    # Optional debug line sink
    log: Callable[[str], None] = _noop


class EditorSession:
    """One editing session: map a key, apply it, and redraw.

    ``running`` turns false once a quit command has been processed. Search
    is recognised and reported as a mode, with no behaviour behind it yet.
    """

    def __init__(
        self,
        engine: Optional[EditorEngine] = None,
        hooks: Optional[TextualUIHooks] = None,
        *,
        resolver: Optional[KeymapResolver] = None,
        height: int = 24,
    ) -> None:
        self.engine = engine or EditorEngine()
        self.projector = ViewportProjector(self.engine)
        self.resolver = resolver or KeymapResolver()
        self.hooks = hooks or TextualUIHooks(update_view=_noop)
        self.height = max(height, 0)
        self.mode = EDIT_MODE
        self.running = True
        self._refresh_view()

    def resize(self, height: int) -> None:
        self.height = max(height, 0)
        self._refresh_view()

    def frame(self) -> Viewport:
        self.engine.follow_cursor(self.height)
        return self.projector.project(self.height)

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Optional[CommandResult]:
        stroke = normalize_textual_key(key, character)
        if stroke is None:
            return None
        return self.handle_stroke(stroke)

    def handle_stroke(self, stroke: KeyStroke) -> Optional[CommandResult]:
        if not self.running:
            return None
        self._log_state("key ->", key=stroke.token)
        command = self.resolver.resolve(stroke)
        if command is None:
            return None
        return self.dispatch(command)

    def dispatch(self, command: EditorCommand) -> CommandResult:
        if command.kind is CommandKind.QUIT:
            self.running = False
            result = CommandResult(consumed=True, status="quit", message="quit")
            telemetry.record_event("session.quit", data={"editor": self.engine.name})
        elif command.kind is CommandKind.SEARCH_MODE:
            self.mode = SEARCH_MODE
            result = CommandResult(consumed=True, status="search", message="search_mode")
            telemetry.record_event("session.search", data={"editor": self.engine.name})
        else:
            self.mode = EDIT_MODE
            result = self.engine.apply(command)

        self._after_result(result)
        self._log_state(
            "result <-",
            command=command.kind.value,
            status=result.status,
            message=result.message,
        )
        return result

    def _after_result(self, result: CommandResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_view()

    def _refresh_view(self) -> None:
        self.hooks.update_view(self.frame())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "mode": self.mode,
            "cursor": tuple(self.engine.cursor),
            "scroll": tuple(self.engine.scroll),
            "undo_depth": self.engine.history.undo_depth,
            "redo_depth": self.engine.history.redo_depth,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


__all__ = [
    "EDIT_MODE",
    "SEARCH_MODE",
    "EditorSession",
    "TextualUIHooks",
    "normalize_textual_key",
]
