"""Key stroke to editor command resolution."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .defaults import DEFAULT_BINDINGS
from .models import Binding, EditorCommand, KeyStroke


class KeymapConflictError(RuntimeError):
    """Raised when two bindings claim the same key signature."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' "
            f"on '{binding.key_signature}'"
        )
        self.binding = binding
        self.existing = existing


class KeymapResolver:
    """Indexes a binding table by key and resolves strokes against it.

    Resolution has no side effects. Bindings requiring more modifiers win
    over looser ones on the same key; an unbound plain character becomes
    ``INSERT_CHAR``.
    """

    def __init__(self, bindings: Iterable[Binding] = DEFAULT_BINDINGS) -> None:
        self._bindings: Dict[str, Binding] = {}
        self._by_signature: Dict[str, Binding] = {}
        self._by_key: Dict[str, List[Binding]] = {}
        for binding in bindings:
            self._add(binding)

    def __len__(self) -> int:
        return len(self._bindings)

    def resolve(self, stroke: KeyStroke) -> Optional[EditorCommand]:
        for binding in self._by_key.get(stroke.key, ()):
            if binding.matches(stroke):
                return EditorCommand(binding.command)
        if stroke.is_character and not stroke.modifiers:
            return EditorCommand.insert_char(stroke.key)
        return None

    def _add(self, binding: Binding) -> None:
        if binding.id in self._bindings:
            raise ValueError(f"Binding id '{binding.id}' already registered")
        existing = self._by_signature.get(binding.key_signature)
        if existing is not None:
            raise KeymapConflictError(binding, existing)

        self._bindings[binding.id] = binding
        self._by_signature[binding.key_signature] = binding
        bucket = self._by_key.setdefault(binding.stroke.key, [])
        bucket.append(binding)
        bucket.sort(key=lambda b: (-len(b.stroke.modifiers), b.id))


_DEFAULT_RESOLVER = KeymapResolver()


def map_key_to_command(
    key: str, modifiers: Iterable[str] = ()
) -> Optional[EditorCommand]:
    """Map a key code and modifier set to a command using the default table."""

    return _DEFAULT_RESOLVER.resolve(KeyStroke(key, tuple(modifiers)))


__all__ = [
    "KeymapConflictError",
    "KeymapResolver",
    "map_key_to_command",
]
