"""Textual host for the editor engine."""

from .controller import EditorSession, TextualUIHooks, normalize_textual_key

__all__ = ["EditorSession", "TextualUIHooks", "normalize_textual_key"]
