"""Editor engine and viewport projection."""

from .engine import CommandResult, EditorEngine
from .viewport import BORDER_OFFSET, ViewLine, Viewport, ViewportProjector

__all__ = [
    "CommandResult",
    "EditorEngine",
    "BORDER_OFFSET",
    "ViewLine",
    "Viewport",
    "ViewportProjector",
]
