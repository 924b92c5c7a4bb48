"""Textual app that renders the editor viewport."""

from __future__ import annotations

from typing import Any, Optional

try:  # pragma: no cover - imported only when the TUI is run
    from rich.style import Style
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use rsql.adapters.textual.app"
    ) from exc

from rsql.editor import EditorEngine, Viewport
from rsql.keymaps import CommandKind, EditorCommand

from .controller import EditorSession, TextualUIHooks

_SELECTED = Style(bgcolor="blue")
_CURSOR = Style(reverse=True)


def render_viewport(viewport: Viewport) -> Text:
    """Build the rich text for one frame, marking the cursor cell."""

    column, row = viewport.cursor
    # Cursor coordinates include the border cell the widget draws itself.
    column -= 1
    row -= 1
    text = Text()
    for position, line in enumerate(viewport.lines):
        rendered = Text(line.text, style=_SELECTED if line.selected else "")
        if position == row:
            if column < len(line.text):
                rendered.stylize(_CURSOR, column, column + 1)
            else:
                rendered.append(" ", style=_CURSOR)
        if position:
            text.append("\n")
        text.append_text(rendered)
    return text


class EditorApp(App[None]):
    """Bordered editor pane plus a one-line status bar."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
		border: solid $accent;
		border-title-align: left;
		padding: 0;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
    ]

    # Ctrl+P is the editor's MoveUp; the palette would swallow it.
    ENABLE_COMMAND_PALETTE = False

    def __init__(
        self,
        *,
        connection: Optional[Any] = None,
        engine: Optional[EditorEngine] = None,
    ) -> None:
        super().__init__()
        self.connection = connection
        self.engine = engine
        self.session: EditorSession | None = None
        self._editor_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._editor_widget = Static("", id="editor")
        self._editor_widget.border_title = " Editor "
        self._status_widget = Static("", id="status-line")
        yield self._editor_widget
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
        )
        self.session = EditorSession(
            self.engine, hooks, height=self._editor_height()
        )

    def on_resize(self, event: events.Resize) -> None:
        del event
        if self.session:
            self.session.resize(self._editor_height())

    def on_unmount(self) -> None:
        close = getattr(self.connection, "close", None)
        if callable(close):
            close()
        self.connection = None

    def on_key(self, event: events.Key) -> None:
        if not self.session:
            return
        self.session.handle_textual_key(event.key, character=event.character)
        event.stop()
        if not self.session.running:
            self.exit()

    async def action_quit(self) -> None:
        # App-level quit bindings (ctrl+c, Textual's own ctrl+q) stop the session too.
        if self.session and self.session.running:
            self.session.dispatch(EditorCommand(CommandKind.QUIT))
        self.exit()

    def _editor_height(self) -> int:
        if self._editor_widget is None:
            return 0
        return self._editor_widget.content_region.height

    def _update_view(self, viewport: Viewport) -> None:
        if self._editor_widget:
            self._editor_widget.update(render_viewport(viewport))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def run(connection: Optional[Any] = None) -> None:
    EditorApp(connection=connection).run()


__all__ = ["EditorApp", "render_viewport", "run"]
