from __future__ import annotations

from typing import List

import pytest

from rsql.adapters.textual import EditorSession, TextualUIHooks, normalize_textual_key
from rsql.buffer import Cursor
from rsql.editor import EditorEngine, Viewport
from rsql.keymaps import BACKSPACE, ENTER, LEFT, KeyStroke
from rsql.runtime.clock import ManualClock


def make_session(
    views: List[Viewport] | None = None,
    statuses: List[str] | None = None,
    logs: List[str] | None = None,
    *,
    height: int = 5,
) -> EditorSession:
    hooks = TextualUIHooks(
        update_view=(views.append if views is not None else lambda view: None),
        update_status=(statuses.append if statuses is not None else lambda status: None),
        log=(logs.append if logs is not None else lambda line: None),
    )
    engine = EditorEngine(clock=ManualClock())
    return EditorSession(engine, hooks, height=height)


@pytest.mark.parametrize(
    ("key", "character", "expected"),
    [
        ("enter", None, KeyStroke(ENTER)),
        ("backspace", None, KeyStroke(BACKSPACE)),
        ("left", None, KeyStroke(LEFT)),
        ("shift+left", None, KeyStroke(LEFT, ("shift",))),
        ("a", "a", KeyStroke("a")),
        ("A", "A", KeyStroke("A")),
        ("space", " ", KeyStroke(" ")),
        ("ctrl+u", "\x15", KeyStroke("u", ("ctrl",))),
        ("ctrl+underscore", "\x1f", KeyStroke("/", ("ctrl",))),
        ("escape", "\x1b", KeyStroke("ESCAPE")),
    ],
)
def test_normalize_textual_key(
    key: str, character: str | None, expected: KeyStroke
) -> None:
    assert normalize_textual_key(key, character) == expected


def test_normalize_empty_key_is_ignored() -> None:
    assert normalize_textual_key("") is None


def test_session_types_and_redraws() -> None:
    views: List[Viewport] = []
    session = make_session(views)

    for char in "hi":
        session.handle_textual_key(char, character=char)
    session.handle_textual_key("enter")
    session.handle_textual_key("y", character="y")

    assert session.engine.store.lines() == ("hi", "y")
    latest = views[-1]
    assert latest.texts()[:2] == ("hi", "y")
    assert latest.height == 5
    assert latest.cursor == (2, 2)


def test_session_undo_via_ctrl_u() -> None:
    statuses: List[str] = []
    session = make_session(statuses=statuses)
    session.handle_textual_key("x", character="x")

    session.handle_textual_key("ctrl+u", character="\x15")

    assert session.engine.text == ""
    assert statuses[-1] == "undo"


def test_unmapped_key_is_ignored() -> None:
    views: List[Viewport] = []
    session = make_session(views)
    before = len(views)

    assert session.handle_textual_key("escape", character="\x1b") is None
    assert len(views) == before


def test_quit_stops_the_session() -> None:
    session = make_session()

    result = session.handle_textual_key("ctrl+q", character="\x11")

    assert result is not None
    assert result.status == "quit"
    assert session.running is False
    assert session.handle_textual_key("a", character="a") is None
    assert session.engine.text == ""


def test_search_mode_is_recognised_stub() -> None:
    statuses: List[str] = []
    session = make_session(statuses=statuses)

    session.handle_textual_key("ctrl+underscore", character="\x1f")
    assert session.mode == "search"
    assert statuses[-1] == "search_mode"

    session.handle_textual_key("z", character="z")
    assert session.mode == "edit"
    assert session.engine.text == "z"


def test_viewport_follows_cursor_down() -> None:
    views: List[Viewport] = []
    session = make_session(views, height=2)

    for _ in range(3):
        session.handle_textual_key("enter")

    assert session.engine.scroll.y == 2
    assert views[-1].cursor == (1, 2)


def test_session_emits_log_lines() -> None:
    logs: List[str] = []
    session = make_session(logs=logs)

    session.handle_textual_key("a", character="a")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") for line in logs)


@pytest.mark.asyncio
async def test_app_routes_every_ctrl_binding_to_the_editor() -> None:
    from rsql.adapters.textual.app import EditorApp

    engine = EditorEngine(clock=ManualClock())
    app = EditorApp(engine=engine)

    async with app.run_test() as pilot:
        await pilot.press("a", "b", "enter", "c", "d")
        assert engine.cursor == Cursor(2, 1)

        steps = [
            ("ctrl+p", Cursor(2, 0)),
            ("ctrl+n", Cursor(2, 1)),
            ("ctrl+a", Cursor(0, 1)),
            ("ctrl+e", Cursor(2, 1)),
            ("ctrl+b", Cursor(1, 1)),
            ("ctrl+f", Cursor(2, 1)),
            ("ctrl+m", Cursor(0, 2)),
        ]
        for key, expected in steps:
            await pilot.press(key)
            assert engine.cursor == expected, key

        assert engine.text == "ab\ncd\n"
        await pilot.press("ctrl+u")
        assert engine.text == ""
        assert engine.cursor == Cursor(0, 0)
        await pilot.press("ctrl+r")
        assert engine.text == "ab\ncd\n"
        assert engine.cursor == Cursor(0, 2)

        await pilot.press("ctrl+underscore")
        assert app.session is not None
        assert app.session.mode == "search"

        await pilot.press("ctrl+q")
        assert app.session.running is False
