from __future__ import annotations

from rsql.editor import EditorEngine, ViewportProjector
from rsql.keymaps import CommandKind, EditorCommand
from rsql.runtime.clock import ManualClock


def make_projector(text: str) -> ViewportProjector:
    return ViewportProjector(EditorEngine.from_text(text, clock=ManualClock()))


def test_projection_pads_past_end_of_buffer() -> None:
    projector = make_projector("select 1\nfrom dual")

    viewport = projector.project(4)

    assert viewport.height == 4
    assert viewport.texts() == ("select 1", "from dual", "", "")
    assert [line.index for line in viewport.lines] == [0, 1, 2, 3]


def test_projection_starts_at_vertical_scroll() -> None:
    projector = make_projector("\n".join(f"l{i}" for i in range(6)))
    projector.engine.set_scroll(0, 2)

    assert projector.project(3).texts() == ("l2", "l3", "l4")


def test_horizontal_scroll_is_not_applied() -> None:
    projector = make_projector("abcdef")
    projector.engine.set_scroll(3, 0)

    viewport = projector.project(1)

    assert viewport.texts() == ("abcdef",)
    assert viewport.scroll.x == 3


def test_selected_line_is_marked() -> None:
    projector = make_projector("a\nb\nc")
    projector.engine.select_line(1)

    flags = [line.selected for line in projector.project(3).lines]

    assert flags == [False, True, False]


def test_cursor_position_leaves_room_for_border() -> None:
    projector = make_projector("ab\ncd\nef")
    engine = projector.engine
    engine.apply(EditorCommand(CommandKind.MOVE_DOWN))
    engine.apply(EditorCommand(CommandKind.MOVE_DOWN))
    engine.apply(EditorCommand(CommandKind.MOVE_RIGHT))

    assert projector.cursor_position() == (2, 3)

    engine.set_scroll(0, 1)
    assert projector.cursor_position() == (2, 2)


def test_iter_lines_is_lazy_and_exact() -> None:
    projector = make_projector("x")

    lines = projector.iter_lines(2)

    assert next(lines).text == "x"
    assert next(lines).text == ""
    assert next(lines, None) is None


def test_zero_height_projects_nothing() -> None:
    projector = make_projector("x")

    assert projector.project(0).lines == ()
