from __future__ import annotations

from rsql.buffer import Cursor, Edit, EditHistory, EditKind, TextStore
from rsql.runtime.clock import ManualClock


def make_history(clock: ManualClock) -> EditHistory:
    return EditHistory(clock=clock, idle_threshold=1.0)


def insert(store: TextStore, history: EditHistory, index: int, text: str) -> None:
    store.insert(index, text)
    history.record(
        Edit(
            kind=EditKind.INSERT,
            index=index,
            text=text,
            cursor_before=Cursor(index, 0),
            cursor_after=Cursor(index + len(text), 0),
        )
    )


def test_edits_within_threshold_share_a_batch() -> None:
    clock = ManualClock()
    history = make_history(clock)
    store = TextStore()

    insert(store, history, 0, "a")
    clock.advance(0.5)
    insert(store, history, 1, "b")
    clock.advance(0.9)
    insert(store, history, 2, "c")

    assert history.undo_depth == 0
    assert history.batch_count == 1
    assert len(history.current.edits) == 3


def test_idle_gap_closes_the_batch() -> None:
    clock = ManualClock()
    history = make_history(clock)
    store = TextStore()

    insert(store, history, 0, "a")
    clock.advance(1.0)
    insert(store, history, 1, "b")

    assert history.undo_depth == 1
    assert history.batch_count == 2


def test_stale_empty_batch_is_not_pushed() -> None:
    clock = ManualClock()
    history = make_history(clock)
    store = TextStore()

    clock.advance(5.0)
    insert(store, history, 0, "a")

    assert history.undo_depth == 0
    assert history.batch_count == 1


def test_undo_closes_open_batch_and_replays_in_reverse() -> None:
    clock = ManualClock()
    history = make_history(clock)
    store = TextStore()
    insert(store, history, 0, "a")
    insert(store, history, 1, "b")

    cursor = history.undo(store)

    assert store.text == ""
    assert cursor == Cursor(0, 0)
    assert history.current.is_empty
    assert history.can_redo()


def test_undo_reinserts_deleted_text() -> None:
    clock = ManualClock()
    history = make_history(clock)
    store = TextStore.from_text("abc")
    store.remove(1, 2)
    history.record(
        Edit(
            kind=EditKind.DELETE,
            index=1,
            text="b",
            cursor_before=Cursor(2, 0),
            cursor_after=Cursor(1, 0),
        )
    )

    assert history.undo(store) == Cursor(2, 0)
    assert store.text == "abc"
    assert history.redo(store) == Cursor(1, 0)
    assert store.text == "ac"


def test_new_edit_clears_redo_stack() -> None:
    clock = ManualClock()
    history = make_history(clock)
    store = TextStore()
    insert(store, history, 0, "a")
    history.undo(store)
    assert history.redo_depth == 1

    insert(store, history, 0, "z")

    assert history.redo_depth == 0
    assert history.redo(store) is None
    assert store.text == "z"


def test_undo_and_redo_on_empty_history_are_noops() -> None:
    history = make_history(ManualClock())
    store = TextStore.from_text("keep")

    assert history.undo(store) is None
    assert history.redo(store) is None
    assert store.text == "keep"
    assert not history.can_undo()


def test_commit_is_explicit_boundary() -> None:
    clock = ManualClock()
    history = make_history(clock)
    store = TextStore()
    insert(store, history, 0, "a")

    assert history.commit() is True
    assert history.commit() is False
    insert(store, history, 1, "b")

    history.undo(store)
    assert store.text == "a"
