from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from rsql.runtime import telemetry


@pytest.fixture(autouse=True)
def restore_telemetry() -> Iterator[None]:
    yield
    telemetry.configure()


def test_record_event_formats_payload(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="rsql"):
        telemetry.record_event("editor.undo", data={"undo_depth": 2})

    assert "event::editor.undo" in caplog.text
    assert "undo_depth=2" in caplog.text


def test_span_logs_failure_and_reraises(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="rsql"):
        with pytest.raises(RuntimeError):
            with telemetry.span("editor::boom", component="editor"):
                raise RuntimeError("kaboom")

    assert "span::fail" in caplog.text
    assert "reason=kaboom" in caplog.text


def test_span_records_metadata_on_success(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="rsql"):
        with telemetry.span("editor::insert_char", metadata={"editor": "main"}) as handle:
            handle.add_metadata("status", "ok")

    assert "span::end" in caplog.text
    assert "status=ok" in caplog.text
    assert "editor=main" in caplog.text


def test_get_logger_namespaces_names() -> None:
    assert telemetry.get_logger().name == "rsql"
    assert telemetry.get_logger("editor").name == "rsql.editor"
    assert telemetry.get_logger("rsql.keymaps").name == "rsql.keymaps"


def test_production_preset_writes_to_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    log_file = tmp_path / "logs" / "rsql.log"
    monkeypatch.setenv("RSQL_LOG_FILE", str(log_file))

    telemetry.configure(preset="production")
    telemetry.record_event("session.start")
    for handler in logging.getLogger("rsql").handlers:
        handler.flush()

    assert "event::session.start" in log_file.read_text(encoding="utf-8")


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")
