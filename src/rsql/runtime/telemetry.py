"""Telemetry for the editor core on top of the standard ``logging`` package.

Public surface:

``configure(...)`` -- attach handlers from ``RSQL_*`` settings or a named preset
``get_logger(name)`` -- logger under the ``rsql`` namespace
``record_event(name, ...)`` -- structured event at a chosen level
``span(name, ...)`` -- time a block and log its outcome
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

ENV_PREFIX = "RSQL_"
ROOT_LOGGER_NAME = "rsql"

_FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s"
_CONSOLE_FORMAT = "%(levelname)-8s - %(name)-12s - %(message)s"

_HANDLERS: List[logging.Handler] = []


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _level(value: Optional[str], fallback: int) -> int:
    if not value:
        return fallback
    resolved = logging.getLevelName(value.upper())
    return resolved if isinstance(resolved, int) else fallback


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> str:
    return " ".join(f"{key}={_stringify(value)}" for key, value in data.items())


@dataclass(slots=True)
class TelemetrySettings:
    level: int = logging.INFO
    console: bool = True
    console_level: int = logging.WARNING
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "TelemetrySettings":
        return cls(
            level=_level(_env("LOG_LEVEL"), logging.INFO),
            console=not _env_flag("DISABLE_CONSOLE", False),
            console_level=_level(_env("CONSOLE_LEVEL"), logging.WARNING),
            log_file=_env("LOG_FILE") or None,
        )

    @classmethod
    def preset(cls, name: str) -> "TelemetrySettings":
        key = name.lower()
        if key == "development":
            return cls(level=logging.DEBUG, console=True, console_level=logging.DEBUG)
        if key == "production":
            # The TUI owns the terminal, so logs only go to disk.
            return cls(
                level=_level(_env("LOG_LEVEL"), logging.INFO),
                console=False,
                log_file=_env("LOG_FILE") or "rsql.log",
            )
        raise ValueError(f"Unknown preset '{name}'.")


def _build_handlers(settings: TelemetrySettings) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if settings.log_file:
        log_dir = os.path.dirname(settings.log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            settings.log_file, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        file_handler.setLevel(settings.level)
        handlers.append(file_handler)
    if settings.console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
        console_handler.setLevel(settings.console_level)
        handlers.append(console_handler)
    return handlers


def configure(
    *, settings: Optional[TelemetrySettings] = None, preset: Optional[str] = None
) -> None:
    """Replace the handlers on the ``rsql`` logger.

    ``settings`` and ``preset`` are mutually exclusive; with neither, the
    settings are read from ``RSQL_*`` environment variables. Calling this
    again swaps the handlers instead of stacking duplicates.
    """

    if settings and preset:
        raise ValueError("Provide either `settings` or `preset`, not both.")
    if preset:
        settings = TelemetrySettings.preset(preset)
    elif settings is None:
        settings = TelemetrySettings.from_env()

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in _HANDLERS:
        root.removeHandler(handler)
        handler.close()
    _HANDLERS.clear()

    _HANDLERS.extend(_build_handlers(settings))
    for handler in _HANDLERS:
        root.addHandler(handler)
    root.setLevel(settings.level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def _resolve_level(level: Any) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unsupported log level '{level}'.")
    return resolved


def record_event(
    name: str,
    *,
    level: str | int = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` rendered as ``key=value`` pairs."""

    log = get_logger(logger_name)
    payload = {"event": name, **(data or {})}
    log.log(_resolve_level(level), "event::%s %s", name, _format_pairs(payload))


@dataclass
class SpanHandle:
    """Yielded by ``span`` so callers can attach results to the span."""

    logger: logging.Logger
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _payload(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        return payload

    def finish(self, elapsed_ms: float) -> None:
        self.logger.debug(
            "span::end %s", _format_pairs(self._payload({"elapsed_ms": f"{elapsed_ms:.3f}"}))
        )

    def fail(self, reason: str) -> None:
        self.logger.error("span::fail %s", _format_pairs(self._payload({"reason": reason})))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time a block of work.

    ``component=True`` labels the span with its own name as component, a
    string names the component explicitly. Failures are logged with the
    exception message and re-raised.
    """

    component_name = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    handle = SpanHandle(
        logger=get_logger(logger_name),
        span_name=name,
        component_name=component_name,
        metadata={key: _stringify(value) for key, value in (metadata or {}).items()},
    )
    started = time.perf_counter()
    try:
        yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    handle.finish((time.perf_counter() - started) * 1000.0)


configure()

__all__ = [
    "SpanHandle",
    "TelemetrySettings",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
