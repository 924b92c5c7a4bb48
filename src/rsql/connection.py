"""Data-source connection settings and establishment."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

import pymysql

from rsql.runtime import telemetry

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3306


class SqlVariant(str, Enum):
    MYSQL = "mysql"


class ConnectionFailed(RuntimeError):
    """Raised when a session to the data source cannot be opened."""

    def __init__(self, message: str, *, config: "DbConfig | None" = None) -> None:
        super().__init__(message)
        self.config = config


Connector = Callable[["DbConfig"], Any]


@dataclass(frozen=True, slots=True)
class DbConfig:
    """Everything needed to open a connection.

    Example::

        DbConfig(name="rsql", user="donald", password="123")
    """

    name: str
    user: str
    password: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    variant: SqlVariant = SqlVariant.MYSQL

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            raise ValueError(f"port {self.port} is out of range")

    @property
    def url(self) -> str:
        return (
            f"{self.variant.value}://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.name}"
        )

    @property
    def redacted_url(self) -> str:
        return f"{self.variant.value}://{self.user}:***@{self.host}:{self.port}/{self.name}"

    def connect(self, connector: Optional[Connector] = None) -> Any:
        """Open a session, raising ``ConnectionFailed`` with a readable reason.

        The caller reports the failure, so the span records it as metadata
        instead of logging an error of its own.
        """

        connect_fn = connector or _connect_mysql
        failure: Optional[BaseException] = None
        with telemetry.span(
            "connection::open",
            component="connection",
            metadata={"url": self.redacted_url},
        ) as span_handle:
            try:
                session = connect_fn(self)
            except (pymysql.MySQLError, OSError) as exc:
                span_handle.add_metadata("error", type(exc).__name__)
                failure = exc
        if failure is not None:
            raise ConnectionFailed(
                f"Could not connect to {self.redacted_url}: {_describe(failure)}",
                config=self,
            ) from failure
        telemetry.record_event("connection.open", data={"url": self.redacted_url})
        return session


def _connect_mysql(config: DbConfig) -> Any:
    return pymysql.connect(
        host=config.host,
        port=config.port,
        user=config.user,
        password=config.password,
        database=config.name,
    )


def _describe(exc: BaseException) -> str:
    # MySQL errors carry (code, message) in args.
    if isinstance(exc, pymysql.MySQLError) and len(exc.args) >= 2:
        return f"{exc.args[1]} (code {exc.args[0]})"
    return str(exc) or type(exc).__name__


__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "ConnectionFailed",
    "Connector",
    "DbConfig",
    "SqlVariant",
]
