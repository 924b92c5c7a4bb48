"""Command line entry point: connect, then open the editor."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Any, Callable, Optional, Sequence

from rsql import __version__
from rsql.connection import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    ConnectionFailed,
    DbConfig,
    SqlVariant,
)
from rsql.runtime import telemetry

Launcher = Callable[[Any], None]


def _env_int(key: str, fallback: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rsql", description="TUI SQL client.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "variant",
        type=SqlVariant,
        choices=list(SqlVariant),
        metavar="{" + ",".join(v.value for v in SqlVariant) + "}",
        help="SQL variant to use",
    )
    parser.add_argument("--username", required=True, help="Database user")
    parser.add_argument("--db", required=True, help="Database name")
    parser.add_argument("--password", required=True, help="Database password")
    parser.add_argument(
        "--host",
        default=os.environ.get("RSQL_HOST", DEFAULT_HOST),
        help=f"Server host (default: {DEFAULT_HOST})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=_env_int("RSQL_PORT", DEFAULT_PORT),
        help=f"Server port (default: {DEFAULT_PORT})",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> DbConfig:
    return DbConfig(
        name=args.db,
        user=args.username,
        password=args.password,
        host=args.host,
        port=args.port,
        variant=args.variant,
    )


def _launch_tui(connection: Any) -> None:
    from rsql.adapters.textual.app import run

    run(connection)


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    launcher: Optional[Launcher] = None,
) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = config_from_args(args)
    except ValueError as exc:
        print(f"rsql: {exc}", file=sys.stderr)
        return 2

    try:
        connection = config.connect()
    except ConnectionFailed as exc:
        print(f"rsql: {exc}", file=sys.stderr)
        return 1

    telemetry.configure(preset="production")
    (launcher or _launch_tui)(connection)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
