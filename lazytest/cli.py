"""Command-line front door for lazytest.

Parses CLI options, sets up file logging, and opens the event stream (a
spawned command, a file, or stdin). Then dispatches into the interactive
runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .errors import PayloadDecodeError
from .runtime import run_session
from .runtime.config import load_log_level, save_theme_name
from .runtime.logs import configure_logging
from .runtime.stream import EventStream
from .ui_theme import available_theme_names, normalize_theme_name

logger = logging.getLogger(__name__)


def _log_level(value: str) -> str:
    """argparse type for ``logging`` level names."""
    candidate = value.strip().upper()
    if not isinstance(logging.getLevelName(candidate), int):
        raise argparse.ArgumentTypeError(f"invalid log level: {value!r}")
    return candidate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazytest",
        description="Browse a live `go test -json` event stream in a terminal UI.",
    )
    parser.add_argument("--file", type=Path, default=None, help="Read events from FILE instead of stdin.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}); remembered for later sessions.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--nopager", action="store_true", help="Print the final report once instead of the UI.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write diagnostic logs to FILE.")
    parser.add_argument("--log-level", type=_log_level, default=None, help="Diagnostic log level.")
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Test command to run, e.g. `-- go test -json ./...`.",
    )
    return parser


def _open_stream(args: argparse.Namespace) -> EventStream:
    command = list(args.command)
    if command[:1] == ["--"]:
        command = command[1:]
    if command and args.file is not None:
        raise SystemExit("Cannot combine --file with a test command.")
    if command:
        try:
            return EventStream.spawn(command)
        except OSError as exc:
            raise SystemExit(f"Failed to run {command[0]}: {exc}") from exc
    if args.file is not None:
        try:
            return EventStream(os.open(args.file, os.O_RDONLY), owns_fd=True)
        except OSError as exc:
            raise SystemExit(f"Cannot read {args.file}: {exc}") from exc
    if os.isatty(sys.stdin.fileno()):
        raise SystemExit("No event stream: pipe `go test -json` into lazytest or pass a command.")
    return EventStream(sys.stdin.fileno())


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch lazytest on the chosen event stream."""
    args = build_parser().parse_args(argv)

    configure_logging(args.log_level or load_log_level(), args.log_file)
    if args.theme is not None:
        args.theme = normalize_theme_name(args.theme)
        save_theme_name(args.theme)

    stream = _open_stream(args)
    try:
        run_session(stream, args.theme, args.no_color, args.nopager)
    except PayloadDecodeError as exc:
        logger.error("event stream aborted: %s", exc)
        raise SystemExit(f"lazytest: {exc}") from exc


if __name__ == "__main__":
    main()
