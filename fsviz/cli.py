# fsviz/cli.py

"""
Command-line interface.

Usage: ``fsviz [path] [options]``. Without an output flag the coloured tree
is printed to standard output. ``--raw``, ``--json`` and ``--csv`` write
to files instead, with colours stripped.

Exit codes: 0 on success (including ``--help`` and ``--version``), 1 on
usage errors, an unreadable root, or an output file that cannot be
written. Problems with individual entries are only logged.
"""


from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import NoReturn, Sequence

import structlog
from pydantic import ValidationError

from fsviz import __version__
from fsviz.export import to_csv, to_json
from fsviz.logging import setup_logging
from fsviz.render import ANSI, render, strip_ansi
from fsviz.settings import Settings
from fsviz.tree import DEFAULT_MAX_DEPTH, walk

logger = structlog.get_logger(__name__)


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> ArgumentParser:
    p = ArgumentParser(
        prog="fsviz",
        description="Display a directory as a tree, or export it as JSON or CSV.",
    )
    p.add_argument("path", nargs="?", default=".", help="Directory to scan (default: .).")
    p.add_argument(
        "-s",
        "--simple",
        action="store_true",
        help="Print a flat list with dashes instead of tree lines.",
    )
    p.add_argument(
        "-d",
        "--dirs-only",
        action="store_true",
        help="Exclude files and symbolic links. Output directories only.",
    )
    p.add_argument(
        "-i",
        "--ignore",
        metavar="PATTERNS",
        help="Glob patterns (separated by ',' or '|') of relative paths to ignore.",
    )
    p.add_argument(
        "-r",
        "--raw",
        dest="raw_output",
        metavar="FILENAME",
        help="Write the tree to FILENAME instead of the console (overwritten).",
    )
    structured = p.add_mutually_exclusive_group()
    structured.add_argument(
        "-j",
        "--json",
        dest="json_output",
        metavar="FILENAME",
        help="Write a JSON export ('.json' is appended if missing).",
    )
    structured.add_argument(
        "-c",
        "--csv",
        dest="csv_output",
        metavar="FILENAME",
        help="Write a CSV export ('.csv' is appended if missing).",
    )
    p.add_argument(
        "-L",
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        metavar="N",
        help=f"Descend at most N levels (default: {DEFAULT_MAX_DEPTH}).",
    )
    p.add_argument(
        "--log-level",
        default="warning",
        help="Diagnostic verbosity: debug, info, warning, error (default: warning).",
    )
    p.add_argument("-v", "--version", action="version", version=__version__)
    return p


def _describe(exc: ValidationError) -> str:
    messages = []
    for err in exc.errors():
        msg = err["msg"].removeprefix("Value error, ")
        loc = ".".join(str(part) for part in err["loc"])
        messages.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(messages)


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    """
    Parse command-line arguments into :class:`~fsviz.settings.Settings`.

    Exits with status 1 (via :meth:`ArgumentParser.error`) on any usage
    error, including an invalid ignore pattern.
    """

    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return Settings(**vars(args))
    except ValidationError as exc:
        parser.error(_describe(exc))


def write_output(target: str | os.PathLike[str], text: str) -> None:
    """
    Write ``text`` to ``target`` with colours stripped, replacing any existing file.

    Names that were not valid UTF-8 on disk are written back as their
    original bytes.
    """
    Path(target).write_text(
        strip_ansi(text), encoding="utf-8", errors="surrogateescape", newline=""
    )


def print_console(text: str) -> None:
    """Print ``text`` to standard output, escaping what the terminal cannot encode."""
    encoding = getattr(sys.stdout, "encoding", None) or "utf-8"
    print(text.encode(encoding, "backslashreplace").decode(encoding))


def main(argv: Sequence[str] | None = None) -> int:
    settings = parse_args(argv)
    setup_logging(settings.log_level)

    try:
        entries = walk(
            settings.path,
            ignore=settings.ignore,
            dirs_only=settings.dirs_only,
            max_depth=settings.max_depth,
        )
    except OSError as exc:
        logger.error("Cannot scan %s: %s", settings.path, exc)
        return 1

    outputs: list[tuple[Path, str]] = []
    if settings.raw_output is not None:
        outputs.append(
            (settings.raw_output, render(entries, simple=settings.simple, palette=ANSI))
        )
    if settings.json_output is not None:
        outputs.append((settings.json_output, to_json(entries)))
    if settings.csv_output is not None:
        outputs.append((settings.csv_output, to_csv(entries)))

    if not outputs:
        text = render(entries, simple=settings.simple, palette=ANSI)
        if text:
            print_console(text)
        return 0

    for target, text in outputs:
        try:
            write_output(target, text)
        except OSError as exc:
            logger.error("Cannot write %s: %s", target, exc)
            return 1
        logger.info("Wrote %s", target)
    return 0
