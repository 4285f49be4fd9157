"""Formatter and sync-check CLI commands."""

import argparse
from pathlib import Path

from sourcegen.errors import ContentDrift, SourceIOError
from sourcegen.formatter import reformat
from sourcegen.sync import ensure_file_contents


def _read(path: str) -> str:
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceIOError(f"cannot read {path}: {exc}") from exc


def cmd_reformat(args: argparse.Namespace) -> int:
    print(reformat(_read(args.file)), end="")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    try:
        ensure_file_contents(Path(args.target), _read(args.expected))
    except ContentDrift as exc:
        print(f"DRIFT: {exc}")
        return 1
    print(f"{args.target} is up to date")
    return 0
