"""Command-line access to the sourcegen helpers.

Usage:
    sourcegen files <dir> [--ext EXT | --all]
    sourcegen blocks <dir> [--tag TAG] [--ext EXT] [--json]
    sourcegen reformat <file>
    sourcegen check <target> <expected>
"""

import argparse
import contextlib
import logging
import sys
from pathlib import Path

from sourcegen.cli.blocks import cmd_blocks
from sourcegen.cli.files import cmd_files
from sourcegen.cli.generated import cmd_check, cmd_reformat
from sourcegen.errors import SourcegenError
from sourcegen.formatter import pushenv


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sourcegen",
        description="Source generation helpers: discovery, comment blocks, formatting, sync checks",
    )
    parser.add_argument(
        "--root", default=None,
        help="Project root (default: $SOURCEGEN_PROJECT_ROOT or the current directory)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command")

    # files
    files = sub.add_parser("files", help="List source files under a directory")
    files.add_argument("dir")
    ext = files.add_mutually_exclusive_group()
    ext.add_argument(
        "--ext", default=None,
        help="File name suffix to keep (default: configured source_extension)",
    )
    ext.add_argument(
        "--all", action="store_true",
        help="List every non-hidden file",
    )

    # blocks
    blocks = sub.add_parser("blocks", help="Extract comment blocks from source files")
    blocks.add_argument("dir")
    blocks.add_argument(
        "--tag", default=None,
        help="Only blocks whose first line is '<TAG>: <id>'",
    )
    blocks.add_argument("--ext", default=None, help="File name suffix to scan")
    blocks.add_argument(
        "--json", action="store_true",
        help="Output machine-readable JSON",
    )

    # reformat
    fmt = sub.add_parser("reformat", help="Print a file run through the formatter")
    fmt.add_argument("file")

    # check
    check = sub.add_parser(
        "check", help="Verify a generated file, updating it on drift",
    )
    check.add_argument("target", help="Generated file kept in the tree")
    check.add_argument("expected", help="File holding the freshly generated contents")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        "files": cmd_files,
        "blocks": cmd_blocks,
        "reformat": cmd_reformat,
        "check": cmd_check,
    }

    # --root overrides the project root for every default lookup, config included
    scope = (
        pushenv("SOURCEGEN_PROJECT_ROOT", str(Path(args.root).expanduser().resolve()))
        if args.root else contextlib.nullcontext()
    )
    try:
        with scope:
            return dispatch[args.command](args)
    except SourcegenError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
