"""File discovery CLI commands."""

import argparse

from sourcegen.discover import list_files, list_source_files


def cmd_files(args: argparse.Namespace) -> int:
    if args.all:
        paths = list_files(args.dir)
    else:
        paths = list_source_files(args.dir, args.ext)

    for path in paths:
        print(path)
    return 0
