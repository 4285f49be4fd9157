"""Comment block extraction CLI commands."""

import argparse
import json
from pathlib import Path

from sourcegen.comments import check_tag, extract_from_file, extract_untagged_from_file
from sourcegen.config import load_config
from sourcegen.discover import list_source_files


def cmd_blocks(args: argparse.Namespace) -> int:
    if args.tag:
        check_tag(args.tag)
    config = load_config()

    found = []
    for path in list_source_files(Path(args.dir).resolve(), args.ext, config=config):
        if args.tag:
            found.extend(extract_from_file(args.tag, path))
        else:
            found.extend(extract_untagged_from_file(path))

    if args.json:
        payload = [
            {
                "file": str(loc.file),
                "line": block.line,
                "id": block.id,
                "contents": block.contents,
            }
            for loc, block in found
        ]
        print(json.dumps(payload, indent=2))
        return 0

    for loc, block in found:
        link = loc.render(base_url=config.base_url)
        first = block.contents[0] if block.contents else ""
        label = f"{block.id}: " if block.id else ""
        print(link)
        print(f"  {label}{first}")

    print(f"\n{len(found)} block(s) in {Path(args.dir)}")
    return 0
