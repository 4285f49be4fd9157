"""Extract `//` comment blocks from source text.

A block is a run of consecutive line comments. Tagged blocks carry a
category on their first line, for example::

    // Feature: Join Lines
    //
    // Joins selected lines into one.

``CommentBlock.extract("Feature", text)`` returns that block with
``id == "Join Lines"`` and ``contents == ["", "Joins selected lines into one."]``.
Several tags can live in the same file; each extraction keeps one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from sourcegen.errors import PreconditionViolation, SourceIOError
from sourcegen.location import Location

logger = logging.getLogger(__name__)

COMMENT_MARKER = "//"
COMMENT_PREFIX = "// "


def check_tag(tag: str) -> None:
    """Raise PreconditionViolation unless `tag` starts with an uppercase character."""
    if not tag[:1].isupper():
        raise PreconditionViolation(
            f"tag must start with an uppercase character, got {tag!r}"
        )


@dataclass
class CommentBlock:
    """One comment run: its tag value, first content line and payload lines."""
    id: str
    line: int
    contents: list[str]

    @classmethod
    def extract(cls, tag: str, text: str) -> list[CommentBlock]:
        """Return the blocks whose first line reads ``<tag>: <id>``.

        The tag line is consumed; the remaining lines become the contents,
        which may be empty. Blocks with any other first line are dropped.

        Raises:
            PreconditionViolation: If `tag` does not start with an
                uppercase character.
        """
        check_tag(tag)
        prefix = f"{tag}:"
        blocks = []
        for line, lines in extract_comment_blocks(text, allow_blocks_with_empty_lines=True):
            first, rest = lines[0], lines[1:]
            if first.startswith(prefix):
                block_id = first[len(prefix):].strip()
                blocks.append(cls(id=block_id, line=line, contents=rest))
        logger.debug("extracted %d %s blocks", len(blocks), tag)
        return blocks

    @classmethod
    def extract_untagged(cls, text: str) -> list[CommentBlock]:
        """Return every comment block with an empty id."""
        return [
            cls(id="", line=line, contents=lines)
            for line, lines in extract_comment_blocks(text, allow_blocks_with_empty_lines=True)
        ]


def _physical_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def extract_comment_blocks(
    text: str,
    allow_blocks_with_empty_lines: bool,
) -> list[tuple[int, list[str]]]:
    """Group consecutive `// ` lines of `text` into blocks.

    With `allow_blocks_with_empty_lines`, a bare `//` line stays inside the
    current block as an empty string; otherwise it ends the block like any
    other non-comment line.

    Returns:
        ``(line, lines)`` pairs in source order, where `line` is the 1-based
        number of the line following the previous terminator.
    """
    blocks: list[tuple[int, list[str]]] = []
    start = 1
    current: list[str] = []

    for index, raw in enumerate(_physical_lines(text)):
        line = raw.lstrip()
        if line == COMMENT_MARKER and allow_blocks_with_empty_lines:
            current.append("")
            continue

        if line.startswith(COMMENT_PREFIX):
            current.append(line[len(COMMENT_PREFIX):])
        else:
            if current:
                blocks.append((start, current))
                current = []
            start = index + 2

    if current:
        blocks.append((start, current))
    return blocks


def _read_source(path: Path) -> str:
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceIOError(f"cannot read {path}: {exc}") from exc


def extract_from_file(tag: str, path: Path | str) -> list[tuple[Location, CommentBlock]]:
    """Tagged extraction over a file, pairing each block with its Location."""
    path = Path(path)
    blocks = CommentBlock.extract(tag, _read_source(path))
    return [(Location(path, block.line), block) for block in blocks]


def extract_untagged_from_file(path: Path | str) -> list[tuple[Location, CommentBlock]]:
    """Untagged extraction over a file, pairing each block with its Location."""
    path = Path(path)
    blocks = CommentBlock.extract_untagged(_read_source(path))
    return [(Location(path, block.line), block) for block in blocks]
