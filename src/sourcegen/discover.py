"""Discover source files under a directory tree."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from sourcegen.config import SourcegenConfig, load_config
from sourcegen.errors import SourceIOError

logger = logging.getLogger(__name__)


def list_files(directory: Path | str) -> list[Path]:
    """Walk `directory` and return every regular file below it.

    Entries whose name starts with "." are skipped together with anything
    under them. Symlinks are not followed. The order is the traversal order
    of a depth-first work stack, not a sorted one.

    Raises:
        SourceIOError: If a directory cannot be listed or an entry's type
            cannot be determined.
    """
    files: list[Path] = []
    work = [Path(directory)]
    while work:
        current = work.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as exc:
            raise SourceIOError(f"cannot read directory {current}: {exc}") from exc

        for entry in entries:
            if entry.name.startswith("."):
                continue
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = entry.is_file(follow_symlinks=False)
            except OSError as exc:
                raise SourceIOError(
                    f"cannot determine type of {entry.path}: {exc}"
                ) from exc
            if is_dir:
                work.append(Path(entry.path))
            elif is_file:
                files.append(Path(entry.path))

    logger.debug("found %d files under %s", len(files), directory)
    return files


def list_source_files(
    directory: Path | str,
    extension: str | None = None,
    config: SourcegenConfig | None = None,
) -> list[Path]:
    """Like list_files, keeping only names that end in `extension`.

    `extension` defaults to the configured ``source_extension``.
    """
    if extension is None:
        extension = (config or load_config()).source_extension
    return [p for p in list_files(directory) if p.name.endswith(extension)]


def list_rust_files(directory: Path | str) -> list[Path]:
    """Return every ``.rs`` file under `directory`."""
    return list_source_files(directory, ".rs")
