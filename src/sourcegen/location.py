"""Render a file + line pointer as a link into the hosted repository."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sourcegen.config import load_config
from sourcegen.errors import PreconditionViolation
from sourcegen.paths import project_root


@dataclass(frozen=True)
class Location:
    file: Path
    line: int

    def render(self, root: Path | str | None = None, base_url: str | None = None) -> str:
        """Format as ``<base_url>/<relative path>#L<line>[<file name>]``.

        Raises:
            PreconditionViolation: If the file is not under `root` or has no
                file name.
        """
        base = Path(root) if root else project_root()
        file = Path(self.file)
        try:
            relative = file.relative_to(base)
        except ValueError as exc:
            raise PreconditionViolation(f"{file} is not under {base}") from exc
        if not file.name:
            raise PreconditionViolation(f"{file} has no file name")

        url = (base_url if base_url is not None else load_config().base_url).rstrip("/")
        return f"{url}/{relative.as_posix()}#L{self.line}[{file.name}]"

    def __str__(self) -> str:
        return self.render()
