"""sourcegen — helpers for code and docs generated from a source tree.

Discover source files, pull tagged `//` comment blocks out of them, run
generated text through the formatter, and verify that checked-in generated
files match what the generator produces now.
"""

from sourcegen.comments import CommentBlock, extract_comment_blocks
from sourcegen.config import SourcegenConfig, load_config
from sourcegen.discover import list_files, list_rust_files, list_source_files
from sourcegen.errors import (
    ContentDrift,
    FormatterFailed,
    PreconditionViolation,
    SourceIOError,
    SourcegenError,
    ToolchainUnavailable,
)
from sourcegen.formatter import pushenv, reformat
from sourcegen.location import Location
from sourcegen.paths import project_root
from sourcegen.sync import add_preamble, ensure_file_contents

__all__ = [
    "CommentBlock",
    "ContentDrift",
    "FormatterFailed",
    "Location",
    "PreconditionViolation",
    "SourceIOError",
    "SourcegenConfig",
    "SourcegenError",
    "ToolchainUnavailable",
    "add_preamble",
    "ensure_file_contents",
    "extract_comment_blocks",
    "list_files",
    "list_rust_files",
    "list_source_files",
    "load_config",
    "project_root",
    "pushenv",
    "reformat",
]
