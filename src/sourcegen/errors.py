"""Failure taxonomy for sourcegen.

Every failure is fail-fast: nothing in this package retries. The typed
classes exist so callers (tests, the CLI) can tell an environment problem
from content drift.
"""

from __future__ import annotations


class SourcegenError(Exception):
    """Base class for all sourcegen failures."""


class SourceIOError(SourcegenError):
    """A directory, entry or file could not be read or written."""


class PreconditionViolation(SourcegenError, ValueError):
    """The caller passed an argument the operation cannot accept."""


class ToolchainUnavailable(SourcegenError, RuntimeError):
    """The external formatter is missing or not on the expected toolchain."""


class FormatterFailed(SourcegenError, RuntimeError):
    """The external formatter exited with a non-zero status."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class ContentDrift(SourcegenError, AssertionError):
    """A generated file was out of date and has been rewritten.

    Subclasses AssertionError so a test runner reports it as a failure
    rather than an error.
    """

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path
