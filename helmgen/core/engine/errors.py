"""
Generator errors.

OS-level failures (cannot list a directory, cannot open a file) are not
wrapped; they surface as the original ``OSError``.
"""

from __future__ import annotations


class GenerateError(Exception):
    """Base class for failures raised while running generators."""


class DirectiveError(GenerateError):
    """A directive was recognized but its line could not be read."""


class GeneratorError(GenerateError):
    """A generator could not be run, or exited unsuccessfully."""

    def __init__(self, command: str, path: str, cause: str):
        self.command = command
        self.path = path
        self.cause = cause
        super().__init__(f"failed to execute {command} ({path}): {cause}")
