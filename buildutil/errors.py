"""
Exception types raised by buildutil helpers.

Helpers never exit the process themselves; the driver catches `BuildError`
and decides how to report it.
"""

from __future__ import annotations

from typing import Sequence


class BuildError(Exception):
    """Base class for all buildutil errors."""


class ConfigError(BuildError):
    """Raised for invalid configuration or missing required environment."""


class CommandError(BuildError):
    """Raised when an external command cannot be started or exits non-zero."""

    def __init__(self, message: str, *, command: Sequence[str] = (), output: str = "") -> None:
        super().__init__(message)
        self.command = list(command)
        self.output = output


class GitError(BuildError):
    """Raised when an installed git client fails."""


class RenderError(BuildError):
    """Raised when a template cannot be parsed, rendered or written."""
