"""
env.py

Responsibility: Read build inputs from the environment: the VERSION file
and the GOPATH workspace root.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from buildutil.errors import BuildError, ConfigError

VERSION_FILE = "VERSION"


def read_version(directory: str | Path | None = None) -> str:
    """Return the contents of the VERSION file with surrounding whitespace removed."""
    path = Path(directory or ".") / VERSION_FILE
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise BuildError(f"Cannot read version file {path}: {e}") from e
    return text.strip()


def gopath(environ: Mapping[str, str] | None = None) -> str:
    """Return the value GOPATH should be set to; it must already be set."""
    env = os.environ if environ is None else environ
    value = env.get("GOPATH", "")
    if not value:
        raise ConfigError("GOPATH is not set")
    return value
