"""
files.py

Responsibility: Copy files into the build output.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from buildutil.errors import BuildError

DIR_MODE = 0o755


def copy_file(dst: str | Path, src: str | Path, mode: int = 0o644) -> None:
    """
    Copy `src` to `dst`, creating parent directories as needed.

    `dst` is created with `mode` (subject to umask) or truncated if it exists.
    """
    dst_path = Path(dst)
    try:
        dst_path.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        fd = os.open(dst_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, "wb") as dest_file:
            with open(src, "rb") as src_file:
                shutil.copyfileobj(src_file, dest_file)
    except OSError as e:
        raise BuildError(f"Failed copying {src} to {dst}: {e}") from e
