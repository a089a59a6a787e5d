"""
runner.py

Responsibility: Run external commands for the build, honoring dry-run mode.

Every command is echoed to stdout as `>>> program arg1 arg2` before it runs,
so the build log shows exactly what was (or would have been) executed.
The child's stdout/stderr are inherited from the host process.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Mapping, Sequence

from buildutil.context import BuildContext
from buildutil.errors import CommandError

LOG = logging.getLogger(__name__)


def format_command(command: Sequence[str]) -> str:
    return " ".join(command)


def run(
    context: BuildContext,
    command: Sequence[str],
    *,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> None:
    """
    Run `command`, raising CommandError if it cannot start or exits non-zero.

    In dry-run mode the command line is printed but nothing is executed.
    """
    cmd = [str(part) for part in command]
    if not cmd:
        raise CommandError("Empty command")
    print(">>>", format_command(cmd), flush=True)
    if context.dry_run:
        return

    LOG.debug("Running command: %s (cwd=%s)", format_command(cmd), cwd)
    try:
        completed = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            env=dict(env) if env is not None else None,
            check=False,
        )
    except OSError as e:
        raise CommandError(f"Command failed to start: {format_command(cmd)}: {e}", command=cmd) from e

    if completed.returncode != 0:
        raise CommandError(
            f"Command failed with exit code {completed.returncode}: {format_command(cmd)}",
            command=cmd,
        )


def run_command(context: BuildContext, program: str, *args: str) -> None:
    run(context, [program, *args])
