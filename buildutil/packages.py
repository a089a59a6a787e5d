"""
packages.py

Responsibility: Expand Go import path patterns (`./...`) into concrete packages,
skipping vendored ones.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Sequence

from buildutil.context import BuildContext
from buildutil.errors import CommandError

LOG = logging.getLogger(__name__)

WILDCARD = "..."


def expand_packages_no_vendor(context: BuildContext, patterns: Sequence[str]) -> list[str]:
    """
    Expand a cmd/go import path pattern, skipping vendored packages.

    Patterns are returned unchanged (and `go list` is not run) unless at least
    one of them contains the `...` wildcard.
    """
    if not any(WILDCARD in pattern for pattern in patterns):
        return list(patterns)

    cmd = [context.go_tool(), "list", *patterns]
    LOG.debug("Listing packages: %s", " ".join(cmd))
    try:
        completed = subprocess.run(
            cmd,
            check=False,
            text=True,
            errors="replace",
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
    except OSError as e:
        raise CommandError(f"package listing failed: {e}", command=cmd) from e
    if completed.returncode != 0:
        raise CommandError(
            f"package listing failed: exit status {completed.returncode}\n{completed.stdout}",
            command=cmd,
            output=completed.stdout,
        )

    vendor = context.vendor_segment()
    packages: list[str] = []
    for line in completed.stdout.splitlines():
        if vendor in line:
            continue
        line = line.strip()
        if line:
            packages.append(line)
    return packages
