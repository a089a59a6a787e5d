"""
git.py

Responsibility: Extract version-control metadata through the git CLI.

Git metadata is best-effort: if the git client is not installed, a warning is
logged once per BuildContext and empty strings are returned. An installed git
that fails is an error.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass

from buildutil.context import BuildContext
from buildutil.errors import GitError

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitMetadata:
    commit: str = ""
    branch: str = ""
    tag: str = ""
    date: str = ""

    @property
    def short_commit(self) -> str:
        return self.commit[:8]


def run_git(context: BuildContext, *args: str) -> str:
    """
    Run a git subcommand and return its trimmed stdout.

    Returns "" when the git binary cannot be found.
    """
    cmd = [context.git, *args]
    LOG.debug("Running git command: %s", " ".join(cmd))
    try:
        completed = subprocess.run(cmd, check=False, text=True, errors="replace", capture_output=True)
    except FileNotFoundError:
        if not context.warned_missing_git:
            LOG.warning("can't find '%s' in PATH, git metadata will be empty", context.git)
            context.warned_missing_git = True
        return ""
    except OSError as e:
        raise GitError(f"{' '.join(cmd)}: {e}") from e

    if completed.returncode != 0:
        raise GitError(f"{' '.join(cmd)}: exit status {completed.returncode}\n{completed.stderr}")
    return completed.stdout.strip()


def git_metadata(context: BuildContext) -> GitMetadata:
    """Collect commit, branch, tag and commit timestamp of HEAD."""
    commit = run_git(context, "rev-parse", "HEAD")
    if not commit:
        return GitMetadata()
    tags = run_git(context, "tag", "--points-at", "HEAD").splitlines()
    return GitMetadata(
        commit=commit,
        branch=run_git(context, "rev-parse", "--abbrev-ref", "HEAD"),
        tag=tags[0].strip() if tags else "",
        date=run_git(context, "log", "-1", "--format=%ct"),
    )
