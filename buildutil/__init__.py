"""
buildutil package

Helper utilities for build drivers. Each module wraps one OS facility:
- `runner.py`: run external commands (with dry-run support)
- `env.py`: VERSION file and GOPATH lookup
- `git.py`: git metadata via the git CLI
- `renderer.py`: render Jinja2 templates into new files
- `files.py`: copy files
- `packages.py`: expand `...` package patterns via `go list`
- `cli.py`: command-line driver over the helpers above
"""

from __future__ import annotations

from buildutil.context import BuildContext, load_context
from buildutil.errors import BuildError, CommandError, ConfigError, GitError, RenderError

__all__ = [
    "BuildContext",
    "BuildError",
    "CommandError",
    "ConfigError",
    "GitError",
    "RenderError",
    "__version__",
    "load_context",
]

__version__ = "0.1.0"
