"""
context.py

Responsibility: Hold the settings and one-shot state shared by the helpers.

A `BuildContext` is created once by the driver (CLI or another program) and
passed to every helper that needs it, instead of relying on module globals.
It can be loaded from a small YAML file:

    dry_run: false
    git: git
    go_root: /usr/local/go
    vendor_dir: vendor
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from buildutil.errors import ConfigError


@dataclass
class BuildContext:
    """Settings for one build run."""

    dry_run: bool = False
    git: str = "git"
    go_root: str | None = None
    vendor_dir: str = "vendor"
    warned_missing_git: bool = field(default=False, init=False, repr=False)

    def go_tool(self) -> str:
        """Path of the `go` binary: under go_root when set, else looked up on PATH."""
        if self.go_root:
            return os.path.join(self.go_root, "bin", "go")
        return "go"

    def vendor_segment(self) -> str:
        return f"/{self.vendor_dir}/"

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> "BuildContext":
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        goroot = env.get("GOROOT", "").strip()
        if goroot:
            values["go_root"] = goroot
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


_FIELD_TYPES: dict[str, tuple[type, ...]] = {
    "dry_run": (bool,),
    "git": (str,),
    "go_root": (str, type(None)),
    "vendor_dir": (str,),
}


def _validate(data: Mapping[str, Any]) -> dict[str, Any]:
    known = {f.name for f in fields(BuildContext) if f.init}
    out: dict[str, Any] = {}
    for key, value in data.items():
        key = str(key)
        if key not in known:
            raise ConfigError(f"Unknown config key: `{key}`")
        if not isinstance(value, _FIELD_TYPES[key]):
            raise ConfigError(f"`{key}` has invalid type {type(value).__name__}")
        if isinstance(value, str):
            value = value.strip()
            if not value:
                if key != "go_root":
                    raise ConfigError(f"`{key}` must not be empty")
                value = None
        out[key] = value
    return out


def load_context(path: str | Path, **overrides: Any) -> BuildContext:
    """
    Load a `BuildContext` from a YAML file.

    Keyword overrides that are not None take precedence over file values
    (the CLI uses this for its flags).
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise ConfigError(f"Config file does not exist: {cfg_path}")
    try:
        raw = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {cfg_path}: {e}") from e
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("Config must be a mapping/object at the top level.")

    values = _validate(raw)
    values.update({k: v for k, v in overrides.items() if v is not None})
    return BuildContext(**values)
