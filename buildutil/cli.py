"""
cli.py

Responsibility: CLI entrypoint exposing the build helpers.

Helpers raise `BuildError`; this module is the only place that turns an error
into a logged message and a non-zero exit status.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

import yaml

from buildutil.context import BuildContext, load_context
from buildutil.env import gopath, read_version
from buildutil.errors import BuildError, ConfigError
from buildutil.files import copy_file
from buildutil.git import git_metadata, run_git
from buildutil.logging_utils import configure_logging
from buildutil.packages import expand_packages_no_vendor
from buildutil.renderer import render, render_string
from buildutil.runner import run

LOG = logging.getLogger(__name__)


def _context(args: argparse.Namespace) -> BuildContext:
    dry_run = True if args.dry_run else None
    if args.config:
        return load_context(args.config, dry_run=dry_run)
    return BuildContext.from_environ(dry_run=dry_run)


def _octal(value: str) -> int:
    try:
        return int(value, 8)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid octal mode: {value!r}") from e


def _load_data(args: argparse.Namespace) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if args.data:
        path = Path(args.data)
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot load template data from {path}: {e}") from e
        if raw is not None and not isinstance(raw, dict):
            raise ConfigError("Template data must be a mapping/object at the top level.")
        data.update(raw or {})
    for item in args.set:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ConfigError(f"--set expects KEY=VALUE, got {item!r}")
        data[key.strip()] = value
    return data


def _remainder(values: list[str]) -> list[str]:
    if values and values[0] == "--":
        return values[1:]
    return values


def run_cmd(args: argparse.Namespace) -> int:
    run(_context(args), _remainder(args.cmd))
    return 0


def version_cmd(args: argparse.Namespace) -> int:
    print(read_version(args.dir))
    return 0


def gopath_cmd(args: argparse.Namespace) -> int:
    print(gopath())
    return 0


def git_cmd(args: argparse.Namespace) -> int:
    out = run_git(_context(args), *_remainder(args.git_args))
    if out:
        print(out)
    return 0


def git_info_cmd(args: argparse.Namespace) -> int:
    meta = git_metadata(_context(args))
    print(f"commit={meta.commit}")
    print(f"branch={meta.branch}")
    print(f"tag={meta.tag}")
    print(f"date={meta.date}")
    return 0


def render_cmd(args: argparse.Namespace) -> int:
    render(args.template, args.output, args.mode, _load_data(args))
    return 0


def render_string_cmd(args: argparse.Namespace) -> int:
    render_string(args.text, args.output, args.mode, _load_data(args))
    return 0


def copy_cmd(args: argparse.Namespace) -> int:
    copy_file(args.dst, args.src, args.mode)
    return 0


def expand_cmd(args: argparse.Namespace) -> int:
    for pkg in expand_packages_no_vendor(_context(args), args.patterns):
        print(pkg)
    return 0


def _add_render_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("output", help="Output file (must not exist)")
    p.add_argument("--data", default=None, help="YAML file with template variables")
    p.add_argument("--set", action="append", default=[], metavar="KEY=VALUE", help="Set a template variable")
    p.add_argument("--mode", type=_octal, default=0o644, help="Output file mode in octal (default: 644)")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="buildutil", description="Build helper utilities")
    p.add_argument("-n", "--dry-run", action="store_true", help="dry run, don't execute commands")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (repeatable)")
    p.add_argument("--config", default=None, help="YAML config file")
    sub = p.add_subparsers(dest="command", required=True)

    r = sub.add_parser("run", help="Run a command (echoed; skipped under --dry-run)")
    r.add_argument("cmd", nargs=argparse.REMAINDER, help="Command and arguments")
    r.set_defaults(func=run_cmd)

    v = sub.add_parser("version", help="Print the contents of the VERSION file")
    v.add_argument("--dir", default=None, help="Directory containing VERSION (default: cwd)")
    v.set_defaults(func=version_cmd)

    gp = sub.add_parser("gopath", help="Print GOPATH")
    gp.set_defaults(func=gopath_cmd)

    g = sub.add_parser("git", help="Run a git subcommand and print its output")
    g.add_argument("git_args", nargs=argparse.REMAINDER, help="git arguments")
    g.set_defaults(func=git_cmd)

    gi = sub.add_parser("git-info", help="Print commit, branch, tag and date of HEAD")
    gi.set_defaults(func=git_info_cmd)

    t = sub.add_parser("render", help="Render a template file into a new file")
    t.add_argument("template", help="Template file")
    _add_render_options(t)
    t.set_defaults(func=render_cmd)

    ts = sub.add_parser("render-string", help="Render an inline template into a new file")
    ts.add_argument("text", help="Template text")
    _add_render_options(ts)
    ts.set_defaults(func=render_string_cmd)

    c = sub.add_parser("copy", help="Copy a file")
    c.add_argument("src", help="Source file")
    c.add_argument("dst", help="Destination file")
    c.add_argument("--mode", type=_octal, default=0o644, help="Destination mode in octal (default: 644)")
    c.set_defaults(func=copy_cmd)

    e = sub.add_parser("expand", help="Expand package patterns, skipping vendored packages")
    e.add_argument("patterns", nargs="+", help="Import path patterns")
    e.set_defaults(func=expand_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    if args.command == "run" and not _remainder(args.cmd):
        parser.error("run: a command is required")
    try:
        return int(args.func(args))
    except BuildError as e:
        LOG.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
