import os

import pytest

from buildutil.context import BuildContext, load_context
from buildutil.errors import ConfigError


def test_defaults() -> None:
    ctx = BuildContext()

    assert ctx.dry_run is False
    assert ctx.git == "git"
    assert ctx.go_tool() == "go"
    assert ctx.vendor_segment() == "/vendor/"
    assert ctx.warned_missing_git is False


def test_load_context_from_yaml(tmp_path) -> None:
    cfg = tmp_path / "build.yaml"
    cfg.write_text("dry_run: true\ngit: /usr/bin/git\ngo_root: /opt/go\nvendor_dir: third_party\n", encoding="utf-8")

    ctx = load_context(cfg)

    assert ctx.dry_run is True
    assert ctx.git == "/usr/bin/git"
    assert ctx.go_tool() == os.path.join("/opt/go", "bin", "go")
    assert ctx.vendor_segment() == "/third_party/"


def test_load_context_empty_file_gives_defaults(tmp_path) -> None:
    cfg = tmp_path / "build.yaml"
    cfg.write_text("", encoding="utf-8")

    assert load_context(cfg) == BuildContext()


def test_overrides_take_precedence(tmp_path) -> None:
    cfg = tmp_path / "build.yaml"
    cfg.write_text("dry_run: false\n", encoding="utf-8")

    assert load_context(cfg, dry_run=True).dry_run is True
    assert load_context(cfg, dry_run=None).dry_run is False


@pytest.mark.parametrize(
    "text",
    [
        "- a\n- b\n",
        "unknown: 1\n",
        "dry_run: yes-please\n",
        "git: ''\n",
        "vendor_dir: [a]\n",
    ],
)
def test_invalid_config(tmp_path, text) -> None:
    cfg = tmp_path / "build.yaml"
    cfg.write_text(text, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_context(cfg)


def test_missing_config_file(tmp_path) -> None:
    with pytest.raises(ConfigError):
        load_context(tmp_path / "nope.yaml")


def test_from_environ_uses_goroot() -> None:
    ctx = BuildContext.from_environ({"GOROOT": "/usr/lib/go"}, dry_run=True)

    assert ctx.go_root == "/usr/lib/go"
    assert ctx.dry_run is True


def test_from_environ_without_goroot() -> None:
    assert BuildContext.from_environ({}).go_root is None
