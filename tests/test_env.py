import pytest

from buildutil.env import gopath, read_version
from buildutil.errors import BuildError, ConfigError


def test_read_version_strips_surrounding_whitespace(tmp_path) -> None:
    (tmp_path / "VERSION").write_text("\n  1.8.2 unstable \n\n", encoding="utf-8")

    assert read_version(tmp_path) == "1.8.2 unstable"


def test_read_version_uses_working_directory(tmp_path, monkeypatch) -> None:
    (tmp_path / "VERSION").write_text("2.0.0\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert read_version() == "2.0.0"


def test_read_version_missing_file(tmp_path) -> None:
    with pytest.raises(BuildError):
        read_version(tmp_path)


def test_gopath_returns_value() -> None:
    assert gopath({"GOPATH": "/home/dev/go"}) == "/home/dev/go"


@pytest.mark.parametrize("environ", [{}, {"GOPATH": ""}])
def test_gopath_unset_is_an_error(environ) -> None:
    with pytest.raises(ConfigError, match="GOPATH is not set"):
        gopath(environ)


def test_gopath_reads_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("GOPATH", "/tmp/gopath")

    assert gopath() == "/tmp/gopath"


def test_read_version_invalid_utf8(tmp_path) -> None:
    (tmp_path / "VERSION").write_bytes(b"1.0-\xff\n")

    with pytest.raises(BuildError):
        read_version(tmp_path)
