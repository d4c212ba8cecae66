"""Tests for the command line entry point."""

from __future__ import annotations

from pathlib import Path

import pytest

from mongohandle import cli
from mongohandle import config as config_module
from mongohandle.config import ClientConfig


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "config.toml"
    monkeypatch.setattr(config_module, "CONFIG_FILE", path)
    return path


@pytest.mark.parametrize(
    ("text", "expected"),
    [("3000", 3000), ("db1", "db1"), ("db1:3000", ["db1", 3000]), ("db1:abc", "db1:abc")],
)
def test_parse_slot(text: str, expected) -> None:
    assert cli.parse_slot(text) == expected


def test_endpoints_for_pair(capsys: pytest.CaptureFixture[str]) -> None:
    code = cli.main(["--left", "db1.example.com:3000", "--right", "db2.example.com", "endpoints"])

    assert code == 0
    assert capsys.readouterr().out.splitlines() == ["db1.example.com:3000", "db2.example.com:27017"]


def test_demo_list_prints_sizes(capsys: pytest.CaptureFixture[str]) -> None:
    code = cli.main(["--demo", "list"])

    lines = capsys.readouterr().out.splitlines()
    assert code == 0
    assert "admin\t8192" in lines
    assert "inventory\t73728" in lines


def test_demo_drop(capsys: pytest.CaptureFixture[str]) -> None:
    code = cli.main(["--demo", "drop", "inventory"])

    assert code == 0
    assert "Dropped inventory" in capsys.readouterr().out


def test_command_failure_exits_nonzero(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    def _failing_names(self):
        from mongohandle.errors import CommandFailedError

        raise CommandFailedError({"ok": 0, "errmsg": "unauthorized"})

    monkeypatch.setattr("mongohandle.server.Server.list_database_names", _failing_names)

    code = cli.main(["--demo", "names"])

    assert code == 1
    assert "unauthorized" in capsys.readouterr().err


def test_flags_override_loaded_config() -> None:
    args = cli.parse_args(["--host", "db", "--port", "3000", "--slave-ok", "names"])

    config = cli.build_config(args, ClientConfig(demo=True))

    assert config.host == "db"
    assert config.port == 3000
    assert config.demo is True
    assert config.options.slave_ok is True
    assert config.options.auto_reconnect is False


def test_save_writes_config(isolated_config: Path) -> None:
    cli.main(["--demo", "--auto-reconnect", "--save", "endpoints"])

    content = isolated_config.read_text()
    assert "demo = true" in content
    assert "auto_reconnect = true" in content


def test_invalid_pair_in_config_falls_back_to_defaults(
    isolated_config: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    isolated_config.write_text('demo = true\n\n[pair]\nleft = ["a", 1, 2]\n')

    code = cli.main(["endpoints"])

    assert code == 0
    assert capsys.readouterr().out.splitlines() == ["localhost:27017"]
