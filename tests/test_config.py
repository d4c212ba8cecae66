"""Tests for ClientConfig helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from mongohandle import config as config_module
from mongohandle.config import ClientConfig, PairConfig, ServerOptions, load_config, save_config
from mongohandle.models import MixedSlot, NoAddress, PairAddress, PortSlot, SingleHost


def test_default_config_targets_localhost() -> None:
    config = ClientConfig()

    assert config.address_spec() == NoAddress()
    assert config.options.slave_ok is False
    assert config.options.auto_reconnect is False


def test_address_spec_prefers_pair() -> None:
    config = ClientConfig(host="ignored", pair=PairConfig(left=["db1", 3000], right=4000))

    assert config.address_spec() == PairAddress(MixedSlot("db1", 3000), PortSlot(4000))


def test_address_spec_single_host_with_port() -> None:
    config = ClientConfig(host="db", port=3000)

    assert config.address_spec() == SingleHost("db", 3000)


def test_server_options_keep_unknown_keys() -> None:
    options = ServerOptions(slave_ok=True, appname="reports")

    assert options.model_dump() == {"slave_ok": True, "auto_reconnect": False, "appname": "reports"}


def test_with_options_updates_copy() -> None:
    config = ClientConfig()

    updated = config.with_options(auto_reconnect=True)

    assert updated.options.auto_reconnect is True
    assert config.options.auto_reconnect is False


def test_load_config_returns_defaults_when_missing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "config.toml")

    assert load_config() == ClientConfig()


def test_load_config_reads_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        """
host = "db.example.com"
port = 3000
demo = true

[pair]
left = ["db1.example.com", 3000]
right = "db2.example.com"

[options]
slave_ok = true
appname = "reports"
"""
    )
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_path)

    result = load_config()

    assert result.host == "db.example.com"
    assert result.port == 3000
    assert result.demo is True
    assert result.pair == PairConfig(left=["db1.example.com", 3000], right="db2.example.com")
    assert result.options.slave_ok is True
    assert result.options.model_dump()["appname"] == "reports"


def test_load_config_handles_toml_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("host = [unterminated")
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_path)

    assert load_config() == ClientConfig()


def test_load_config_handles_invalid_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("[options]\nslave_ok = [1, 2]\n")
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_path)

    assert load_config() == ClientConfig()


def test_save_config_round_trips(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "nested" / "config.toml"
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_path)
    config = ClientConfig(
        pair=PairConfig(left=["db1.example.com", 3000], right=4000),
        options=ServerOptions(auto_reconnect=True),
    )

    save_config(config)

    content = config_path.read_text()
    assert "[pair]" in content
    assert 'left = ["db1.example.com", 3000]' in content
    assert "auto_reconnect = true" in content
    assert load_config() == config


@pytest.mark.parametrize("slot", ['["a", 1, 2]', '["a", 1.5]'])
def test_load_config_rejects_invalid_pair_slots(
    slot: str, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(f"demo = true\n\n[pair]\nleft = {slot}\n")
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_path)

    assert load_config() == ClientConfig()


def test_pair_config_validates_slots() -> None:
    with pytest.raises(ValueError):
        PairConfig(left=["a", 1, 2])
