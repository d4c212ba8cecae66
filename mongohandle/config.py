"""Client configuration loading helpers."""

from __future__ import annotations

from pathlib import Path

import tomllib

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .models import AddressSpec, coerce_address, coerce_slot

CONFIG_FILE = Path.home() / ".config" / "mongohandle" / "config.toml"

SlotValue = str | int | list[str | int] | None


class ServerOptions(BaseModel):
    """Options handed to every database handle; unknown keys pass through."""

    model_config = ConfigDict(extra="allow")

    slave_ok: bool = False
    auto_reconnect: bool = False


class PairConfig(BaseModel):
    """Left/right pair as stored in config.toml."""

    left: SlotValue = None
    right: SlotValue = None

    @field_validator("left", "right")
    @classmethod
    def _check_slot(cls, value: SlotValue) -> SlotValue:
        coerce_slot(value)
        return value


class ClientConfig(BaseModel):
    """Shape of the configuration file."""

    host: str | None = None
    port: int | None = None
    pair: PairConfig | None = None
    options: ServerOptions = Field(default_factory=ServerOptions)
    demo: bool = False

    def address_spec(self) -> AddressSpec:
        """Address for the configured server; a pair takes precedence over host."""

        if self.pair is not None:
            return coerce_address({"left": self.pair.left, "right": self.pair.right})
        return coerce_address(self.host, self.port if self.host else None)

    def with_options(self, **updates: Any) -> ClientConfig:
        """Return a copy with option values updated."""

        options = ServerOptions(**{**self.options.model_dump(), **updates})
        return self.model_copy(update={"options": options})


def load_config() -> ClientConfig:
    """Load configuration from disk; fall back to defaults if missing."""

    try:
        return ClientConfig(**_read_config_file())
    except FileNotFoundError:
        return ClientConfig()
    except (tomllib.TOMLDecodeError, OSError, ValidationError):
        return ClientConfig()


def save_config(config: ClientConfig) -> None:
    """Persist configuration to disk."""

    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    lines: list[str] = []
    if config.host:
        lines.append(f'host = "{config.host}"')
    if config.port is not None:
        lines.append(f"port = {config.port}")
    lines.append(f"demo = {str(config.demo).lower()}")
    if config.pair is not None:
        lines.append("")
        lines.append("[pair]")
        for side in ("left", "right"):
            value = getattr(config.pair, side)
            if value is not None:
                lines.append(f"{side} = {_toml_value(value)}")
    options = config.options.model_dump()
    if options:
        lines.append("")
        lines.append("[options]")
        for name in sorted(options):
            lines.append(f"{name} = {_toml_value(options[name])}")
    CONFIG_FILE.write_text("\n".join(lines) + "\n")


def _toml_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_toml_value(item) for item in value) + "]"
    return f'"{value}"'


def _read_config_file() -> dict[str, object]:
    with CONFIG_FILE.open("rb") as handle:
        raw = tomllib.load(handle)
    data: dict[str, object] = {}
    host = raw.get("host")
    if isinstance(host, str):
        data["host"] = host
    port = raw.get("port")
    if isinstance(port, int) and not isinstance(port, bool):
        data["port"] = port
    demo = raw.get("demo")
    if isinstance(demo, bool):
        data["demo"] = demo
    pair = raw.get("pair")
    if isinstance(pair, dict):
        data["pair"] = PairConfig(**{side: pair.get(side) for side in ("left", "right")})
    options = raw.get("options")
    if isinstance(options, dict):
        data["options"] = ServerOptions(**options)
    return data


__all__ = [
    "CONFIG_FILE",
    "ClientConfig",
    "PairConfig",
    "ServerOptions",
    "load_config",
    "save_config",
]
