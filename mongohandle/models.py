"""Address specification and endpoint types shared across modules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, NamedTuple

from .errors import AddressSpecError

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 27017


class Endpoint(NamedTuple):
    """Resolved host/port pair for one database server."""

    host: str
    port: int


EndpointList = tuple[Endpoint, ...]


def _is_port(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class HostSlot:
    """Pair slot naming only a host."""

    host: str


@dataclass(frozen=True, slots=True)
class PortSlot:
    """Pair slot naming only a port on the default host."""

    port: int

    def __post_init__(self) -> None:
        if not _is_port(self.port):
            raise AddressSpecError(f"pair slot port must be an integer: {self.port!r}")


@dataclass(frozen=True, slots=True)
class MixedSlot:
    """Pair slot given as a two-element host/port array, in either order."""

    first: str | int
    second: str | int

    def __post_init__(self) -> None:
        for item in (self.first, self.second):
            if not (isinstance(item, str) or _is_port(item)):
                raise AddressSpecError(
                    f"pair slot array items must be host strings or port ints: {[self.first, self.second]!r}"
                )


SlotSpec = HostSlot | PortSlot | MixedSlot | None


@dataclass(frozen=True, slots=True)
class NoAddress:
    """No address given; the default endpoint is used."""


@dataclass(frozen=True, slots=True)
class SingleHost:
    """A single server, optionally with an explicit port."""

    host: str
    port: int | None = None

    def __post_init__(self) -> None:
        if self.port is not None and not _is_port(self.port):
            raise AddressSpecError(f"port must be an integer: {self.port!r}")


@dataclass(frozen=True, slots=True)
class PairAddress:
    """A left/right pair of servers, one of which is expected to be master."""

    left: SlotSpec = None
    right: SlotSpec = None


AddressSpec = NoAddress | SingleHost | PairAddress

_ADDRESS_TYPES = (NoAddress, SingleHost, PairAddress)
_SLOT_TYPES = (HostSlot, PortSlot, MixedSlot)


def coerce_slot(value: Any) -> SlotSpec:
    """Convert a loose pair-slot value (None, str, int or 2-item array) into a SlotSpec."""

    if value is None or isinstance(value, _SLOT_TYPES):
        return value
    if isinstance(value, str):
        return HostSlot(value)
    if _is_port(value):
        return PortSlot(value)
    if isinstance(value, (list, tuple)):
        if len(value) != 2:
            raise AddressSpecError(f"pair slot array must have two elements, got {len(value)}: {value!r}")
        return MixedSlot(value[0], value[1])
    raise AddressSpecError(f"unsupported pair slot value: {value!r}")


def coerce_address(value: Any = None, port: int | None = None) -> AddressSpec:
    """Convert loose input into an AddressSpec.

    Accepts ``None``, a host string, a mapping with ``"left"``/``"right"``
    keys, or an already-typed spec. ``port`` is only used with a host string.
    """

    if isinstance(value, _ADDRESS_TYPES):
        return value
    if value is None:
        return NoAddress()
    if isinstance(value, str):
        return SingleHost(value, port)
    if isinstance(value, Mapping):
        unknown = set(value) - {"left", "right"}
        if unknown:
            raise AddressSpecError(f"pair spec only accepts 'left' and 'right', got {sorted(map(str, unknown))}")
        return PairAddress(coerce_slot(value.get("left")), coerce_slot(value.get("right")))
    raise AddressSpecError(f"unsupported address specification: {value!r}")


__all__ = [
    "AddressSpec",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "Endpoint",
    "EndpointList",
    "HostSlot",
    "MixedSlot",
    "NoAddress",
    "PairAddress",
    "PortSlot",
    "SingleHost",
    "SlotSpec",
    "coerce_address",
    "coerce_slot",
]
