"""Resolve address specifications into ordered endpoint lists."""

from __future__ import annotations

import logging
from typing import Any

from .models import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    AddressSpec,
    Endpoint,
    EndpointList,
    HostSlot,
    MixedSlot,
    NoAddress,
    PortSlot,
    SingleHost,
    SlotSpec,
    coerce_address,
    coerce_slot,
)

LOG = logging.getLogger(__name__)


def resolve(spec: AddressSpec | Any = None, port: int | None = None) -> EndpointList:
    """Return one endpoint for an absent or single-host spec, two for a pair.

    Loose values (``None``, a host string, a ``{"left": ..., "right": ...}``
    mapping) are accepted and validated via :func:`coerce_address`.
    """

    spec = coerce_address(spec, port)
    if isinstance(spec, NoAddress):
        endpoints: EndpointList = (Endpoint(DEFAULT_HOST, DEFAULT_PORT),)
    elif isinstance(spec, SingleHost):
        endpoints = (Endpoint(spec.host, spec.port if spec.port is not None else DEFAULT_PORT),)
    else:
        endpoints = (resolve_slot(spec.left), resolve_slot(spec.right))
    LOG.debug("Resolved address", extra={"spec": spec, "endpoints": endpoints})
    return endpoints


def resolve_slot(slot: SlotSpec | Any) -> Endpoint:
    """Resolve one side of a pair into an endpoint."""

    slot = coerce_slot(slot)
    if slot is None:
        return Endpoint(DEFAULT_HOST, DEFAULT_PORT)
    if isinstance(slot, HostSlot):
        return Endpoint(slot.host, DEFAULT_PORT)
    if isinstance(slot, PortSlot):
        return Endpoint(DEFAULT_HOST, slot.port)
    return _resolve_mixed(slot)


def _resolve_mixed(slot: MixedSlot) -> Endpoint:
    # Later elements override earlier ones of the same type.
    host, port = DEFAULT_HOST, DEFAULT_PORT
    for item in (slot.first, slot.second):
        if isinstance(item, str):
            host = item
        else:
            port = item
    return Endpoint(host, port)


__all__ = ["resolve", "resolve_slot"]
