"""Server handle for MongoDB servers and server pairs.

Usage::

    from mongohandle import Server

    server = Server({"left": ["db1.example.com", 3000], "right": "db2.example.com"})
    server.list_databases()       # {"admin": 8192, ...}
    db = server.get_database("inventory", slave_ok=True)
"""

from __future__ import annotations

from .errors import (
    AddressSpecError,
    CommandFailedError,
    HandleClosedError,
    MongoHandleError,
    UnimplementedOperationError,
)
from .handles import DatabaseHandle, DemoCatalog, DemoDatabaseHandle, PymongoDatabaseHandle
from .models import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    Endpoint,
    HostSlot,
    MixedSlot,
    NoAddress,
    PairAddress,
    PortSlot,
    SingleHost,
)
from .resolver import resolve, resolve_slot
from .server import Server

__version__ = "0.1.0"

__all__ = [
    "AddressSpecError",
    "CommandFailedError",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DatabaseHandle",
    "DemoCatalog",
    "DemoDatabaseHandle",
    "Endpoint",
    "HandleClosedError",
    "HostSlot",
    "MixedSlot",
    "MongoHandleError",
    "NoAddress",
    "PairAddress",
    "PortSlot",
    "PymongoDatabaseHandle",
    "Server",
    "SingleHost",
    "UnimplementedOperationError",
    "resolve",
    "resolve_slot",
]
