"""Database handle collaborators the server handle builds and drives."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Protocol, runtime_checkable

import pymongo
from pymongo.database import Database

from .errors import HandleClosedError
from .models import EndpointList

LOG = logging.getLogger(__name__)

CommandDocument = Mapping[str, Any]
ResponseDocument = dict[str, Any]


@runtime_checkable
class DatabaseHandle(Protocol):
    """Protocol implemented by database handles."""

    name: str

    def execute_command(self, command: CommandDocument) -> ResponseDocument:
        """Send a command document and return the server's response."""

    def is_ok(self, response: Mapping[str, Any]) -> bool:
        """Return True when the response reports success."""

    def close(self) -> None:
        """Release any connection resources held by the handle."""


DatabaseHandleFactory = Callable[[EndpointList, str, Mapping[str, Any]], DatabaseHandle]


def response_ok(response: Mapping[str, Any]) -> bool:
    """Shared ``ok`` predicate: ``1``, ``1.0`` and ``True`` count as success."""

    try:
        return float(response.get("ok", 0)) == 1.0
    except (TypeError, ValueError):
        return False


class PymongoDatabaseHandle:
    """Database handle backed by a lazily connecting pymongo client."""

    _OWN_OPTIONS = frozenset({"slave_ok", "auto_reconnect"})

    def __init__(self, endpoints: EndpointList, name: str, options: Mapping[str, Any] | None = None) -> None:
        self.name = name
        self.endpoints = tuple(endpoints)
        self.options = dict(options or {})
        self._client: pymongo.MongoClient | None = pymongo.MongoClient(**self._client_kwargs())
        self._database: Database = self._client[name]

    def execute_command(self, command: CommandDocument) -> ResponseDocument:
        if self._client is None:
            raise HandleClosedError(f"handle for database '{self.name}' is closed")
        LOG.debug("Running command", extra={"database": self.name, "command": dict(command)})
        return dict(
            self._database.command(
                dict(command),
                check=False,
                read_preference=self._database.read_preference,
            )
        )

    def is_ok(self, response: Mapping[str, Any]) -> bool:
        return response_ok(response)

    def close(self) -> None:
        if self._client is None:
            return
        client, self._client = self._client, None
        client.close()

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "host": [f"{host}:{port}" for host, port in self.endpoints],
            "connect": False,
        }
        if len(self.endpoints) == 1:
            kwargs["directConnection"] = True
            kwargs["readPreference"] = "secondaryPreferred" if self.options.get("slave_ok") else "primary"
        reconnect = bool(self.options.get("auto_reconnect", False))
        kwargs["retryReads"] = reconnect
        kwargs["retryWrites"] = reconnect
        for key, value in self.options.items():
            if key not in self._OWN_OPTIONS:
                kwargs[key] = value
        return kwargs


DEMO_DATABASES: Mapping[str, float] = {
    "admin": 8192.0,
    "config": 12288.0,
    "local": 40960.0,
    "inventory": 73728.0,
}


class DemoCatalog:
    """In-memory server state shared by the demo handles it opens."""

    def __init__(self, databases: Mapping[str, float] | None = None) -> None:
        source = DEMO_DATABASES if databases is None else databases
        self.databases: dict[str, float] = dict(source)
        self.opened = 0
        self.closed = 0

    def open(self, endpoints: EndpointList, name: str, options: Mapping[str, Any]) -> "DemoDatabaseHandle":
        """Handle factory compatible with :class:`~mongohandle.server.Server`."""

        self.opened += 1
        return DemoDatabaseHandle(endpoints, name, options, catalog=self)


class DemoDatabaseHandle:
    """Stub database handle answering a few admin commands from a DemoCatalog."""

    def __init__(
        self,
        endpoints: EndpointList,
        name: str,
        options: Mapping[str, Any] | None = None,
        *,
        catalog: DemoCatalog | None = None,
    ) -> None:
        self.name = name
        self.endpoints = tuple(endpoints)
        self.options = dict(options or {})
        self.closed = False
        self._catalog = catalog if catalog is not None else DemoCatalog()

    def execute_command(self, command: CommandDocument) -> ResponseDocument:
        if self.closed:
            raise HandleClosedError(f"handle for database '{self.name}' is closed")
        if not command:
            return {"ok": 0, "errmsg": "empty command"}
        verb = next(iter(command))
        if verb == "listDatabases":
            return self._list_databases()
        if verb == "dropDatabase":
            self._catalog.databases.pop(self.name, None)
            return {"dropped": self.name, "ok": 1.0}
        if verb == "ping":
            return {"ok": 1.0}
        return {"ok": 0, "errmsg": f"no such command: '{verb}'", "code": 59}

    def is_ok(self, response: Mapping[str, Any]) -> bool:
        return response_ok(response)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._catalog.closed += 1

    def _list_databases(self) -> ResponseDocument:
        if self.name != "admin":
            return {"ok": 0, "errmsg": "listDatabases may only be run against the admin database.", "code": 13}
        entries = [
            {"name": name, "sizeOnDisk": size, "empty": size == 0}
            for name, size in self._catalog.databases.items()
        ]
        total = sum(self._catalog.databases.values())
        return {"databases": entries, "totalSize": total, "ok": 1.0}


__all__ = [
    "CommandDocument",
    "DEMO_DATABASES",
    "DatabaseHandle",
    "DatabaseHandleFactory",
    "DemoCatalog",
    "DemoDatabaseHandle",
    "PymongoDatabaseHandle",
    "ResponseDocument",
    "response_ok",
]
