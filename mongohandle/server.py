"""Server handle: resolved endpoints plus admin convenience operations."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel

from .errors import CommandFailedError, UnimplementedOperationError
from .handles import (
    CommandDocument,
    DatabaseHandle,
    DatabaseHandleFactory,
    PymongoDatabaseHandle,
    ResponseDocument,
)
from .models import AddressSpec, EndpointList
from .resolver import resolve

LOG = logging.getLogger(__name__)


class Server:
    """A MongoDB server or server pair.

    ``address`` is ``None`` (localhost on the default port), a host name
    string, or a pair given as ``{"left": ..., "right": ...}`` where each side
    is a host name, a port number, or a ``[host, port]`` array in either
    order. The typed forms from :mod:`mongohandle.models` are accepted too.

    ``port`` only applies to a single host string. ``options`` are passed on
    to every database handle; ``slave_ok`` and ``auto_reconnect`` are the
    recognized keys, anything else is forwarded untouched.

    Examples::

        Server()                                  # localhost:27017
        Server("localhost", 3000, {"slave_ok": True})
        Server({"left": ["db1.example.com", 3000],
                "right": "db2.example.com"}, options={"auto_reconnect": True})
    """

    def __init__(
        self,
        address: AddressSpec | str | Mapping[str, Any] | None = None,
        port: int | None = None,
        options: Mapping[str, Any] | BaseModel | None = None,
        *,
        handle_factory: DatabaseHandleFactory | None = None,
    ) -> None:
        self._endpoints: EndpointList = resolve(address, port)
        if isinstance(options, BaseModel):
            options = options.model_dump()
        self._options: dict[str, Any] = dict(options or {})
        self._handle_factory: DatabaseHandleFactory = handle_factory or PymongoDatabaseHandle

    @property
    def endpoints(self) -> EndpointList:
        """Resolved endpoints, ``(left, right)`` for a pair."""

        return self._endpoints

    @property
    def options(self) -> Mapping[str, Any]:
        """Options merged into every database handle."""

        return MappingProxyType(self._options)

    def __repr__(self) -> str:
        hosts = ", ".join(f"{host}:{port}" for host, port in self._endpoints)
        return f"Server([{hosts}])"

    def get_database(self, name: str, **options: Any) -> DatabaseHandle:
        """Return a handle for database ``name``; per-call options override the server's."""

        merged = {**self._options, **options}
        return self._handle_factory(self._endpoints, name, merged)

    def list_databases(self) -> dict[str, int]:
        """Map each database name to its size on disk in bytes."""

        response = self.run_admin_command("admin", {"listDatabases": 1})
        return {entry["name"]: int(entry["sizeOnDisk"]) for entry in response["databases"]}

    def list_database_names(self) -> list[str]:
        return list(self.list_databases())

    def drop_database(self, name: str) -> None:
        """Drop the database ``name``."""

        self.run_admin_command(name, {"dropDatabase": 1})
        LOG.info("Dropped database", extra={"database": name})

    def clone_database(self, from_host: str) -> None:
        raise UnimplementedOperationError("clone_database is not implemented")

    def copy_database(self, from_host: str, from_db: str, to_db: str) -> None:
        raise UnimplementedOperationError("copy_database is not implemented")

    def run_admin_command(self, database_name: str, command: CommandDocument) -> ResponseDocument:
        """Run one command on a fresh handle and return the response.

        Raises :class:`CommandFailedError` when the handle's ok check fails.
        The handle is closed on every path, including collaborator errors.
        """

        handle = self.get_database(database_name)
        try:
            response = handle.execute_command(command)
            if not handle.is_ok(response):
                LOG.warning(
                    "Command failed",
                    extra={"database": database_name, "command": dict(command), "response": response},
                )
                raise CommandFailedError(response, command)
        except BaseException:
            # A close failure must not mask the error already propagating.
            try:
                handle.close()
            except Exception:
                LOG.exception("Failed to close database handle", extra={"database": database_name})
            raise
        handle.close()
        return response


__all__ = ["Server"]
