"""Error types raised by the server handle and its collaborators."""

from __future__ import annotations

from typing import Any, Mapping


class MongoHandleError(RuntimeError):
    """Base class for mongohandle errors."""


class CommandFailedError(MongoHandleError):
    """Raised when a command response fails the handle's ok check."""

    def __init__(self, response: Mapping[str, Any], command: Mapping[str, Any] | None = None) -> None:
        self.response = dict(response)
        self.command = dict(command) if command is not None else None
        detail = self.response.get("errmsg")
        message = f"command failed: {self.response!r}"
        if detail:
            message = f"command failed ({detail}): {self.response!r}"
        super().__init__(message)


class UnimplementedOperationError(MongoHandleError, NotImplementedError):
    """Raised by operations that reserve an API surface without behavior."""


class AddressSpecError(MongoHandleError, ValueError):
    """Raised when an address specification has an unsupported shape."""


class HandleClosedError(MongoHandleError):
    """Raised when a database handle is used after close()."""


__all__ = [
    "AddressSpecError",
    "CommandFailedError",
    "HandleClosedError",
    "MongoHandleError",
    "UnimplementedOperationError",
]
