"""Custom exception hierarchy for pycatalog."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class CatalogError(Exception):
    """Base exception for all pycatalog errors."""


class CatalogConfigError(CatalogError):
    """Invalid or missing configuration."""


class CatalogStateError(CatalogError):
    """Operation is not valid in the current state (e.g. submitting a closed edit)."""


class CatalogTransportError(CatalogError):
    """HTTP-level failure (network, timeout, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class CatalogApiError(CatalogError):
    """The remote returned well-formed JSON of an unexpected shape."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class CatalogFetchError(CatalogError):
    """Listing the catalog failed; the store kept its last-known-good records."""


class CatalogWriteError(CatalogError):
    """A create, update or delete call failed.

    ``operation`` is one of ``"create"``, ``"update"`` or ``"delete"``;
    ``service_id`` is ``None`` for creations.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        service_id: Any = None,
    ) -> None:
        self.operation = operation
        self.service_id = service_id
        super().__init__(message)


class CatalogBulkDeleteError(CatalogWriteError):
    """One or more deletions in a bulk delete failed.

    ``failures`` maps each failed service id to the error raised for it.
    The store has already been refreshed when this is reported.
    """

    def __init__(self, failures: Mapping[Any, CatalogError]) -> None:
        self.failures = dict(failures)
        ids = ", ".join(str(service_id) for service_id in self.failures)
        super().__init__(
            f"Failed to delete {len(self.failures)} service(s): {ids}",
            operation="delete",
        )
