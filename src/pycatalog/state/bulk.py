"""Delete every selected service, then resynchronise."""

from __future__ import annotations

import asyncio
import logging

from pydantic import BaseModel, ConfigDict, Field

from pycatalog.client import CatalogClient
from pycatalog.exceptions import CatalogBulkDeleteError, CatalogError
from pycatalog.models._base import ServiceId
from pycatalog.state.events import ErrorCallback, emit_error
from pycatalog.state.store import ServiceListStore

_logger = logging.getLogger(__name__)


class BulkDeleteResult(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    deleted: tuple[ServiceId, ...] = ()
    failed: dict[ServiceId, CatalogError] = Field(default_factory=dict)
    refreshed: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed


class BulkDeleteOperation:
    """Issues one delete per selected id and always refreshes afterwards.

    Deletions run concurrently; the refresh waits until every one of them has
    settled. Partial failure is reported but does not stop the refresh, which
    brings the list back in line with whatever the backend actually removed.
    """

    def __init__(
        self,
        client: CatalogClient,
        store: ServiceListStore,
        *,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._client = client
        self._store = store
        self._on_error = on_error
        self._in_progress = False

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    async def run(self) -> BulkDeleteResult | None:
        """Delete the current selection.

        Returns ``None`` without touching the backend when nothing is selected
        or a batch is already running.
        """
        if self._in_progress:
            _logger.warning("Bulk delete already in progress; ignoring request")
            return None
        service_ids = sorted(self._store.selection, key=str)
        if not service_ids:
            return None

        self._in_progress = True
        try:
            outcomes = await asyncio.gather(
                *(self._client.delete_service(service_id) for service_id in service_ids),
                return_exceptions=True,
            )
            refreshed = await self._store.refresh()
        finally:
            self._in_progress = False

        deleted: list[ServiceId] = []
        failed: dict[ServiceId, CatalogError] = {}
        unexpected: BaseException | None = None
        for service_id, outcome in zip(service_ids, outcomes, strict=True):
            if outcome is None:
                deleted.append(service_id)
            elif isinstance(outcome, CatalogError):
                failed[service_id] = outcome
            elif unexpected is None:
                unexpected = outcome

        if unexpected is not None:
            raise unexpected

        _logger.debug("Bulk delete finished: %d deleted, %d failed", len(deleted), len(failed))
        if failed:
            error = CatalogBulkDeleteError(failed)
            _logger.warning("%s", error)
            emit_error(self._on_error, error)

        return BulkDeleteResult(deleted=tuple(deleted), failed=failed, refreshed=refreshed)
