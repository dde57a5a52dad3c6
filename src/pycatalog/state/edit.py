"""Single-record edit dialog state machine.

``closed → editing`` on :meth:`EditSession.open`, ``editing → saving`` on
:meth:`EditSession.submit`, then ``closed`` on success or back to
``editing`` (draft intact) on failure. :meth:`EditSession.cancel` goes
straight from ``editing`` to ``closed`` without any remote call.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any

from pycatalog.client import CatalogClient
from pycatalog.exceptions import CatalogError, CatalogStateError, CatalogWriteError
from pycatalog.models.service import Service, ServiceDraft
from pycatalog.state.events import ErrorCallback, emit_error
from pycatalog.state.store import ServiceListStore

_logger = logging.getLogger(__name__)


class EditState(StrEnum):
    CLOSED = "closed"
    EDITING = "editing"
    SAVING = "saving"


class EditSession:
    """At most one open edit at a time; opening another replaces it."""

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
        self._state = EditState.CLOSED
        self._service: Service | None = None
        self._draft: ServiceDraft | None = None
        self.last_error: CatalogWriteError | None = None

    @property
    def state(self) -> EditState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is not EditState.CLOSED

    @property
    def service(self) -> Service | None:
        return self._service

    @property
    def draft(self) -> ServiceDraft | None:
        return self._draft

    def open(self, service: Service) -> bool:
        """Start editing *service*, discarding any unsaved draft.

        Returns ``False`` without changing anything while a save is in flight.
        """
        if self._state is EditState.SAVING:
            _logger.warning(
                "Ignoring edit of service id=%s while saving service id=%s",
                service.id,
                self._service.id if self._service else None,
            )
            return False
        if self._state is EditState.EDITING:
            _logger.debug("Replacing open edit of service id=%s", self._service.id if self._service else None)
        self._service = service
        self._draft = ServiceDraft.from_service(service)
        self._state = EditState.EDITING
        self.last_error = None
        return True

    def update_draft(self, **fields: Any) -> ServiceDraft:
        """Merge field values into the draft (other fields are kept)."""
        if self._state is not EditState.EDITING or self._draft is None:
            raise CatalogStateError(f"Cannot edit draft in state {self._state}")
        self._draft = self._draft.merge(**fields)
        return self._draft

    def cancel(self) -> bool:
        """Close without saving. Returns ``False`` if a save is in flight."""
        if self._state is EditState.SAVING:
            _logger.warning("Ignoring cancel while saving service id=%s", self._service.id if self._service else None)
            return False
        self._close()
        return True

    async def submit(self) -> bool:
        """Send the draft and resynchronise the store.

        Returns ``True`` once the update succeeded and the session closed.
        On failure the session stays in ``editing`` with the draft unchanged,
        ``last_error`` is set and ``False`` is returned. A second submit while
        the first is saving is rejected without a remote call.
        """
        if self._state is EditState.SAVING:
            _logger.warning("Rejecting duplicate submit for service id=%s", self._service.id if self._service else None)
            return False
        if self._state is not EditState.EDITING or self._service is None or self._draft is None:
            raise CatalogStateError("No open edit to submit")

        service = self._service
        draft = self._draft
        self._state = EditState.SAVING
        try:
            await self._client.update_service(service.id, draft)
        except CatalogError as exc:
            error = CatalogWriteError(
                f"Failed to update service id={service.id}: {exc}",
                operation="update",
                service_id=service.id,
            )
            error.__cause__ = exc
            self.last_error = error
            self._state = EditState.EDITING
            _logger.warning("%s", error)
            emit_error(self._on_error, error)
            return False
        except BaseException:
            self._state = EditState.EDITING
            raise

        try:
            await self._store.refresh()
        finally:
            self._close()
        return True

    def _close(self) -> None:
        self._state = EditState.CLOSED
        self._service = None
        self._draft = None
        self.last_error = None
