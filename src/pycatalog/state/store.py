"""In-memory list of services, resynchronised by full refetch.

This is the only component that replaces the record set. Every mutation
(create, update, delete) is followed by :meth:`ServiceListStore.refresh`;
there is no incremental patching.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from pycatalog._collation import collation_key
from pycatalog.client import CatalogClient
from pycatalog.exceptions import CatalogError, CatalogFetchError
from pycatalog.models._base import ServiceId
from pycatalog.models.service import Service
from pycatalog.state.events import ErrorCallback, emit_error
from pycatalog.state.selection import SelectionTracker

_logger = logging.getLogger(__name__)

ChangeListener = Callable[[tuple[Service, ...]], None]


def sort_services(services: list[Service], locale: str) -> list[Service]:
    """Order by name, locale-aware and case-insensitive; ties keep input order."""
    return sorted(services, key=lambda service: collation_key(service.name, locale))


class ServiceListStore:
    """Canonical copy of every service, plus the selection over it.

    Readers always see a complete list: :meth:`refresh` builds the new
    sorted tuple first and swaps it in with a single assignment.
    """

    def __init__(
        self,
        client: CatalogClient,
        *,
        locale: str | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._client = client
        self._locale = locale or client.config.locale
        self._on_error = on_error
        self._records: tuple[Service, ...] = ()
        self._index: dict[ServiceId, Service] = {}
        self._listeners: list[ChangeListener] = []
        self._started = 0
        self._applied = 0
        self.selection = SelectionTracker()
        self.last_error: CatalogFetchError | None = None
        self.loaded = False
        self._closed = False

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Service]:
        return iter(self._records)

    @property
    def records(self) -> tuple[Service, ...]:
        return self._records

    @property
    def ids(self) -> frozenset[ServiceId]:
        """The universe: ids of every loaded service."""
        return frozenset(self._index)

    def get(self, service_id: ServiceId) -> Service | None:
        return self._index.get(service_id)

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Call *listener* after every successful replacement.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    @property
    def closed(self) -> bool:
        return self._closed

    async def refresh(self) -> bool:
        """Refetch everything and replace the list.

        Returns ``False`` when the fetch failed; the previous records are kept
        and the failure is logged and passed to ``on_error``. The selection is
        cleared in both cases. A failure from a refresh older than the one
        already applied is dropped.

        After :meth:`close` this is a no-op returning ``False``, including for
        a fetch that was already in flight when the store was closed.
        """
        if self._closed:
            _logger.debug("Ignoring refresh on closed store")
            return False
        self._started += 1
        generation = self._started
        try:
            fetched = await self._client.list_services()
        except CatalogError as exc:
            if self._closed:
                return False
            if generation < self._applied:
                _logger.debug("Dropping failure of stale refresh #%d (applied #%d): %s", generation, self._applied, exc)
                return False
            error = CatalogFetchError(f"Failed to fetch services: {exc}")
            error.__cause__ = exc
            self.last_error = error
            self.selection.clear()
            _logger.warning("%s (keeping %d cached services)", error, len(self._records))
            emit_error(self._on_error, error)
            return False

        if self._closed:
            _logger.debug("Discarding refresh #%d that finished after close", generation)
            return False
        if generation < self._applied:
            # A refresh that started later has already landed.
            _logger.debug("Discarding stale refresh #%d (applied #%d)", generation, self._applied)
            return True

        index: dict[ServiceId, Service] = {}
        for service in fetched:
            if service.id in index:
                _logger.warning("Duplicate service id=%s in listing; keeping first occurrence", service.id)
                continue
            index[service.id] = service
        records = tuple(sort_services(list(index.values()), self._locale))

        self._records = records
        self._index = index
        self._applied = generation
        self.selection.reset(index)
        self.last_error = None
        self.loaded = True

        for listener in list(self._listeners):
            try:
                listener(records)
            except Exception:
                _logger.debug("Store listener failed", exc_info=True)
        return True

    def close(self) -> None:
        """Tear down: drop records, selection and listeners.

        Refreshes after this (or still in flight) never repopulate the store.
        """
        self._records = ()
        self._index = {}
        self._listeners.clear()
        self.selection.reset(())
        self.loaded = False
        self._closed = True
