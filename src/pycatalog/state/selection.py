"""Multi-select state for the services table."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from pycatalog.models._base import ServiceId

_logger = logging.getLogger(__name__)


class SelectionTracker:
    """Set of selected service ids, always a subset of the loaded universe.

    The universe is every id currently held by the list store, not just the
    rows on the visible page; ``toggle_all`` therefore selects every loaded
    record.
    """

    def __init__(self, universe: Iterable[ServiceId] = ()) -> None:
        self._universe: frozenset[ServiceId] = frozenset(universe)
        self._selected: set[ServiceId] = set()

    def __len__(self) -> int:
        return len(self._selected)

    def __contains__(self, service_id: object) -> bool:
        return service_id in self._selected

    def __iter__(self) -> Iterator[ServiceId]:
        return iter(self._selected)

    @property
    def universe(self) -> frozenset[ServiceId]:
        return self._universe

    @property
    def selected(self) -> frozenset[ServiceId]:
        return frozenset(self._selected)

    @property
    def all_selected(self) -> bool:
        """True iff something is selected and it is the whole universe.

        An empty universe is never "all selected".
        """
        if not self._universe or not self._selected:
            return False
        return self._selected == self._universe

    def is_selected(self, service_id: ServiceId) -> bool:
        return service_id in self._selected

    def toggle(self, service_id: ServiceId) -> None:
        if service_id not in self._universe:
            _logger.debug("Ignoring selection toggle for unknown service id=%s", service_id)
            return
        if service_id in self._selected:
            self._selected.discard(service_id)
        else:
            self._selected.add(service_id)

    def toggle_all(self) -> None:
        if self.all_selected:
            self._selected.clear()
        else:
            self._selected = set(self._universe)

    def clear(self) -> None:
        self._selected.clear()

    def set_universe(self, universe: Iterable[ServiceId]) -> None:
        """Replace the universe, purging selections that are no longer loaded."""
        self._universe = frozenset(universe)
        stale = self._selected - self._universe
        if stale:
            _logger.debug("Purging %d stale selection(s)", len(stale))
            self._selected -= stale

    def reset(self, universe: Iterable[ServiceId]) -> None:
        """Replace the universe and clear the selection."""
        self._universe = frozenset(universe)
        self._selected.clear()
