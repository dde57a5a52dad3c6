"""Filtered, paginated view over the list store.

Pure functions: inputs are never mutated and ordering is inherited from
the store.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from pycatalog.models.requests import PageRequest
from pycatalog.models.service import Service


class Projection(BaseModel):
    """One rendered page of the filtered services."""

    model_config = ConfigDict(frozen=True)

    rows: tuple[Service, ...]
    total: int
    page: int
    page_size: int

    @property
    def page_count(self) -> int:
        return math.ceil(self.total / self.page_size)

    @property
    def first_index(self) -> int:
        return self.page * self.page_size


def matches(service: Service, query: str) -> bool:
    """Case-insensitive substring match on the name; empty query matches all."""
    if not query:
        return True
    return query.casefold() in service.name.casefold()


def filter_services(records: Sequence[Service], query: str) -> list[Service]:
    return [service for service in records if matches(service, query)]


def clamp_page(page: int, total: int, page_size: int) -> int:
    """Largest valid page index not above *page* (0 for an empty result)."""
    last_page = max(math.ceil(total / page_size) - 1, 0)
    return min(max(page, 0), last_page)


def project(
    records: Sequence[Service],
    query: str = "",
    page: int = 0,
    page_size: int = 10,
) -> Projection:
    """Filter *records* by *query* and cut out one page.

    If the filtered list shrank below the requested page (e.g. after a
    delete), the last valid page is returned instead and
    ``Projection.page`` reports it.
    """
    request = PageRequest(query=query, page=page, page_size=page_size)
    filtered = filter_services(records, request.query)
    effective_page = clamp_page(request.page, len(filtered), request.page_size)
    start = effective_page * request.page_size
    return Projection(
        rows=tuple(filtered[start : start + request.page_size]),
        total=len(filtered),
        page=effective_page,
        page_size=request.page_size,
    )
