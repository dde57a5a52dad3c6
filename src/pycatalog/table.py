"""Services table controller.

:class:`ServicesTable` ties the list store, search/pagination, selection,
the edit dialog, bulk deletion and the external creation form together. A
rendering layer binds to its properties and forwards user input to its
methods; it never talks to the backend directly.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

from pycatalog.client import CatalogClient
from pycatalog.config import CatalogConfig
from pycatalog.exceptions import CatalogConfigError
from pycatalog.models._base import ServiceId
from pycatalog.models.service import Service
from pycatalog.state.bulk import BulkDeleteOperation, BulkDeleteResult
from pycatalog.state.edit import EditSession
from pycatalog.state.events import ErrorCallback, RowEvent, RowIntent
from pycatalog.state.projection import Projection, project
from pycatalog.state.store import ServiceListStore

_logger = logging.getLogger(__name__)


class TableRow(BaseModel):
    """What a renderer needs for one row."""

    model_config = ConfigDict(frozen=True)

    service: Service
    selected: bool
    price_label: str


class ServicesTable:
    """Searchable, paginated, multi-selectable list of services.

    Usage::

        async with CatalogClient(config) as client:
            table = ServicesTable(client)
            await table.mount()
            table.set_search("strzyż")
            for row in table.rows():
                ...
    """

    def __init__(
        self,
        client: CatalogClient,
        *,
        config: CatalogConfig | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._client = client
        self._config = config or client.config
        self.store = ServiceListStore(client, locale=self._config.locale, on_error=on_error)
        self.edit_session = EditSession(client, self.store, on_error=on_error)
        self.bulk_delete = BulkDeleteOperation(client, self.store, on_error=on_error)
        self._search = ""
        self._page = 0
        self._rows_per_page = self._config.rows_per_page
        self.create_form_open = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def mount(self) -> bool:
        """Initial load."""
        return await self.store.refresh()

    def close(self) -> None:
        self.edit_session.cancel()
        self.store.close()

    # ------------------------------------------------------------------
    # Search and pagination
    # ------------------------------------------------------------------

    @property
    def search(self) -> str:
        return self._search

    @property
    def page(self) -> int:
        return self._page

    @property
    def rows_per_page(self) -> int:
        return self._rows_per_page

    @property
    def rows_per_page_options(self) -> tuple[int, ...]:
        return self._config.rows_per_page_options

    def set_search(self, text: str) -> None:
        self._search = text
        self._page = 0

    def set_page(self, page: int) -> None:
        if page < 0:
            raise ValueError(f"page must be >= 0, got {page}")
        self._page = page

    def set_rows_per_page(self, rows_per_page: int) -> None:
        if rows_per_page not in self._config.rows_per_page_options:
            raise CatalogConfigError(
                f"rows_per_page={rows_per_page} is not one of {self._config.rows_per_page_options}"
            )
        self._rows_per_page = rows_per_page
        self._page = 0

    @property
    def projection(self) -> Projection:
        """Current page, recomputed from the store on every read."""
        view = project(self.store.records, self._search, self._page, self._rows_per_page)
        if view.page != self._page:
            _logger.debug("Clamping page %d to %d (%d matches)", self._page, view.page, view.total)
            self._page = view.page
        return view

    def format_price(self, service: Service) -> str:
        return service.display_price(self._config.currency_suffix, self._config.price_placeholder)

    def rows(self) -> list[TableRow]:
        selection = self.store.selection
        return [
            TableRow(
                service=service,
                selected=selection.is_selected(service.id),
                price_label=self.format_price(service),
            )
            for service in self.projection.rows
        ]

    # ------------------------------------------------------------------
    # Row interaction
    # ------------------------------------------------------------------

    def dispatch(self, event: RowEvent) -> None:
        """Route one row interaction by its intent.

        ``SELECT`` only toggles the checkbox, ``EDIT_REQUEST`` only opens the
        edit dialog; a single event never does both.
        """
        if event.intent is RowIntent.SELECT:
            self.store.selection.toggle(event.service_id)
            return
        if event.intent is RowIntent.EDIT_REQUEST:
            service = self.store.get(event.service_id)
            if service is None:
                _logger.debug("Edit requested for unknown service id=%s", event.service_id)
                return
            self.edit_session.open(service)
            return
        raise ValueError(f"Unsupported row intent: {event.intent!r}")

    def toggle_selected(self, service_id: ServiceId) -> None:
        self.dispatch(RowEvent(service_id=service_id, intent=RowIntent.SELECT))

    def request_edit(self, service_id: ServiceId) -> None:
        self.dispatch(RowEvent(service_id=service_id, intent=RowIntent.EDIT_REQUEST))

    # ------------------------------------------------------------------
    # Selection and bulk delete
    # ------------------------------------------------------------------

    @property
    def selected_ids(self) -> frozenset[ServiceId]:
        return self.store.selection.selected

    @property
    def all_selected(self) -> bool:
        return self.store.selection.all_selected

    def toggle_all(self) -> None:
        self.store.selection.toggle_all()

    @property
    def can_bulk_delete(self) -> bool:
        """Whether the "delete selected" action should be offered."""
        return len(self.store.selection) > 0 and not self.bulk_delete.in_progress

    async def delete_selected(self) -> BulkDeleteResult | None:
        return await self.bulk_delete.run()

    # ------------------------------------------------------------------
    # Edit dialog
    # ------------------------------------------------------------------

    def update_edit(self, **fields: Any) -> None:
        self.edit_session.update_draft(**fields)

    async def save_edit(self) -> bool:
        return await self.edit_session.submit()

    def cancel_edit(self) -> bool:
        return self.edit_session.cancel()

    # ------------------------------------------------------------------
    # Creation form (external collaborator)
    # ------------------------------------------------------------------

    def open_create_form(self) -> None:
        self.create_form_open = True

    async def close_create_form(self, created: Service | None = None) -> bool:
        """Close the creation form and resynchronise.

        The list is refetched whether the form was dismissed or a service was
        created, so anything the form saved shows up.
        """
        self.create_form_open = False
        if created is not None:
            _logger.debug("Service id=%s created via form", created.id)
        return await self.store.refresh()
