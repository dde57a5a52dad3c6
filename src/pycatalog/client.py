"""High-level async client for the services catalog backend."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pycatalog._api import services as _services_api
from pycatalog._transport import HttpTransport, Transport
from pycatalog.config import CatalogConfig
from pycatalog.exceptions import CatalogError
from pycatalog.models._base import ServiceId
from pycatalog.models.requests import ServiceRef
from pycatalog.models.service import Service, ServiceDraft

_logger = logging.getLogger(__name__)


class CatalogClient:
    """Async client for the remote services catalog.

    Usage::

        async with CatalogClient(config) as client:
            services = await client.list_services()

    A custom *transport* replaces the aiohttp-backed one entirely; this is
    how tests and alternative backends plug in.
    """

    def __init__(
        self,
        config: CatalogConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or CatalogConfig()
        self._external_session = session is not None
        self._http_session = session
        self._custom_transport = transport
        self._transport: Transport | None = transport

    @property
    def config(self) -> CatalogConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> CatalogClient:
        if self._custom_transport is not None:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if self._custom_transport is None:
            self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise CatalogError("Client not initialized. Use 'async with CatalogClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def list_services(self) -> list[Service]:
        """Fetch every service in the catalog (backend order)."""
        return await _services_api.list_services(self._config, self._require_transport())

    async def create_service(self, draft: ServiceDraft) -> Service:
        """Create a service and return it with its backend-assigned id."""
        service = await _services_api.create_service(self._config, self._require_transport(), draft)
        _logger.debug("Created service id=%s", service.id)
        return service

    async def update_service(self, service_id: ServiceId, draft: ServiceDraft) -> Service | None:
        """Replace a service's name and price."""
        ref = ServiceRef(id=service_id)
        return await _services_api.update_service(self._config, self._require_transport(), ref, draft)

    async def delete_service(self, service_id: ServiceId) -> None:
        ref = ServiceRef(id=service_id)
        await _services_api.delete_service(self._config, self._require_transport(), ref)
