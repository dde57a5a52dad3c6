"""Services collection endpoints (list, create, update, delete)."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from pydantic import ValidationError

from pycatalog._transport import Transport
from pycatalog.config import CatalogConfig
from pycatalog.exceptions import CatalogApiError
from pycatalog.models.requests import ServiceRef
from pycatalog.models.service import Service, ServiceDraft

_logger = logging.getLogger(__name__)


def item_endpoint(config: CatalogConfig, ref: ServiceRef) -> str:
    """Path for a single service, e.g. ``/api/uslugi/42``."""
    return f"{config.services_endpoint}/{quote(str(ref.id), safe='')}"


def _parse_service(endpoint: str, value: Any) -> Service:
    if not isinstance(value, dict):
        raise CatalogApiError(
            f"Expected a service object from {endpoint}, got {type(value).__name__}",
            endpoint=endpoint,
        )
    try:
        return Service.model_validate(value)
    except ValidationError as exc:
        raise CatalogApiError(f"Invalid service from {endpoint}: {exc}", endpoint=endpoint) from exc


async def list_services(config: CatalogConfig, transport: Transport) -> list[Service]:
    """Fetch the full collection in backend order."""
    endpoint = config.services_endpoint
    response = await transport.request_json("GET", endpoint)
    if not isinstance(response, list):
        raise CatalogApiError(
            f"Expected a list from {endpoint}, got {type(response).__name__}",
            endpoint=endpoint,
        )
    services = [_parse_service(endpoint, item) for item in response]
    _logger.debug("Fetched %d services from %s", len(services), endpoint)
    return services


async def create_service(config: CatalogConfig, transport: Transport, draft: ServiceDraft) -> Service:
    """Create a service; the backend assigns its id."""
    endpoint = config.services_endpoint
    response = await transport.request_json("POST", endpoint, draft.to_payload())
    return _parse_service(endpoint, response)


async def update_service(
    config: CatalogConfig,
    transport: Transport,
    ref: ServiceRef,
    draft: ServiceDraft,
) -> Service | None:
    """Replace name and price of an existing service.

    Returns the updated record, or ``None`` when the backend answers with an
    empty body (callers refetch the list anyway).
    """
    endpoint = item_endpoint(config, ref)
    response = await transport.request_json("PUT", endpoint, draft.to_payload())
    if response is None:
        return None
    return _parse_service(endpoint, response)


async def delete_service(config: CatalogConfig, transport: Transport, ref: ServiceRef) -> None:
    endpoint = item_endpoint(config, ref)
    await transport.request_json("DELETE", endpoint)
