"""User interaction events and the diagnostic callback contract.

Every row interaction carries an explicit intent so a checkbox click and a
row click can never both fire for the same gesture.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from pycatalog.exceptions import CatalogError
from pycatalog.models._base import ServiceId

_logger = logging.getLogger(__name__)

ErrorCallback = Callable[[CatalogError], None]
"""Receives every recovered remote failure (fetch, update, bulk delete)."""


class RowIntent(StrEnum):
    SELECT = "select"
    EDIT_REQUEST = "edit_request"


class RowEvent(BaseModel):
    """A single interaction with one table row."""

    model_config = ConfigDict(frozen=True)

    service_id: ServiceId
    intent: RowIntent


def emit_error(callback: ErrorCallback | None, error: CatalogError) -> None:
    """Deliver *error* to *callback*; a failing callback must not break the caller."""
    if callback is None:
        return
    try:
        callback(error)
    except Exception:
        _logger.debug("on_error callback failed", exc_info=True)
