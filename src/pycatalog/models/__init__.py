"""Data models for catalog records and requests."""

from pycatalog.models._base import CatalogBaseModel, Price, ServiceId, format_price, parse_price
from pycatalog.models.requests import PageRequest, ServiceRef
from pycatalog.models.service import Service, ServiceDraft

__all__ = [
    "CatalogBaseModel",
    "PageRequest",
    "Price",
    "Service",
    "ServiceDraft",
    "ServiceId",
    "ServiceRef",
    "format_price",
    "parse_price",
]
