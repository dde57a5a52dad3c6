"""pycatalog - Async client-side state manager for a services price catalog."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pycatalog")
except PackageNotFoundError:
    __version__ = "0+local"
from pycatalog.client import CatalogClient
from pycatalog.config import CatalogConfig
from pycatalog.exceptions import (
    CatalogApiError,
    CatalogBulkDeleteError,
    CatalogConfigError,
    CatalogError,
    CatalogFetchError,
    CatalogStateError,
    CatalogTransportError,
    CatalogWriteError,
)
from pycatalog.models import PageRequest, Service, ServiceDraft, ServiceId, format_price
from pycatalog.state.bulk import BulkDeleteOperation, BulkDeleteResult
from pycatalog.state.edit import EditSession, EditState
from pycatalog.state.events import RowEvent, RowIntent
from pycatalog.state.projection import Projection, project
from pycatalog.state.selection import SelectionTracker
from pycatalog.state.store import ServiceListStore
from pycatalog.table import ServicesTable, TableRow

__all__ = [
    "__version__",
    "BulkDeleteOperation",
    "BulkDeleteResult",
    "CatalogApiError",
    "CatalogBulkDeleteError",
    "CatalogClient",
    "CatalogConfig",
    "CatalogConfigError",
    "CatalogError",
    "CatalogFetchError",
    "CatalogStateError",
    "CatalogTransportError",
    "CatalogWriteError",
    "EditSession",
    "EditState",
    "PageRequest",
    "Projection",
    "RowEvent",
    "RowIntent",
    "SelectionTracker",
    "Service",
    "ServiceDraft",
    "ServiceId",
    "ServiceListStore",
    "ServicesTable",
    "TableRow",
    "format_price",
    "project",
]
