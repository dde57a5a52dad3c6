from __future__ import annotations

import pytest

from pycatalog.client import CatalogClient
from pycatalog.config import CatalogConfig
from tests.fakes import FakeCatalogBackend


@pytest.fixture
def backend() -> FakeCatalogBackend:
    return FakeCatalogBackend.with_services(
        {"id": 1, "nazwa": "Haircut", "cena": 30},
        {"id": 2, "nazwa": "Coloring", "cena": None},
    )


@pytest.fixture
def config() -> CatalogConfig:
    return CatalogConfig()


@pytest.fixture
def client(config: CatalogConfig, backend: FakeCatalogBackend) -> CatalogClient:
    return CatalogClient(config, transport=backend)
