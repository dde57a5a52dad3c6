from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import Any

import pytest
import pytest_asyncio

from pycatalog.client import CatalogClient
from pycatalog.config import CatalogConfig
from pycatalog.exceptions import CatalogError, CatalogStateError, CatalogWriteError
from pycatalog.models.service import ServiceDraft
from pycatalog.state.edit import EditSession, EditState
from pycatalog.state.store import ServiceListStore
from tests.fakes import FakeCatalogBackend


@pytest_asyncio.fixture
async def store(client: CatalogClient) -> ServiceListStore:
    store = ServiceListStore(client)
    await store.refresh()
    return store


def _haircut(store: ServiceListStore) -> Any:
    service = store.get(1)
    assert service is not None
    return service


@pytest.mark.asyncio
async def test_open_initialises_draft_from_record(client: CatalogClient, store: ServiceListStore) -> None:
    session = EditSession(client, store)
    session.open(_haircut(store))

    assert session.state is EditState.EDITING
    assert session.draft == ServiceDraft(name="Haircut", price=30)


@pytest.mark.asyncio
async def test_update_draft_merges_fields(client: CatalogClient, store: ServiceListStore) -> None:
    session = EditSession(client, store)
    session.open(_haircut(store))

    session.update_draft(price="35")
    session.update_draft(name="Haircut deluxe")

    assert session.draft == ServiceDraft(name="Haircut deluxe", price=Decimal("35"))


@pytest.mark.asyncio
async def test_submit_updates_refreshes_and_closes(
    client: CatalogClient,
    store: ServiceListStore,
    backend: FakeCatalogBackend,
) -> None:
    session = EditSession(client, store)
    session.open(_haircut(store))
    session.update_draft(name="Haircut deluxe", price="45.5")

    assert await session.submit() is True

    assert session.state is EditState.CLOSED
    assert session.draft is None
    assert backend.services[1] == {"id": 1, "nazwa": "Haircut deluxe", "cena": 45.5}
    assert ("PUT", "/api/uslugi/1") in backend.calls
    # Read-after-write: the store already reflects the update.
    updated = store.get(1)
    assert updated is not None
    assert updated.name == "Haircut deluxe"


@pytest.mark.asyncio
async def test_submit_failure_keeps_draft_and_stays_editing(
    client: CatalogClient,
    store: ServiceListStore,
    backend: FakeCatalogBackend,
) -> None:
    errors: list[CatalogError] = []
    session = EditSession(client, store, on_error=errors.append)
    session.open(_haircut(store))
    session.update_draft(price="99")
    draft_before = session.draft
    gets_before = backend.count("GET")
    backend.fail_update = True

    assert await session.submit() is False

    assert session.state is EditState.EDITING
    assert session.draft == draft_before
    assert isinstance(session.last_error, CatalogWriteError)
    assert session.last_error.operation == "update"
    assert session.last_error.service_id == 1
    assert errors == [session.last_error]
    assert backend.count("GET") == gets_before

    backend.fail_update = False
    assert await session.submit() is True
    assert session.state is EditState.CLOSED


@pytest.mark.asyncio
async def test_cancel_discards_without_remote_call(
    client: CatalogClient,
    store: ServiceListStore,
    backend: FakeCatalogBackend,
) -> None:
    session = EditSession(client, store)
    session.open(_haircut(store))
    session.update_draft(name="Changed")
    calls_before = list(backend.calls)

    assert session.cancel() is True

    assert session.state is EditState.CLOSED
    assert session.draft is None
    assert backend.calls == calls_before
    assert backend.services[1]["nazwa"] == "Haircut"


@pytest.mark.asyncio
async def test_open_replaces_current_session(client: CatalogClient, store: ServiceListStore) -> None:
    session = EditSession(client, store)
    session.open(_haircut(store))
    session.update_draft(name="Unsaved")

    coloring = store.get(2)
    assert coloring is not None
    session.open(coloring)

    assert session.service == coloring
    assert session.draft == ServiceDraft(name="Coloring", price=None)


@pytest.mark.asyncio
async def test_submit_when_closed_is_a_state_error(client: CatalogClient, store: ServiceListStore) -> None:
    session = EditSession(client, store)
    with pytest.raises(CatalogStateError):
        await session.submit()
    with pytest.raises(CatalogStateError):
        session.update_draft(name="x")


@pytest.mark.asyncio
async def test_duplicate_submit_while_saving_is_rejected(config: CatalogConfig) -> None:
    release = asyncio.Event()
    backend = FakeCatalogBackend.with_services({"id": 1, "nazwa": "Haircut", "cena": 30})
    original = backend.request_json

    async def _slow_put(method: str, endpoint: str, payload: Any = None) -> Any:
        if method == "PUT":
            await release.wait()
        return await original(method, endpoint, payload)

    backend.request_json = _slow_put  # type: ignore[method-assign]
    client = CatalogClient(config, transport=backend)
    store = ServiceListStore(client)
    await store.refresh()
    session = EditSession(client, store)
    session.open(_haircut(store))

    first = asyncio.create_task(session.submit())
    await asyncio.sleep(0)
    assert session.state is EditState.SAVING

    assert await session.submit() is False
    assert session.cancel() is False

    release.set()
    assert await first is True
    assert backend.count("PUT") == 1
    assert session.state is EditState.CLOSED


@pytest.mark.asyncio
async def test_open_while_saving_is_rejected(config: CatalogConfig) -> None:
    release = asyncio.Event()
    backend = FakeCatalogBackend.with_services(
        {"id": 1, "nazwa": "Haircut", "cena": 30},
        {"id": 2, "nazwa": "Coloring", "cena": 80},
    )
    original = backend.request_json

    async def _slow_put(method: str, endpoint: str, payload: Any = None) -> Any:
        if method == "PUT":
            await release.wait()
        return await original(method, endpoint, payload)

    backend.request_json = _slow_put  # type: ignore[method-assign]
    client = CatalogClient(config, transport=backend)
    store = ServiceListStore(client)
    await store.refresh()
    session = EditSession(client, store)
    assert session.open(_haircut(store)) is True
    draft = session.draft

    first = asyncio.create_task(session.submit())
    await asyncio.sleep(0)
    coloring = store.get(2)
    assert coloring is not None

    assert session.open(coloring) is False
    assert session.state is EditState.SAVING
    assert session.service == _haircut(store)
    assert session.draft == draft

    release.set()
    assert await first is True
