from __future__ import annotations

import asyncio
from typing import Any

import pytest

from pycatalog.client import CatalogClient
from pycatalog.config import CatalogConfig
from pycatalog.exceptions import CatalogError, CatalogFetchError, CatalogTransportError
from pycatalog.models.service import Service
from pycatalog.state.store import ServiceListStore
from tests.fakes import FakeCatalogBackend


@pytest.mark.asyncio
async def test_refresh_sorts_by_locale_aware_name(client: CatalogClient, backend: FakeCatalogBackend) -> None:
    backend.services[3] = {"id": 3, "nazwa": "ścięcie grzywki", "cena": 15}
    backend.services[4] = {"id": 4, "nazwa": "Strzyżenie", "cena": "40"}
    backend.services[5] = {"id": 5, "nazwa": "anti-frizz", "cena": 80}
    store = ServiceListStore(client)

    assert await store.refresh() is True

    assert [service.name for service in store] == [
        "anti-frizz",
        "Coloring",
        "Haircut",
        "Strzyżenie",
        "ścięcie grzywki",
    ]
    assert store.ids == {1, 2, 3, 4, 5}
    assert store.loaded is True


@pytest.mark.asyncio
async def test_refresh_replaces_rather_than_merges(client: CatalogClient, backend: FakeCatalogBackend) -> None:
    store = ServiceListStore(client)
    await store.refresh()
    del backend.services[1]
    backend.services[7] = {"id": 7, "nazwa": "Manicure", "cena": 50}

    await store.refresh()

    assert store.ids == {2, 7}
    assert store.get(1) is None
    manicure = store.get(7)
    assert manicure is not None
    assert (manicure.name, manicure.price) == ("Manicure", 50)


@pytest.mark.asyncio
async def test_refresh_resets_selection(client: CatalogClient) -> None:
    store = ServiceListStore(client)
    await store.refresh()
    store.selection.toggle_all()
    assert store.selection.all_selected is True

    await store.refresh()

    assert store.selection.selected == set()
    assert store.selection.all_selected is False
    assert store.selection.universe == {1, 2}


@pytest.mark.asyncio
async def test_failed_refresh_keeps_last_known_good(client: CatalogClient, backend: FakeCatalogBackend) -> None:
    errors: list[CatalogError] = []
    store = ServiceListStore(client, on_error=errors.append)
    await store.refresh()
    before = store.records
    store.selection.toggle(1)
    backend.fail_list = True

    assert await store.refresh() is False

    assert store.records == before
    assert store.selection.selected == set()
    assert isinstance(store.last_error, CatalogFetchError)
    assert isinstance(store.last_error.__cause__, CatalogTransportError)
    assert errors == [store.last_error]


@pytest.mark.asyncio
async def test_successful_refresh_clears_last_error(client: CatalogClient, backend: FakeCatalogBackend) -> None:
    store = ServiceListStore(client)
    backend.fail_list = True
    await store.refresh()
    assert store.last_error is not None
    assert store.records == ()

    backend.fail_list = False
    await store.refresh()
    assert store.last_error is None
    assert len(store) == 2


@pytest.mark.asyncio
async def test_failing_error_callback_does_not_break_refresh(client: CatalogClient, backend: FakeCatalogBackend) -> None:
    def _boom(_error: CatalogError) -> None:
        raise RuntimeError("callback bug")

    store = ServiceListStore(client, on_error=_boom)
    backend.fail_list = True
    assert await store.refresh() is False


@pytest.mark.asyncio
async def test_duplicate_ids_keep_first_occurrence(config: CatalogConfig) -> None:
    class _DuplicatingBackend:
        async def request_json(self, method: str, endpoint: str, payload: Any = None) -> Any:
            return [
                {"id": 1, "nazwa": "Haircut", "cena": 30},
                {"id": 1, "nazwa": "Haircut (copy)", "cena": 35},
            ]

    store = ServiceListStore(CatalogClient(config, transport=_DuplicatingBackend()))
    await store.refresh()
    assert [service.name for service in store] == ["Haircut"]


@pytest.mark.asyncio
async def test_stale_refresh_is_discarded(config: CatalogConfig) -> None:
    first_release = asyncio.Event()

    class _SlowFirstBackend:
        def __init__(self) -> None:
            self.calls = 0

        async def request_json(self, method: str, endpoint: str, payload: Any = None) -> Any:
            self.calls += 1
            if self.calls == 1:
                await first_release.wait()
                return [{"id": 1, "nazwa": "Old", "cena": 1}]
            return [{"id": 2, "nazwa": "New", "cena": 2}]

    store = ServiceListStore(CatalogClient(config, transport=_SlowFirstBackend()))
    slow = asyncio.create_task(store.refresh())
    await asyncio.sleep(0)
    await store.refresh()
    first_release.set()
    await slow

    assert [service.name for service in store] == ["New"]


@pytest.mark.asyncio
async def test_listeners_notified_with_new_records(client: CatalogClient) -> None:
    seen: list[tuple[Service, ...]] = []
    store = ServiceListStore(client)
    unsubscribe = store.subscribe(seen.append)

    await store.refresh()
    assert seen == [store.records]

    unsubscribe()
    await store.refresh()
    assert len(seen) == 1


@pytest.mark.asyncio
async def test_close_tears_down(client: CatalogClient) -> None:
    store = ServiceListStore(client)
    await store.refresh()
    store.selection.toggle(1)

    store.close()

    assert store.records == ()
    assert store.selection.selected == set()
    assert store.selection.universe == set()
    assert store.loaded is False


@pytest.mark.asyncio
async def test_refresh_after_close_is_a_no_op(client: CatalogClient, backend: FakeCatalogBackend) -> None:
    store = ServiceListStore(client)
    await store.refresh()
    store.close()
    gets_before = backend.count("GET")

    assert await store.refresh() is False

    assert store.closed is True
    assert store.records == ()
    assert backend.count("GET") == gets_before


@pytest.mark.asyncio
async def test_refresh_in_flight_during_close_is_discarded(config: CatalogConfig) -> None:
    release = asyncio.Event()
    seen: list[tuple[Service, ...]] = []

    class _SlowBackend:
        async def request_json(self, method: str, endpoint: str, payload: Any = None) -> Any:
            await release.wait()
            return [{"id": 1, "nazwa": "Haircut", "cena": 30}]

    store = ServiceListStore(CatalogClient(config, transport=_SlowBackend()))
    store.subscribe(seen.append)
    pending = asyncio.create_task(store.refresh())
    await asyncio.sleep(0)

    store.close()
    release.set()

    assert await pending is False
    assert store.records == ()
    assert store.loaded is False
    assert seen == []


@pytest.mark.asyncio
async def test_stale_failure_keeps_selection(config: CatalogConfig) -> None:
    first_release = asyncio.Event()
    errors: list[CatalogError] = []

    class _SlowFailingFirstBackend:
        def __init__(self) -> None:
            self.calls = 0

        async def request_json(self, method: str, endpoint: str, payload: Any = None) -> Any:
            self.calls += 1
            if self.calls == 1:
                await first_release.wait()
                raise CatalogTransportError("boom", status_code=500, endpoint=endpoint)
            return [{"id": 1, "nazwa": "Haircut", "cena": 30}, {"id": 2, "nazwa": "Coloring"}]

    store = ServiceListStore(CatalogClient(config, transport=_SlowFailingFirstBackend()), on_error=errors.append)
    slow = asyncio.create_task(store.refresh())
    await asyncio.sleep(0)
    await store.refresh()
    store.selection.toggle(2)

    first_release.set()
    assert await slow is False

    assert store.selection.selected == {2}
    assert store.last_error is None
    assert errors == []
    assert len(store) == 2
