from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from stockrecon.adapters.catalog_api import CatalogAPIError, HttpCatalogFetcher
from stockrecon.adapters.http_resilience import ResilienceConfig, ResilientClient
from stockrecon.config import CatalogApiConfig

_BASE_URL = "https://catalog.example"


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(async_handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        return client

    return factory


def _medication(entry_id: int) -> dict[str, object]:
    return {
        "id": entry_id,
        "commercial_name": f"Product {entry_id}",
        "form": "B/12",
        "dosage": "300MG",
        "COND": "" if entry_id % 2 else "PDRE. P. SOL. BUV. SACH.-DOSE",
        "laboratory": "SANOFI AVENTIS ALGERIE SPA",
    }


def _paging_handler(
    table: list[dict[str, object]], requests: list[httpx.Request]
) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        limit = int(request.url.params["limit"])
        after = request.url.params.get("id")
        start = 0
        if after is not None:
            last_id = int(after.removeprefix("gt."))
            start = next(
                (i for i, row in enumerate(table) if int(str(row["id"])) > last_id), len(table)
            )
        return httpx.Response(200, json=table[start : start + limit])

    return handler


def _fetcher(
    handler: Callable[[httpx.Request], httpx.Response], *, page_size: int = 2
) -> HttpCatalogFetcher:
    return HttpCatalogFetcher(
        config=CatalogApiConfig(base_url=_BASE_URL, api_key="test-key", page_size=page_size),
        client_factory=_make_client_factory(handler),
    )


def test_fetcher_walks_pages_by_id() -> None:
    table = [_medication(entry_id) for entry_id in range(1, 6)]
    requests: list[httpx.Request] = []

    entries = _fetcher(_paging_handler(table, requests))()

    assert [entry.id for entry in entries] == ["1", "2", "3", "4", "5"]
    assert len(requests) == 3
    assert [request.url.params.get("id") for request in requests] == [None, "gt.2", "gt.4"]
    first = requests[0]
    assert first.url.path == "/rest/v1/medications"
    assert first.url.params["order"] == "id.asc"
    assert first.headers["apikey"] == "test-key"
    assert first.headers["Authorization"] == "Bearer test-key"


def test_fetcher_stops_on_an_empty_page() -> None:
    table = [_medication(entry_id) for entry_id in range(1, 5)]
    requests: list[httpx.Request] = []

    entries = _fetcher(_paging_handler(table, requests))()

    assert len(entries) == 4
    assert len(requests) == 3


def test_fetcher_translates_columns() -> None:
    requests: list[httpx.Request] = []

    entries = _fetcher(_paging_handler([_medication(1), _medication(2)], requests), page_size=10)()

    odd, even = entries
    assert odd.name == "Product 1"
    assert odd.form == "B/12"
    assert odd.packaging is None
    assert even.packaging == "PDRE. P. SOL. BUV. SACH.-DOSE"
    assert even.manufacturer == "SANOFI AVENTIS ALGERIE SPA"


def test_fetcher_raises_on_error_status(caplog: pytest.LogCaptureFixture) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(401, json={"message": "Invalid API key", "code": "401"})

    with pytest.raises(CatalogAPIError) as excinfo:
        _fetcher(handler)()

    assert excinfo.value.status_code == 401
    assert "Invalid API key" in str(excinfo.value)
    assert any(
        record.levelname == "ERROR"
        and record.getMessage() == "Catalog API error 401: Invalid API key"
        for record in caplog.records
    )


def test_fetcher_rejects_unexpected_payload() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(200, json={"rows": []})

    with pytest.raises(CatalogAPIError, match="Unexpected"):
        _fetcher(handler)()


def test_fetcher_rejects_rows_without_a_name() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(200, json=[{"id": 1, "form": "B/12"}])

    with pytest.raises(CatalogAPIError, match="Invalid catalog entry"):
        _fetcher(handler)()
