"""HTTP client for a PostgREST-style catalog table."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from stockrecon.adapters.http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    ResilientClient,
)
from stockrecon.config.catalog import CatalogApiConfig

from .schema import CatalogEntryPayload, ErrorPayload
from .translator import parse_catalog_entry

if TYPE_CHECKING:
    from collections.abc import Callable

    from stockrecon.domain.model import CatalogEntry
    from stockrecon.domain.ports.fetching import CatalogFetcher

log = getLogger(__name__)

_DEFAULT_TIMEOUT_SECONDS = 30.0
_SELECT_COLUMNS = "id,commercial_name,form,dosage,COND,laboratory"


def _default_resilience_config() -> ResilienceConfig:
    return ResilienceConfig(
        name="catalog",
        timeout_seconds=_DEFAULT_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        cache=CacheConfig(should_cache=_is_catalog_page),
    )


def _is_catalog_page(payload: object) -> bool:
    return isinstance(payload, list)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class CatalogAPIError(RuntimeError):
    """Raised when the catalog endpoint fails or returns an unusable payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class HttpCatalogFetcher:
    """Fetch the whole catalog page by page, ordered by ascending id.

    Pages are requested with keyset pagination (``id=gt.<last id>``), so the result
    order is stable between calls as long as the table is unchanged.
    """

    config: CatalogApiConfig = field(default_factory=CatalogApiConfig.from_environment)
    resilience: ResilienceConfig = field(default_factory=_default_resilience_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self) -> list[CatalogEntry]:
        return asyncio.run(self._fetch_all_async())

    @property
    def table_url(self) -> str:
        return f"{self.config.base_url}/rest/v1/{self.config.table}"

    async def _fetch_all_async(self) -> list[CatalogEntry]:
        entries: list[CatalogEntry] = []
        last_id: str | None = None
        page = 0

        async with self.client_factory(self.resilience) as client:
            while True:
                payloads = await self._request_page(client=client, after_id=last_id)
                page += 1
                entries.extend(parse_catalog_entry(payload) for payload in payloads)
                log.debug("Fetched catalog page %s with %s entries", page, len(payloads))
                if len(payloads) < self.config.page_size:
                    break
                last_id = payloads[-1].id

        log.info("Fetched %s catalog entries in %s pages", len(entries), page)
        return entries

    async def _request_page(
        self,
        *,
        client: ResilientClient,
        after_id: str | None,
    ) -> list[CatalogEntryPayload]:
        params: dict[str, str | int] = {
            "select": _SELECT_COLUMNS,
            "order": "id.asc",
            "limit": self.config.page_size,
        }
        if after_id is not None:
            params["id"] = f"gt.{after_id}"

        try:
            response = await client.get(
                self.table_url,
                params=httpx.QueryParams(params),
                headers=self.config.headers,
            )
        except httpx.HTTPError as exc:
            raise CatalogAPIError(f"Catalog request failed: {exc}") from exc

        if response.is_error:
            raise self._error_from_response(response)

        try:
            payload = response.json()
        except ValueError as exc:
            raise CatalogAPIError("Catalog response is not JSON") from exc
        if not isinstance(payload, list):
            raise CatalogAPIError("Unexpected catalog response payload", status_code=200)
        try:
            return [CatalogEntryPayload.model_validate(item) for item in payload]
        except ValidationError as exc:
            raise CatalogAPIError(f"Invalid catalog entry: {exc}") from exc

    @staticmethod
    def _error_from_response(response: httpx.Response) -> CatalogAPIError:
        try:
            error = ErrorPayload.model_validate(response.json())
        except (ValueError, ValidationError):
            message = response.text or response.reason_phrase
        else:
            message = error.message
        log.error("Catalog API error %s: %s", response.status_code, message)
        return CatalogAPIError(message, status_code=response.status_code)


if TYPE_CHECKING:
    _fetcher_check: CatalogFetcher = HttpCatalogFetcher()
