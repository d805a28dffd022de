"""Async HTTP client with retries, a call-rate limit and an in-memory response cache.

Every request passes the ``AsyncLimiter`` first, then the hishel cache, then
``RetryTransport``. The cache lives as long as the client, i.e. one ``async with`` block.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage, FilterPolicy
from hishel import Response as HishelCacheResponse
from hishel._policies import BaseFilter
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

if TYPE_CHECKING:
    from types import TracebackType

log = logging.getLogger(__name__)

type ShouldCacheHook = Callable[[object], bool]

_IN_MEMORY_DATABASE = ":memory:"


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Retries for idempotent reads; ``Retry-After`` is honoured."""

    total: int = 4
    backoff_factor: float = 0.5
    max_backoff_wait: float = 60.0
    status_forcelist: frozenset[int] = frozenset({429, 500, 502, 503, 504})

    def build(self) -> Retry:
        return Retry(
            total=self.total,
            backoff_factor=self.backoff_factor,
            max_backoff_wait=self.max_backoff_wait,
            respect_retry_after_header=True,
            allowed_methods=("GET", "HEAD", "OPTIONS"),
            status_forcelist=tuple(self.status_forcelist),
            retry_on_exceptions=(
                httpx.TimeoutException,
                httpx.NetworkError,
                httpx.RemoteProtocolError,
            ),
        )


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class CacheConfig:
    """``should_cache`` receives the decoded JSON body; non-JSON bodies are never cached."""

    enabled: bool = True
    ttl_seconds: float | None = None
    should_cache: ShouldCacheHook | None = None


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = field(default_factory=CacheConfig)


class ResilientClient:
    """``httpx.AsyncClient`` wired up from a ``ResilienceConfig``."""

    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        self._limiter = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit is not None
            else None
        )

        transport = RetryTransport(retry=config.retry.build())
        cache = _build_cache_components(config.cache)
        if cache is None:
            self._client: httpx.AsyncClient = httpx.AsyncClient(
                timeout=config.timeout_seconds, transport=transport
            )
        else:
            storage, policy = cache
            self._client = AsyncCacheClient(
                timeout=config.timeout_seconds,
                transport=transport,
                storage=storage,
                policy=policy,
            )
        log.debug(
            "Created HTTP client %r (cache=%s, ratelimit=%s)",
            config.name,
            cache is not None,
            config.ratelimit,
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(
        self,
        url: str,
        *,
        params: httpx.QueryParams | Mapping[str, str | int] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        return await self._send(lambda: self._client.get(url, params=params, headers=headers))

    async def _send(self, request: Callable[[], Awaitable[httpx.Response]]) -> httpx.Response:
        if self._limiter is None:
            return await request()
        async with self._limiter:
            return await request()


class _JsonPayloadFilter(BaseFilter[HishelCacheResponse]):
    def __init__(self, predicate: ShouldCacheHook) -> None:
        self._predicate = predicate

    def needs_body(self) -> bool:
        return True

    def apply(self, item: HishelCacheResponse, body: bytes | None) -> bool:  # noqa: ARG002
        if body is None:
            return True
        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return False
        return bool(self._predicate(payload))


def _build_cache_components(
    config: CacheConfig | None,
) -> tuple[AsyncSqliteStorage, FilterPolicy | None] | None:
    if config is None or not config.enabled:
        return None

    storage = AsyncSqliteStorage(
        database_path=_IN_MEMORY_DATABASE,
        default_ttl=config.ttl_seconds,
        refresh_ttl_on_access=False,
    )
    policy = (
        FilterPolicy(response_filters=[_JsonPayloadFilter(config.should_cache)])
        if config.should_cache is not None
        else None
    )
    return storage, policy
