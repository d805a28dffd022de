"""Ports for fetching the canonical catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from stockrecon.domain.model import CatalogEntry


@runtime_checkable
class CatalogFetcher(Protocol):
    """Callable port returning the full catalog in its stable source order."""

    def __call__(self) -> Sequence[CatalogEntry]: ...


__all__ = ["CatalogFetcher"]
