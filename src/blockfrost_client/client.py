"""BlockfrostApi: settings + transport + dispatcher, and the endpoint methods."""

from __future__ import annotations

from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx

from .classifier import ResponseClassifier
from .constants import MAX_COUNT
from .dispatcher import RequestDispatcher
from .lister import Lister
from .models import AffectedAddress, Block, Health, HealthClock, Order, Pagination, RootInfo
from .settings import Settings
from .transport import Transport


def _segment(value: str) -> str:
    """Escape a caller-supplied value for use as one path segment."""
    return quote(value, safe="")


class BlockfrostApi:
    """Async client for the Blockfrost REST API.

    One instance owns one connection pool; share it freely across tasks.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        http_client: httpx.AsyncClient | None = None,
        classifier: ResponseClassifier | None = None,
    ) -> None:
        self._settings = settings
        self._transport = Transport(settings, http_client)
        self.classifier = classifier or ResponseClassifier(settings.expected_error_codes)
        self._dispatcher = RequestDispatcher(settings.base_url, self._transport, self.classifier)

    @property
    def settings(self) -> Settings:
        return self._settings

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> BlockfrostApi:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # ---- generic call paths ----

    async def call_endpoint(self, path: str, shape: Any) -> Any:
        return await self._dispatcher.call(path, shape)

    async def call_paged_endpoint(
        self, path: str, item_shape: Any, pagination: Pagination | None = None
    ) -> list[Any]:
        return await self._dispatcher.call_paged(path, item_shape, pagination)

    def lister(
        self,
        path: str,
        item_shape: Any,
        *,
        count: int = MAX_COUNT,
        start_page: int = 1,
        order: Order | None = None,
    ) -> Lister[Any]:
        async def fetch(pagination: Pagination) -> list[Any]:
            return await self._dispatcher.call_paged(path, item_shape, pagination)

        return Lister(fetch, count=count, start_page=start_page, order=order)

    # ---- health ----

    async def root(self) -> RootInfo:
        return await self.call_endpoint("/", RootInfo)

    async def health(self) -> Health:
        return await self.call_endpoint("/health", Health)

    async def health_clock(self) -> HealthClock:
        return await self.call_endpoint("/health/clock", HealthClock)

    # ---- blocks ----

    async def blocks_latest(self) -> Block:
        return await self.call_endpoint("/blocks/latest", Block)

    async def blocks_by_id(self, hash_or_number: str) -> Block:
        return await self.call_endpoint(f"/blocks/{_segment(hash_or_number)}", Block)

    async def blocks_slot(self, slot_number: int) -> Block:
        return await self.call_endpoint(f"/blocks/slot/{slot_number}", Block)

    async def blocks_by_epoch_and_slot(self, epoch_number: int, slot_number: int) -> Block:
        return await self.call_endpoint(f"/blocks/epoch/{epoch_number}/slot/{slot_number}", Block)

    async def blocks_latest_txs(self, pagination: Pagination | None = None) -> list[str]:
        return await self.call_paged_endpoint("/blocks/latest/txs", str, pagination)

    async def blocks_next(
        self, hash_or_number: str, pagination: Pagination | None = None
    ) -> list[Block]:
        return await self.call_paged_endpoint(f"/blocks/{_segment(hash_or_number)}/next", Block, pagination)

    async def blocks_previous(
        self, hash_or_number: str, pagination: Pagination | None = None
    ) -> list[Block]:
        return await self.call_paged_endpoint(
            f"/blocks/{_segment(hash_or_number)}/previous", Block, pagination
        )

    async def blocks_txs(
        self, hash_or_number: str, pagination: Pagination | None = None
    ) -> list[str]:
        return await self.call_paged_endpoint(f"/blocks/{_segment(hash_or_number)}/txs", str, pagination)

    async def blocks_affected_addresses(
        self, hash_or_number: str, pagination: Pagination | None = None
    ) -> list[AffectedAddress]:
        return await self.call_paged_endpoint(
            f"/blocks/{_segment(hash_or_number)}/addresses", AffectedAddress, pagination
        )

    # ---- listers ----

    def blocks_latest_txs_all(self, *, count: int = MAX_COUNT, order: Order | None = None) -> Lister[str]:
        return self.lister("/blocks/latest/txs", str, count=count, order=order)

    def blocks_next_all(self, hash_or_number: str, *, count: int = MAX_COUNT) -> Lister[Block]:
        return self.lister(f"/blocks/{_segment(hash_or_number)}/next", Block, count=count)

    def blocks_previous_all(self, hash_or_number: str, *, count: int = MAX_COUNT) -> Lister[Block]:
        return self.lister(f"/blocks/{_segment(hash_or_number)}/previous", Block, count=count)

    def blocks_txs_all(
        self, hash_or_number: str, *, count: int = MAX_COUNT, order: Order | None = None
    ) -> Lister[str]:
        return self.lister(f"/blocks/{_segment(hash_or_number)}/txs", str, count=count, order=order)

    def blocks_affected_addresses_all(
        self, hash_or_number: str, *, count: int = MAX_COUNT
    ) -> Lister[AffectedAddress]:
        return self.lister(f"/blocks/{_segment(hash_or_number)}/addresses", AffectedAddress, count=count)
