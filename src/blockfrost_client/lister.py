"""Lazy page-by-page iteration over a paged endpoint.

A Lister walks pages ``start_page, start_page + 1, ...`` one request at a
time, only when the consumer asks for more. An empty page ends the
sequence cleanly; the first error ends it too and is reported exactly
once. Exhausted or failed listers never touch the network again; start
over by building a new Lister.

    lister = api.blocks_next_all("4873401", count=50)
    async for page in lister.pages(limit=3):
        ...
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Generic, TypeVar

import structlog

from .constants import MAX_COUNT
from .exceptions import BlockfrostError, ListerBusyError
from .models import Order, Pagination

T = TypeVar("T")

FetchPage = Callable[[Pagination], Awaitable[list[T]]]

logger = structlog.get_logger(__name__)


class ListerState(Enum):
    READY = auto()
    FETCHING = auto()
    EXHAUSTED = auto()
    FAILED = auto()


class StepKind(Enum):
    PAGE = auto()
    END = auto()
    ERROR = auto()


@dataclass
class PaginationCursor:
    current_page: int
    page_size: int
    exhausted: bool = False


@dataclass(frozen=True)
class ListerStep(Generic[T]):
    """Outcome of one ``advance()``: a page, the end, or the terminal error."""

    kind: StepKind
    page_number: int | None = None
    items: list[T] | None = None
    error: BlockfrostError | None = None


class Lister(Generic[T]):
    """Pull-based, non-reentrant page sequence over ``fetch``."""

    def __init__(
        self,
        fetch: FetchPage[T],
        *,
        count: int = MAX_COUNT,
        start_page: int = 1,
        order: Order | None = None,
    ) -> None:
        if start_page < 1:
            raise ValueError(f"start_page must be >= 1, got {start_page}")
        if count < 1:
            raise ValueError(f"count must be >= 1, got {count}")
        self._fetch = fetch
        self._order = order
        self._cursor = PaginationCursor(current_page=start_page, page_size=count)
        self._state = ListerState.READY

    @property
    def state(self) -> ListerState:
        return self._state

    @property
    def cursor(self) -> PaginationCursor:
        return PaginationCursor(
            current_page=self._cursor.current_page,
            page_size=self._cursor.page_size,
            exhausted=self._cursor.exhausted,
        )

    async def advance(self) -> ListerStep[T]:
        """Fetch the next page, or report END once the lister is terminal."""
        if self._state is ListerState.FETCHING:
            raise ListerBusyError(self._cursor.current_page)
        if self._state in (ListerState.EXHAUSTED, ListerState.FAILED):
            return ListerStep(kind=StepKind.END)

        page_number = self._cursor.current_page
        pagination = Pagination(page=page_number, count=self._cursor.page_size, order=self._order)
        self._state = ListerState.FETCHING
        try:
            items = await self._fetch(pagination)
        except BlockfrostError as e:
            self._finish(ListerState.FAILED)
            logger.info("lister.failed", page=page_number, code=e.code)
            return ListerStep(kind=StepKind.ERROR, page_number=page_number, error=e)
        except BaseException:
            # cancellation or a bug in fetch: never resume
            self._finish(ListerState.FAILED)
            raise

        if not items:
            self._finish(ListerState.EXHAUSTED)
            logger.debug("lister.exhausted", page=page_number)
            return ListerStep(kind=StepKind.END, page_number=page_number)

        self._cursor.current_page += 1
        self._state = ListerState.READY
        logger.debug("lister.page", page=page_number, items=len(items))
        return ListerStep(kind=StepKind.PAGE, page_number=page_number, items=items)

    def _finish(self, state: ListerState) -> None:
        self._state = state
        self._cursor.exhausted = True

    def __aiter__(self) -> Lister[T]:
        return self

    async def __anext__(self) -> list[T]:
        step = await self.advance()
        if step.kind is StepKind.PAGE:
            assert step.items is not None
            return step.items
        if step.kind is StepKind.ERROR:
            assert step.error is not None
            raise step.error
        raise StopAsyncIteration

    async def pages(self, limit: int | None = None) -> AsyncIterator[list[T]]:
        """Yield at most ``limit`` pages; stopping early issues no further request."""
        taken = 0
        while limit is None or taken < limit:
            try:
                page = await self.__anext__()
            except StopAsyncIteration:
                return
            taken += 1
            yield page

    async def items(self) -> AsyncIterator[T]:
        """Yield items one at a time, buffering a single page."""
        async for page in self:
            for item in page:
                yield item

    async def collect(self) -> list[T]:
        """Drain the lister and return every item."""
        result: list[T] = []
        async for page in self:
            result.extend(page)
        return result
