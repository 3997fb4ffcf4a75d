"""Opt-in retry wrapper for single calls.

The dispatcher and Lister never retry; callers that want retries wrap a
call explicitly:

    block = await with_retry(RetryPolicy(), lambda: api.blocks_latest())
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

import structlog

from .exceptions import ApiError, BlockfrostError, TransportError

T = TypeVar("T")

logger = structlog.get_logger(__name__)


@dataclass
class RetryPolicy:
    """リトライポリシー設定。"""

    max_attempts: int = 3
    initial_delay: float = 0.5
    max_delay: float = 30.0
    multiplier: float = 2.0
    jitter: bool = True
    retry_statuses: frozenset[int] = field(
        default_factory=lambda: frozenset({429, 500, 502, 503, 504})
    )

    def compute_delay(self, attempt: int) -> float:
        """リトライ間隔を秒単位で計算する。"""
        base = self.initial_delay * (self.multiplier**attempt)
        capped = min(base, self.max_delay)
        if self.jitter:
            return capped * (0.9 + random.random() * 0.2)
        return capped

    def is_retryable(self, error: BlockfrostError) -> bool:
        if isinstance(error, TransportError):
            return True
        return isinstance(error, ApiError) and error.status_code in self.retry_statuses


async def with_retry(policy: RetryPolicy, fn: Callable[[], Awaitable[T]]) -> T:
    """Run ``fn`` until it succeeds or attempts run out.

    The last error is re-raised unchanged; non-retryable errors are raised
    immediately.
    """
    for attempt in range(policy.max_attempts):
        try:
            return await fn()
        except BlockfrostError as e:
            if not policy.is_retryable(e) or attempt + 1 >= policy.max_attempts:
                raise
            delay = policy.compute_delay(attempt)
            logger.info("retry.scheduled", attempt=attempt + 1, delay=delay, code=e.code)
            await asyncio.sleep(delay)
    raise ValueError(f"max_attempts must be >= 1, got {policy.max_attempts}")
