"""Single request path: URL -> one GET -> decoded value or typed error."""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Any

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from .classifier import ResponseClassifier
from .exceptions import DecodeError
from .models import Pagination
from .transport import Transport

logger = structlog.get_logger(__name__)


@lru_cache(maxsize=256)
def _adapter(shape: Any) -> TypeAdapter[Any]:
    return TypeAdapter(shape)


def build_url(base_url: str, path: str, query: Mapping[str, str] | None = None) -> str:
    """Join base URL, path and query; no ``?`` is added for an empty query."""
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    if query:
        url = f"{url}?{httpx.QueryParams(query)}"
    return url


class RequestDispatcher:
    """Composes Transport and ResponseClassifier for exactly one network call.

    Nothing is retried here; wrap calls with ``with_retry`` when needed.
    """

    def __init__(self, base_url: str, transport: Transport, classifier: ResponseClassifier) -> None:
        self._base_url = base_url
        self._transport = transport
        self._classifier = classifier

    @property
    def base_url(self) -> str:
        return self._base_url

    async def call(self, path: str, shape: Any, query: Mapping[str, str] | None = None) -> Any:
        """GET ``path`` and decode the body into ``shape`` (any pydantic-validatable type)."""
        url = build_url(self._base_url, path, query)
        logger.debug("request.start", url=url)
        raw = await self._transport.get(url)
        logger.debug("request.done", url=url, status_code=raw.status_code)

        if not raw.is_success:
            raise self._classifier.classify(raw.status_code, raw.text, url)

        try:
            return _adapter(shape).validate_json(raw.text)
        except ValidationError as e:
            raise DecodeError(url=url, text=raw.text, cause=e) from e

    async def call_paged(
        self,
        path: str,
        item_shape: Any,
        pagination: Pagination | None = None,
    ) -> list[Any]:
        """GET one page of ``path``; the body must be a JSON array of ``item_shape``."""
        query = pagination.to_query() if pagination is not None else None
        return await self.call(path, list[item_shape], query)  # type: ignore[valid-type]
