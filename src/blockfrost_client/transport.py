"""httpx を使った HTTP トランスポート"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from .exceptions import TransportError
from .settings import Settings


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    text: str
    url: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class Transport:
    """Issues authenticated GET requests over one shared connection pool.

    ``httpx.AsyncClient`` is safe for concurrent use, so any number of
    listers and single calls may share one Transport.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None) -> None:
        self._headers = {
            "project_id": settings.project_id,
            "User-Agent": settings.user_agent,
        }
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=settings.timeout_seconds)

    async def get(self, url: str) -> RawResponse:
        try:
            resp = await self._client.get(url, headers=self._headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(url, e) from e
        return RawResponse(status_code=resp.status_code, text=resp.text, url=url)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
