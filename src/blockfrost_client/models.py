"""Wire records and request parameters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Order(StrEnum):
    """Ordering of paged results (server default is ascending)."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Pagination:
    """Query parameters for one page; ``None`` fields are left to server defaults."""

    page: int | None = None
    count: int | None = None
    order: Order | None = None

    def to_query(self) -> dict[str, str]:
        query: dict[str, str] = {}
        if self.page is not None:
            query["page"] = str(self.page)
        if self.count is not None:
            query["count"] = str(self.count)
        if self.order is not None:
            query["order"] = self.order.value
        return query


class ResponseError(BaseModel):
    """Error envelope returned by the API on non-2xx responses."""

    model_config = ConfigDict(strict=True)

    status_code: int
    error: str
    message: str


class RootInfo(BaseModel):
    url: str
    version: str


class Health(BaseModel):
    is_healthy: bool


class HealthClock(BaseModel):
    server_time: int


class Block(BaseModel):
    """A block as returned by the ``/blocks`` family of endpoints."""

    time: int
    height: int | None = None
    hash: str
    slot: int | None = None
    epoch: int | None = None
    epoch_slot: int | None = None
    slot_leader: str
    size: int
    tx_count: int
    output: str | None = None
    fees: str | None = None
    block_vrf: str | None = None
    previous_block: str | None = None
    next_block: str | None = None
    confirmations: int


class TxHash(BaseModel):
    tx_hash: str


class AffectedAddress(BaseModel):
    address: str
    transactions: list[TxHash]
