"""Async client for the Blockfrost blockchain-data REST API."""

from .classifier import ResponseClassifier, UnexpectedStatus
from .client import BlockfrostApi
from .constants import (
    CARDANO_MAINNET,
    CARDANO_PREPROD,
    CARDANO_PREVIEW,
    CARDANO_TESTNET,
    IPFS,
    USER_AGENT,
    __version__,
)
from .dispatcher import RequestDispatcher, build_url
from .exceptions import (
    ApiError,
    BlockfrostError,
    BlockfrostErrorCodes,
    ConfigError,
    DecodeError,
    ListerBusyError,
    LocalIoError,
    TransportError,
)
from .lister import Lister, ListerState, ListerStep, PaginationCursor, StepKind
from .load import load_project_id, load_settings, settings_from_env
from .log import configure_logging
from .models import (
    AffectedAddress,
    Block,
    Health,
    HealthClock,
    Order,
    Pagination,
    ResponseError,
    RootInfo,
    TxHash,
)
from .retry import RetryPolicy, with_retry
from .settings import Settings
from .transport import RawResponse, Transport

__all__ = [
    "BlockfrostApi",
    "Settings",
    "load_project_id",
    "load_settings",
    "settings_from_env",
    "configure_logging",
    "RequestDispatcher",
    "build_url",
    "ResponseClassifier",
    "UnexpectedStatus",
    "Transport",
    "RawResponse",
    "Lister",
    "ListerState",
    "ListerStep",
    "PaginationCursor",
    "StepKind",
    "RetryPolicy",
    "with_retry",
    "Pagination",
    "Order",
    "ResponseError",
    "RootInfo",
    "Health",
    "HealthClock",
    "Block",
    "TxHash",
    "AffectedAddress",
    "BlockfrostError",
    "BlockfrostErrorCodes",
    "TransportError",
    "DecodeError",
    "ApiError",
    "LocalIoError",
    "ConfigError",
    "ListerBusyError",
    "CARDANO_MAINNET",
    "CARDANO_PREPROD",
    "CARDANO_PREVIEW",
    "CARDANO_TESTNET",
    "IPFS",
    "USER_AGENT",
    "__version__",
]
