"""blockfrost_client の例外型定義"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ResponseError


class BlockfrostError(Exception):
    """blockfrost_client のエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class BlockfrostErrorCodes:
    """BlockfrostError のエラーコード定数。"""

    TRANSPORT: str = "TRANSPORT_ERROR"
    DECODE: str = "DECODE_ERROR"
    API: str = "API_ERROR"
    LOCAL_IO: str = "LOCAL_IO_ERROR"
    CONFIG: str = "CONFIG_ERROR"
    LISTER_BUSY: str = "LISTER_BUSY"


class TransportError(BlockfrostError):
    """The HTTP call itself failed (DNS, connection, timeout)."""

    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(
            code=BlockfrostErrorCodes.TRANSPORT,
            message=f"request to {url} failed: {cause}",
            cause=cause,
        )
        self.url = url
        self.reason = cause

    def format_diagnostic(self) -> str:
        return f"transport error:\n  url: {self.url}\n  reason: {self.reason}"


class DecodeError(BlockfrostError):
    """A 2xx body did not decode into the expected shape.

    The raw body is always kept in ``text``.
    """

    def __init__(self, url: str, text: str, cause: BaseException) -> None:
        super().__init__(
            code=BlockfrostErrorCodes.DECODE,
            message=f"could not decode response from {url}: {cause}",
            cause=cause,
        )
        self.url = url
        self.text = text
        self.reason = cause

    def format_diagnostic(self) -> str:
        return (
            "json error:\n"
            f"  url: {self.url}\n"
            f"  reason: {self.reason}\n"
            f"  text: '{self.text}'"
        )


class ApiError(BlockfrostError):
    """The server answered with an error envelope (parsed or synthesized)."""

    def __init__(self, url: str, reason: ResponseError) -> None:
        super().__init__(
            code=BlockfrostErrorCodes.API,
            message=f"HTTP {reason.status_code} {reason.error}: {reason.message}",
        )
        self.url = url
        self.reason = reason

    @property
    def status_code(self) -> int:
        return self.reason.status_code

    @property
    def error(self) -> str:
        return self.reason.error

    @property
    def message(self) -> str:
        return self.reason.message

    def format_diagnostic(self) -> str:
        return (
            "response error:\n"
            f"  url: {self.url}\n"
            f"  status code: {self.status_code}\n"
            f"  error: {self.error}\n"
            f"  message: {self.message}"
        )


class LocalIoError(BlockfrostError):
    """A local file (settings, credentials) could not be read."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(
            code=BlockfrostErrorCodes.LOCAL_IO,
            message=f"Failed to read file: {path}",
            cause=cause,
        )
        self.path = path


class ConfigError(BlockfrostError):
    """Settings could not be parsed or validated."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(code=BlockfrostErrorCodes.CONFIG, message=message, cause=cause)


class ListerBusyError(BlockfrostError):
    """advance() was called while the previous page fetch is still in flight."""

    def __init__(self, page: int) -> None:
        super().__init__(
            code=BlockfrostErrorCodes.LISTER_BUSY,
            message=f"page {page} is still being fetched",
        )
        self.page = page
