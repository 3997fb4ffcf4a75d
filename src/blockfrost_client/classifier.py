"""Turns a non-2xx response into an ApiError.

The server normally answers errors with a JSON envelope
``{"status_code": ..., "error": ..., "message": ...}``. When the body is
anything else, an envelope is synthesized from the HTTP status and the
body text so that nothing the server said is lost. Classification itself
never fails.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from dataclasses import dataclass

import structlog
from pydantic import ValidationError

from .constants import DEFAULT_EXPECTED_ERROR_CODES
from .exceptions import ApiError
from .models import ResponseError

logger = structlog.get_logger(__name__)

UNPARSEABLE_BODY = "Could not parse error body to interpret the reason of the error"


@dataclass(frozen=True)
class UnexpectedStatus:
    """Emitted when a status code falls outside the documented error set."""

    status_code: int
    url: str


Listener = Callable[[UnexpectedStatus], None]


def try_formatting_json(text: str) -> str | None:
    """Pretty-print ``text`` if it is JSON of any shape, else ``None``."""
    try:
        return json.dumps(json.loads(text), indent=2, ensure_ascii=False)
    except (ValueError, RecursionError):
        return None


class ResponseClassifier:
    def __init__(self, expected_error_codes: Iterable[int] = DEFAULT_EXPECTED_ERROR_CODES) -> None:
        self._expected = frozenset(expected_error_codes)
        self._listeners: list[Listener] = []

    @property
    def expected_error_codes(self) -> frozenset[int]:
        return self._expected

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a diagnostic listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def classify(self, status_code: int, body: str, url: str) -> ApiError:
        if status_code not in self._expected:
            self._emit(UnexpectedStatus(status_code=status_code, url=url))

        try:
            reason = ResponseError.model_validate_json(body)
        except ValidationError:
            formatted = try_formatting_json(body)
            reason = ResponseError(
                status_code=status_code,
                error=UNPARSEABLE_BODY,
                message=formatted if formatted is not None else body,
            )
        return ApiError(url=url, reason=reason)

    def _emit(self, event: UnexpectedStatus) -> None:
        logger.warning(
            "response.unexpected_status",
            status_code=event.status_code,
            url=event.url,
        )
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("response.listener_failed", listener=repr(listener))
