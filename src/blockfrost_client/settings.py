"""Client settings (pydantic BaseModel)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import DEFAULT_EXPECTED_ERROR_CODES, NETWORKS, USER_AGENT


def network_from_project_id(project_id: str) -> str | None:
    """Return the base URL implied by the project id prefix, if any."""
    for prefix, url in NETWORKS.items():
        if project_id.startswith(prefix):
            return url
    return None


class Settings(BaseModel):
    """Immutable client settings.

    ``base_url`` is derived from the ``project_id`` prefix when not given.
    """

    model_config = ConfigDict(frozen=True)

    project_id: str = Field(min_length=1)
    base_url: str
    timeout_seconds: float = Field(default=30.0, gt=0)
    expected_error_codes: frozenset[int] = DEFAULT_EXPECTED_ERROR_CODES
    user_agent: str = USER_AGENT

    @model_validator(mode="before")
    @classmethod
    def _resolve_base_url(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("base_url"):
            return data
        project_id = data.get("project_id")
        if not isinstance(project_id, str):
            return data
        url = network_from_project_id(project_id)
        if url is None:
            raise ValueError(
                "cannot infer network from project_id prefix; "
                f"expected one of {sorted(NETWORKS)} or an explicit base_url"
            )
        return {**data, "base_url": url}

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("project_id", "user_agent")
    @classmethod
    def _require_header_safe(cls, value: str) -> str:
        # sent verbatim as HTTP header values
        if not value.isascii() or not value.isprintable():
            raise ValueError("must contain printable ASCII characters only")
        return value
