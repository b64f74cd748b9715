"""Upstream answer request models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from resumefill.typing.enums import FailureCategory


class RequesterConfig(BaseModel):
    """Options passed through to the answer requester."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str | None = None
    api_key: str | None = None
    model: str = "google/gemini-2.5-flash-lite"
    temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    max_tokens: int = Field(default=500, gt=0)
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay_ms: int = Field(default=1000, ge=0)
    headers: dict[str, str] = Field(default_factory=dict)


class ConnectionCheck(BaseModel):
    """Outcome of a single upstream probe call."""

    model_config = ConfigDict(extra="forbid")

    success: bool
    message: str
    status_code: int | None = None
    category: FailureCategory | None = None
