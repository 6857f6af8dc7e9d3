"""Pydantic schemas for the rate limit check endpoint."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RateLimitCheckRequest(BaseModel):
    ip_address: str = Field(..., min_length=1, max_length=64)
    user_id: str | None = Field(default=None, max_length=255)


class RateLimitCheckResponse(BaseModel):
    """Outcome of a rate limit check.

    ``reset_time`` is serialized as ``resetTime`` to match existing clients.
    """

    model_config = ConfigDict(populate_by_name=True)

    allowed: bool = Field(..., description="Whether the caller may proceed.")
    remaining: int = Field(..., ge=0, description="Requests left in the current window.")
    reset_time: datetime = Field(
        ...,
        alias="resetTime",
        description="When the earliest counted window expires (UTC).",
    )
