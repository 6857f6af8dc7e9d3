"""Pydantic schemas for user favorites."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.enums import MAX_ROW_ID


class AddFavoriteRequest(BaseModel):
    """Input for addToFavorites."""

    user_id: str = Field(..., min_length=1, max_length=255)
    request_id: int = Field(
        ...,
        ge=1,
        le=MAX_ROW_ID,
        description="Localization request the variant belongs to.",
    )
    variant_id: int = Field(..., ge=1, le=MAX_ROW_ID, description="Variant to save.")


class UserFavoriteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    request_id: int
    variant_id: int
    created_at: datetime


class RemoveFavoriteResponse(BaseModel):
    removed: bool = Field(
        ...,
        description="True when a favorite owned by the caller was deleted.",
    )
