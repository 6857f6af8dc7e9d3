"""Pydantic schemas for name localization requests and responses."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.enums import GenderPreference, OutputFormat, TargetLanguage, Tone, VariantType


class CreateLocalizationRequest(BaseModel):
    """Input for createNameLocalization."""

    original_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Name to localize, as typed by the user.",
        examples=["Emma"],
    )
    target_language: TargetLanguage = Field(..., description="Script/language to render into.")
    gender_preference: GenderPreference = Field(..., description="Gender framing of the result.")
    output_format: OutputFormat = Field(..., description="Native script, romanization, or both.")
    tone: Tone = Field(..., description="Stylistic register of the result.")
    user_id: str | None = Field(
        default=None,
        max_length=255,
        description="Owner of the request; omitted (or blank) for guests.",
    )

    @field_validator("user_id", mode="before")
    @classmethod
    def blank_user_id_is_guest(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class NameVariantOut(BaseModel):
    """A single candidate localized rendering of a name."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    request_id: int
    variant_type: VariantType
    native_script: str
    romanization: str
    meaning: str
    pronunciation: str
    cultural_notes: str
    confidence_score: float = Field(..., ge=0, le=1)
    created_at: datetime

    @field_validator("confidence_score", mode="before")
    @classmethod
    def decimal_to_float(cls, value: Any) -> Any:
        if isinstance(value, Decimal):
            return float(value)
        return value


class LocalizationResponse(BaseModel):
    """A localization request joined with its variants in generation order."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    original_name: str
    target_language: TargetLanguage
    gender_preference: GenderPreference
    output_format: OutputFormat
    tone: Tone
    user_id: str | None = Field(
        default=None,
        description="Owner of the request; always null in the public feed.",
    )
    created_at: datetime
    variants: list[NameVariantOut] = Field(default_factory=list)
