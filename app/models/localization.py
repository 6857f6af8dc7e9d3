from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import CreatedAtMixin
from app.schemas.enums import (
    GENDER_PREFERENCES,
    OUTPUT_FORMATS,
    TARGET_LANGUAGES,
    TONES,
    VARIANT_TYPES,
)

if TYPE_CHECKING:
    from app.models.favorite import UserFavorite

VARIANT_TEXT_COLUMNS = (
    "native_script",
    "romanization",
    "meaning",
    "pronunciation",
    "cultural_notes",
)


def _one_of(column: str, values: tuple[str, ...]) -> CheckConstraint:
    allowed = ", ".join(f"'{value}'" for value in values)
    return CheckConstraint(f"{column} IN ({allowed})", name=f"ck_{column}_allowed")


class NameLocalizationRequest(Base, CreatedAtMixin):
    """A name plus the stylistic preferences it was localized with."""

    __tablename__ = "name_localization_requests"
    __table_args__ = (
        _one_of("target_language", TARGET_LANGUAGES),
        _one_of("gender_preference", GENDER_PREFERENCES),
        _one_of("output_format", OUTPUT_FORMATS),
        _one_of("tone", TONES),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    original_name: Mapped[str] = mapped_column(String(100), nullable=False)
    target_language: Mapped[str] = mapped_column(String(16), nullable=False)
    gender_preference: Mapped[str] = mapped_column(String(16), nullable=False)
    output_format: Mapped[str] = mapped_column(String(16), nullable=False)
    tone: Mapped[str] = mapped_column(String(16), nullable=False)
    user_id: Mapped[Optional[str]] = mapped_column(String(255))  # null for guests

    variants: Mapped[list["NameVariant"]] = relationship(
        back_populates="request",
        order_by="NameVariant.id",
        cascade="all, delete",
        passive_deletes=True,
    )
    favorites: Mapped[list["UserFavorite"]] = relationship(
        back_populates="request",
        cascade="all, delete",
        passive_deletes=True,
    )


class NameVariant(Base, CreatedAtMixin):
    """One candidate rendering of a name, owned by its request."""

    __tablename__ = "name_variants"
    __table_args__ = (
        _one_of("variant_type", VARIANT_TYPES),
        CheckConstraint(
            "confidence_score >= 0 AND confidence_score <= 1",
            name="ck_confidence_score_range",
        ),
        *(
            CheckConstraint(f"length({column}) > 0", name=f"ck_{column}_not_empty")
            for column in VARIANT_TEXT_COLUMNS
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    request_id: Mapped[int] = mapped_column(
        ForeignKey("name_localization_requests.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    variant_type: Mapped[str] = mapped_column(String(16), nullable=False)
    native_script: Mapped[str] = mapped_column(Text, nullable=False)
    romanization: Mapped[str] = mapped_column(Text, nullable=False)
    meaning: Mapped[str] = mapped_column(Text, nullable=False)
    pronunciation: Mapped[str] = mapped_column(Text, nullable=False)
    cultural_notes: Mapped[str] = mapped_column(Text, nullable=False)
    confidence_score: Mapped[Decimal] = mapped_column(Numeric(3, 2), nullable=False)

    request: Mapped[NameLocalizationRequest] = relationship(back_populates="variants")
    favorites: Mapped[list["UserFavorite"]] = relationship(
        back_populates="variant",
        cascade="all, delete",
        passive_deletes=True,
    )
