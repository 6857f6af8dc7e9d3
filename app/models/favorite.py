from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import CreatedAtMixin

if TYPE_CHECKING:
    from app.models.localization import NameLocalizationRequest, NameVariant


class UserFavorite(Base, CreatedAtMixin):
    """A variant a user saved; references, never owns, request and variant."""

    __tablename__ = "user_favorites"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "request_id", "variant_id", name="uq_favorite_user_request_variant"
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    request_id: Mapped[int] = mapped_column(
        ForeignKey("name_localization_requests.id", ondelete="CASCADE"), nullable=False
    )
    variant_id: Mapped[int] = mapped_column(
        ForeignKey("name_variants.id", ondelete="CASCADE"), nullable=False
    )

    request: Mapped["NameLocalizationRequest"] = relationship(back_populates="favorites")
    variant: Mapped["NameVariant"] = relationship(back_populates="favorites")
