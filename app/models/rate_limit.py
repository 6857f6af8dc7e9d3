"""SQLAlchemy model for rate limit counters."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import CreatedAtMixin, utcnow


class RateLimitRecord(Base, CreatedAtMixin):
    """Request count for one (ip, user) pair anchored at ``window_start``.

    Several records may exist for the same pair; the limiter sums the ones
    still inside the lookback window. ``created_at`` is refreshed on every
    increment and marks the most recently used record.
    """

    __tablename__ = "rate_limits"
    __table_args__ = (
        CheckConstraint("request_count >= 0", name="ck_rate_limit_count_non_negative"),
        Index("ix_rate_limits_ip_window", "ip_address", "window_start"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ip_address: Mapped[str] = mapped_column(String(64), nullable=False)
    user_id: Mapped[Optional[str]] = mapped_column(String(255))
    request_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    window_start: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
