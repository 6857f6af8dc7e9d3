from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    """Naive UTC timestamp, the representation stored in every table."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class CreatedAtMixin:
    """Creation timestamp shared by all tables."""

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
