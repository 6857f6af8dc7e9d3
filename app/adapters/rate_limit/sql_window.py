"""Store-backed counting-window rate limiter.

Counts live in the ``rate_limits`` table as one or more records per
(ip, user) pair. A check sums every record whose ``window_start`` falls
inside the lookback window, so records age out of the total on their own
and are never deleted here.

Notes:
- Increments are a single ``UPDATE ... SET request_count = request_count + 1``
  on the most recently used record. Two concurrent checks can both pass the
  read before either increments, letting the total briefly exceed the limit
  by the number of racing callers. This is accepted instead of locking.
- Records older than the window are kept; pruning them is left to operators.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from app.core.logging import hash_identifier
from app.db.session import store_errors
from app.models.common import utcnow
from app.models.rate_limit import RateLimitRecord

logger = logging.getLogger(__name__)


class SqlAlchemyWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter aggregating counting records inside a sliding lookback.

    A caller is admitted while the sum of its records with
    ``window_start >= now - window`` is below ``limit``. The reset time is
    anchored on the earliest counted record.
    """

    def __init__(
        self,
        session: Session,
        *,
        limit: int,
        window_seconds: int,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize the limiter.

        Args:
            session: Session used for the lookback query and the increment.
            limit: Maximum number of requests per window.
            window_seconds: Size of the window in seconds.
            clock: Time source returning naive UTC datetimes.

        Raises:
            ValueError: If limit or window_seconds are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be >= 1")

        self._session = session
        self._limit = limit
        self._window = timedelta(seconds=window_seconds)
        self._clock = clock

    @property
    def limit(self) -> int:
        return self._limit

    def _matching_records(
        self, ip_address: str, user_id: str | None, floor: datetime
    ) -> list[RateLimitRecord]:
        stmt = (
            select(RateLimitRecord)
            .where(
                RateLimitRecord.ip_address == ip_address,
                RateLimitRecord.window_start >= floor,
            )
            .execution_options(populate_existing=True)
        )
        if user_id:
            stmt = stmt.where(RateLimitRecord.user_id == user_id)
        return list(self._session.scalars(stmt))

    def _count_request(
        self,
        records: list[RateLimitRecord],
        *,
        ip_address: str,
        user_id: str | None,
        now: datetime,
    ) -> None:
        if records:
            latest = max(records, key=lambda record: (record.created_at, record.id))
            self._session.execute(
                update(RateLimitRecord)
                .where(RateLimitRecord.id == latest.id)
                .values(
                    request_count=RateLimitRecord.request_count + 1,
                    created_at=now,
                )
            )
        else:
            self._session.add(
                RateLimitRecord(
                    ip_address=ip_address,
                    user_id=user_id,
                    request_count=1,
                    window_start=now,
                    created_at=now,
                )
            )
        self._session.commit()

    def check(self, ip_address: str, user_id: str | None = None) -> RateLimitResult:
        """Check the caller's budget and consume one request when allowed.

        Raises:
            ValueError: If ip_address is empty.
            StoreAppError: If the store cannot be read or updated. The caller
                must not treat this as an implicit allow.
        """
        if not ip_address:
            raise ValueError("ip_address must be a non-empty string")
        user_id = user_id or None

        now = self._clock()
        floor = now - self._window

        with store_errors(self._session, "rate_limit.check"):
            records = self._matching_records(ip_address, user_id, floor)
            total = sum(record.request_count for record in records)
            earliest = min((record.window_start for record in records), default=now)
            reset_time = earliest + self._window

            if total >= self._limit:
                # Read-only path; end the transaction opened by the lookback.
                self._session.rollback()
                retry_after = max(0, math.ceil((reset_time - now).total_seconds()))
                logger.info(
                    "rate_limit.denied",
                    extra={
                        "ip_hash": hash_identifier(ip_address),
                        "user_hash": hash_identifier(user_id),
                        "total": total,
                        "limit": self._limit,
                        "retry_after_s": retry_after,
                    },
                )
                return RateLimitResult(
                    allowed=False,
                    limit=self._limit,
                    remaining=0,
                    reset_time=reset_time,
                    retry_after_seconds=retry_after,
                )

            self._count_request(records, ip_address=ip_address, user_id=user_id, now=now)

        remaining = max(0, self._limit - total - 1)
        logger.debug(
            "rate_limit.allowed",
            extra={
                "ip_hash": hash_identifier(ip_address),
                "user_hash": hash_identifier(user_id),
                "remaining": remaining,
                "records": len(records),
            },
        )
        return RateLimitResult(
            allowed=True,
            limit=self._limit,
            remaining=remaining,
            reset_time=reset_time,
            retry_after_seconds=None,
        )
