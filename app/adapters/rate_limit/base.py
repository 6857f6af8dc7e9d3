"""Rate limiter interfaces.

The API depends on this abstraction (not the concrete implementation) so the
counting store can change without touching routes or services.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a rate limit check.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        limit: Max requests per window.
        remaining: Requests left after this one (0 when blocked).
        reset_time: UTC time at which the earliest counted window expires.
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_time: datetime
    retry_after_seconds: int | None


class AbstractRateLimiter(ABC):
    """Interface for rate limiters keyed by client IP and optional user."""

    @abstractmethod
    def check(self, ip_address: str, user_id: str | None = None) -> RateLimitResult:
        """Decide whether a request may proceed and count it when it does.

        Args:
            ip_address: Client IP address.
            user_id: Optional user identifier; when omitted, all traffic from
                the IP is pooled regardless of the user it was recorded with.

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError
