"""Rate limiting dependency for FastAPI routes.

This module wires the rate limit gate into the HTTP layer.

Rate limiting strategy:
- Counting window per client IP, narrowed to a user when the caller sends
  an ``X-User-Id`` header.
- Denied callers get HTTP 429 with Retry-After/X-RateLimit-* headers.
- Store failures propagate as errors; they never count as an allow.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from app.adapters.rate_limit.sql_window import SqlAlchemyWindowRateLimiter
from app.core.config import settings
from app.core.errors import RateLimitAppError
from app.core.logging import hash_identifier
from app.db.session import get_db

logger = logging.getLogger(__name__)


def get_rate_limiter(db: Annotated[Session, Depends(get_db)]) -> AbstractRateLimiter:
    """Build the limiter for the current request from configuration."""

    return SqlAlchemyWindowRateLimiter(
        db,
        limit=settings.app.rate_limit_requests,
        window_seconds=settings.app.rate_limit_window_seconds,
    )


def client_ip(request: Request) -> str:
    """Return the peer address of the request ("unknown" when unavailable)."""

    return request.client.host if request.client else "unknown"


def rate_limit_headers(result: RateLimitResult) -> dict[str, str]:
    headers = {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": result.reset_time.isoformat() + "Z",
    }
    if result.retry_after_seconds is not None:
        headers["Retry-After"] = str(result.retry_after_seconds)
    return headers


def enforce_rate_limit(
    request: Request,
    limiter: Annotated[AbstractRateLimiter, Depends(get_rate_limiter)],
    x_user_id: Annotated[str | None, Header(alias="X-User-Id")] = None,
) -> None:
    """FastAPI dependency enforcing rate limits.

    When enabled, consumes one request from the caller's budget. If the
    caller is over the ceiling, raises RateLimitAppError.

    Raises:
        RateLimitAppError: Rendered as 429 when the rate limit is exceeded.
        StoreAppError: When the limiter cannot reach its store.
    """

    if not settings.app.rate_limit_enabled:
        return

    ip_address = client_ip(request)
    result = limiter.check(ip_address, x_user_id)
    if result.allowed:
        return

    logger.warning(
        "rate_limit.exceeded",
        extra={
            "ip_hash": hash_identifier(ip_address),
            "user_hash": hash_identifier(x_user_id),
            "limit": result.limit,
            "retry_after_s": result.retry_after_seconds,
            "route": request.url.path,
        },
    )

    raise RateLimitAppError(
        code="rate_limit_exceeded",
        message="Rate limit exceeded. Try again later.",
        details={"limit": result.limit, "retry_after": result.retry_after_seconds or 0},
        headers=rate_limit_headers(result) if settings.app.rate_limit_include_headers else None,
    )
