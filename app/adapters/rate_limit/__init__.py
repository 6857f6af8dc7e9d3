"""Rate limiting adapters.

The gate is expressed as an abstract limiter so the API layer only depends on
``check(ip_address, user_id)``; the shipped implementation counts requests in
the relational store.
"""

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from app.adapters.rate_limit.sql_window import SqlAlchemyWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "RateLimitResult",
    "SqlAlchemyWindowRateLimiter",
]
