from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from app.adapters.rate_limit.base import AbstractRateLimiter
from app.core.rate_limit import get_rate_limiter
from app.schemas.rate_limit import RateLimitCheckRequest, RateLimitCheckResponse

router = APIRouter(prefix="/rate-limit", tags=["Rate limit"])


@router.post("/check", response_model=RateLimitCheckResponse)
def check_rate_limit(
    payload: RateLimitCheckRequest,
    limiter: Annotated[AbstractRateLimiter, Depends(get_rate_limiter)],
) -> RateLimitCheckResponse:
    """Check, and when allowed consume, the budget of an (ip, user) pair.

    A denial is a normal response (``allowed: false``), not an HTTP error.
    """
    result = limiter.check(payload.ip_address, payload.user_id)
    return RateLimitCheckResponse(
        allowed=result.allowed,
        remaining=result.remaining,
        reset_time=result.reset_time,
    )
