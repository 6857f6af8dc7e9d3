from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from app.schemas.health import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint.

    Used by load balancers and monitoring systems to determine service health.

    Returns:
        HealthResponse: ``status`` set to "ok" and the current UTC time.
    """

    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc))
