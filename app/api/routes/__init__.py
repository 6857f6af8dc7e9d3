from __future__ import annotations

from app.api.routes.favorites import router as favorites_router
from app.api.routes.health import router as health_router
from app.api.routes.localizations import router as localizations_router
from app.api.routes.rate_limit import router as rate_limit_router

__all__ = [
    "favorites_router",
    "health_router",
    "localizations_router",
    "rate_limit_router",
]
