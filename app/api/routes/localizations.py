from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.api.deps import get_feed_service, get_localization_service
from app.core.rate_limit import enforce_rate_limit
from app.schemas.enums import MAX_ROW_ID
from app.schemas.localization import CreateLocalizationRequest, LocalizationResponse
from app.services.feed_service import FeedService
from app.services.localization_service import LocalizationService

router = APIRouter(prefix="/localizations", tags=["Localizations"])

LocalizationServiceDep = Annotated[LocalizationService, Depends(get_localization_service)]


@router.post(
    "",
    response_model=LocalizationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(enforce_rate_limit)],
)
def create_name_localization(
    payload: CreateLocalizationRequest,
    service: LocalizationServiceDep,
) -> LocalizationResponse:
    """Localize a name and return the stored request with its variants.

    Raises:
        HTTPException: 422 for invalid input, 429 when rate limited.
        StoreAppError: 500 when the request could not be stored.
    """
    return service.create(payload)


@router.get("/recent", response_model=list[LocalizationResponse])
def get_recent_localizations(
    feed: Annotated[FeedService, Depends(get_feed_service)],
) -> list[LocalizationResponse]:
    """Public feed of the most recent requests, with user ids removed."""
    return feed.recent()


@router.get("/{localization_id}", response_model=LocalizationResponse | None)
def get_localization_by_id(
    localization_id: Annotated[int, Path(ge=1, le=MAX_ROW_ID)],
    service: LocalizationServiceDep,
) -> LocalizationResponse | None:
    """Fetch one request with its variants; ``null`` when it does not exist."""
    return service.get_by_id(localization_id)
