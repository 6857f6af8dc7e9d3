from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.deps import get_favorites_service
from app.core.rate_limit import enforce_rate_limit
from app.schemas.enums import MAX_ROW_ID
from app.schemas.favorite import AddFavoriteRequest, RemoveFavoriteResponse, UserFavoriteOut
from app.schemas.localization import LocalizationResponse
from app.services.favorites_service import FavoritesService

router = APIRouter(tags=["Favorites"])

FavoritesServiceDep = Annotated[FavoritesService, Depends(get_favorites_service)]


@router.post(
    "/favorites",
    response_model=UserFavoriteOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(enforce_rate_limit)],
)
def add_to_favorites(
    payload: AddFavoriteRequest,
    service: FavoritesServiceDep,
) -> UserFavoriteOut:
    """Save a variant to the user's favorites.

    Raises:
        NotFoundAppError: 404 when the request or variant is missing, or the
            variant belongs to another request.
        ConflictAppError: 409 when the favorite already exists.
    """
    return service.add(payload)


@router.delete("/favorites/{favorite_id}", response_model=RemoveFavoriteResponse)
def remove_favorite(
    favorite_id: Annotated[int, Path(ge=1, le=MAX_ROW_ID)],
    service: FavoritesServiceDep,
    user_id: Annotated[str, Query(min_length=1, max_length=255)],
) -> RemoveFavoriteResponse:
    """Remove a favorite owned by ``user_id``; ``removed`` is false otherwise."""
    return RemoveFavoriteResponse(removed=service.remove(user_id, favorite_id))


@router.get("/users/{user_id}/favorites", response_model=list[LocalizationResponse])
def get_user_favorites(
    user_id: str,
    service: FavoritesServiceDep,
) -> list[LocalizationResponse]:
    """Requests the user favorited, each with its full set of variants."""
    return service.list_for_user(user_id)
