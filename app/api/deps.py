from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.adapters.generation.base import AbstractVariantGenerator
from app.adapters.generation.factory import create_variant_generator
from app.core.config import settings
from app.db.session import get_db
from app.services.favorites_service import FavoritesService
from app.services.feed_service import FeedService
from app.services.localization_service import LocalizationService

DbSession = Annotated[Session, Depends(get_db)]


@lru_cache
def get_variant_generator() -> AbstractVariantGenerator:
    """Return the process-wide variant generator selected by configuration."""
    return create_variant_generator()


def get_localization_service(
    db: DbSession,
    generator: Annotated[AbstractVariantGenerator, Depends(get_variant_generator)],
) -> LocalizationService:
    return LocalizationService(db, generator)


def get_favorites_service(db: DbSession) -> FavoritesService:
    return FavoritesService(db)


def get_feed_service(
    localizations: Annotated[LocalizationService, Depends(get_localization_service)],
) -> FeedService:
    return FeedService(localizations, page_size=settings.app.feed_page_size)
