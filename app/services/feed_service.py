"""Public feed of recent localizations."""

from __future__ import annotations

from app.schemas.localization import LocalizationResponse
from app.services.localization_service import LocalizationService


class FeedService:
    """Anonymized, fixed-size view over the most recent requests."""

    def __init__(self, localizations: LocalizationService, page_size: int = 10) -> None:
        self.localizations = localizations
        self.page_size = page_size

    def recent(self) -> list[LocalizationResponse]:
        return self.localizations.list_recent(self.page_size)
