from app.models.favorite import UserFavorite
from app.models.localization import NameLocalizationRequest, NameVariant
from app.models.rate_limit import RateLimitRecord

__all__ = [
    "NameLocalizationRequest",
    "NameVariant",
    "RateLimitRecord",
    "UserFavorite",
]
