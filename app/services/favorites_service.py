"""Favorites service: save, remove and list a user's favorite variants."""

from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.core.errors import ConflictAppError, NotFoundAppError
from app.core.logging import hash_identifier
from app.db.session import store_errors
from app.models.favorite import UserFavorite
from app.models.localization import NameLocalizationRequest, NameVariant
from app.schemas.favorite import AddFavoriteRequest, UserFavoriteOut
from app.schemas.localization import LocalizationResponse

logger = logging.getLogger(__name__)


class FavoritesService:
    """Manages favorites while enforcing ownership and uniqueness."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _favorite_exists(self, user_id: str, request_id: int, variant_id: int) -> bool:
        found = self.session.scalar(
            select(UserFavorite.id).where(
                UserFavorite.user_id == user_id,
                UserFavorite.request_id == request_id,
                UserFavorite.variant_id == variant_id,
            )
        )
        return found is not None

    def _duplicate_error(self, payload: AddFavoriteRequest) -> ConflictAppError:
        return ConflictAppError(
            code="favorite_already_exists",
            message="This name variant is already in user favorites",
            details={
                "localization_id": payload.request_id,
                "variant_id": payload.variant_id,
            },
        )

    def add(self, payload: AddFavoriteRequest) -> UserFavoriteOut:
        """Save a variant as a favorite of ``payload.user_id``.

        Raises:
            NotFoundAppError: If the request does not exist, or the variant does
                not exist or belongs to a different request.
            ConflictAppError: If the same favorite already exists.
            StoreAppError: If the store fails.
        """
        with store_errors(self.session, "favorite.add"):
            request = self.session.get(NameLocalizationRequest, payload.request_id)
            if request is None:
                raise NotFoundAppError(
                    code="localization_not_found",
                    message="Name localization request not found",
                    details={"localization_id": payload.request_id},
                )

            variant = self.session.get(NameVariant, payload.variant_id)
            if variant is None or variant.request_id != payload.request_id:
                raise NotFoundAppError(
                    code="variant_not_found",
                    message="Name variant not found or does not belong to the specified request",
                    details={
                        "localization_id": payload.request_id,
                        "variant_id": payload.variant_id,
                    },
                )

            # Best-effort pre-check; the unique constraint is the real guard.
            if self._favorite_exists(payload.user_id, payload.request_id, payload.variant_id):
                raise self._duplicate_error(payload)

            favorite = UserFavorite(
                user_id=payload.user_id,
                request_id=payload.request_id,
                variant_id=payload.variant_id,
            )
            self.session.add(favorite)
            try:
                self.session.commit()
            except IntegrityError:
                self.session.rollback()
                if self._favorite_exists(payload.user_id, payload.request_id, payload.variant_id):
                    logger.info(
                        "favorite.duplicate_race",
                        extra={"user_hash": hash_identifier(payload.user_id)},
                    )
                    raise self._duplicate_error(payload)
                raise

        logger.info(
            "favorite.added",
            extra={
                "favorite_id": favorite.id,
                "localization_id": favorite.request_id,
                "variant_id": favorite.variant_id,
                "user_hash": hash_identifier(favorite.user_id),
            },
        )
        return UserFavoriteOut.model_validate(favorite)

    def remove(self, user_id: str, favorite_id: int) -> bool:
        """Delete a favorite owned by ``user_id``.

        Returns:
            True if a row was deleted. A missing favorite and one owned by
            another user both return False.
        """
        with store_errors(self.session, "favorite.remove"):
            result = self.session.execute(
                delete(UserFavorite).where(
                    UserFavorite.id == favorite_id,
                    UserFavorite.user_id == user_id,
                )
            )
            self.session.commit()

        removed = (result.rowcount or 0) > 0
        logger.info(
            "favorite.removed" if removed else "favorite.remove_noop",
            extra={"favorite_id": favorite_id, "user_hash": hash_identifier(user_id)},
        )
        return removed

    def list_for_user(self, user_id: str) -> list[LocalizationResponse]:
        """List the requests a user favorited, each with all of its variants.

        Each request appears once, positioned by the user's most recent
        favorite on it (newest first). Favoriting several variants of the
        same request does not repeat it; the single entry already carries
        every variant.
        """
        with store_errors(self.session, "favorite.list"):
            favorite_request_ids = self.session.scalars(
                select(UserFavorite.request_id)
                .where(UserFavorite.user_id == user_id)
                .order_by(UserFavorite.created_at.desc(), UserFavorite.id.desc())
            ).all()

            if not favorite_request_ids:
                return []

            ordered_ids = list(dict.fromkeys(favorite_request_ids))
            requests = self.session.scalars(
                select(NameLocalizationRequest)
                .where(NameLocalizationRequest.id.in_(ordered_ids))
                .options(selectinload(NameLocalizationRequest.variants))
            ).all()

        by_id = {request.id: request for request in requests}
        return [
            LocalizationResponse.model_validate(by_id[request_id])
            for request_id in ordered_ids
            if request_id in by_id
        ]
