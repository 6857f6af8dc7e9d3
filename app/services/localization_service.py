"""Name localization service: create, fetch and list localization requests.

Creation runs the request insert, variant generation and variant inserts in
one transaction, so a request is never visible without its variants.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.adapters.generation.base import AbstractVariantGenerator, VariantDraft
from app.core.errors import AppError
from app.core.logging import hash_identifier
from app.db.session import store_errors
from app.models.localization import NameLocalizationRequest, NameVariant
from app.schemas.localization import CreateLocalizationRequest, LocalizationResponse

logger = logging.getLogger(__name__)

_SCORE_QUANTUM = Decimal("0.01")


def _to_score(value: float) -> Decimal:
    """Round a confidence score to the stored two-decimal precision."""
    return Decimal(str(value)).quantize(_SCORE_QUANTUM, rounding=ROUND_HALF_UP)


def _build_variant(draft: VariantDraft) -> NameVariant:
    return NameVariant(
        variant_type=draft.variant_type,
        native_script=draft.native_script,
        romanization=draft.romanization,
        meaning=draft.meaning,
        pronunciation=draft.pronunciation,
        cultural_notes=draft.cultural_notes,
        confidence_score=_to_score(draft.confidence_score),
    )


class LocalizationService:
    """Orchestrates persistence of localization requests and their variants.

    Attributes:
        session: Session the service reads and writes through.
        generator: Strategy producing variant drafts for a request.
    """

    def __init__(self, session: Session, generator: AbstractVariantGenerator) -> None:
        self.session = session
        self.generator = generator

    def create(self, payload: CreateLocalizationRequest) -> LocalizationResponse:
        """Store a request, generate its variants and return both.

        Args:
            payload: Validated request input.

        Returns:
            LocalizationResponse with variants in generation order.

        Raises:
            StoreAppError: If any write fails; nothing is persisted.
            AppError: If the generator rejects the input; nothing is persisted.
        """
        with store_errors(self.session, "localization.create"):
            request = NameLocalizationRequest(
                original_name=payload.original_name,
                target_language=payload.target_language,
                gender_preference=payload.gender_preference,
                output_format=payload.output_format,
                tone=payload.tone,
                user_id=payload.user_id,
            )
            self.session.add(request)
            self.session.flush()

            try:
                drafts = self.generator.generate(
                    payload.original_name,
                    payload.target_language,
                    payload.gender_preference,
                    payload.tone,
                )
            except AppError:
                self.session.rollback()
                raise

            request.variants.extend(_build_variant(draft) for draft in drafts)
            self.session.commit()

        logger.info(
            "localization.created",
            extra={
                "localization_id": request.id,
                "target_language": request.target_language,
                "variant_count": len(request.variants),
                "guest": request.user_id is None,
                "user_hash": hash_identifier(request.user_id),
            },
        )
        return LocalizationResponse.model_validate(request)

    def get_by_id(self, localization_id: int) -> LocalizationResponse | None:
        """Fetch one request with all its variants; None when it does not exist."""
        with store_errors(self.session, "localization.get"):
            request = self.session.scalars(
                select(NameLocalizationRequest)
                .where(NameLocalizationRequest.id == localization_id)
                .options(selectinload(NameLocalizationRequest.variants))
            ).one_or_none()

        if request is None:
            logger.debug("localization.not_found", extra={"localization_id": localization_id})
            return None
        return LocalizationResponse.model_validate(request)

    def list_recent(self, limit: int) -> list[LocalizationResponse]:
        """Return the newest requests with their variants, user ids removed.

        Args:
            limit: Maximum number of requests to return.

        Returns:
            Requests ordered by creation time, newest first. ``user_id`` is
            always None regardless of the stored value.
        """
        if limit < 1:
            return []

        with store_errors(self.session, "localization.list_recent"):
            requests = self.session.scalars(
                select(NameLocalizationRequest)
                .options(selectinload(NameLocalizationRequest.variants))
                .order_by(
                    NameLocalizationRequest.created_at.desc(),
                    NameLocalizationRequest.id.desc(),
                )
                .limit(limit)
            ).all()

        return [
            LocalizationResponse.model_validate(request).model_copy(update={"user_id": None})
            for request in requests
        ]
