"""Tests for LocalizationService create/get/list semantics."""

from datetime import timedelta
from unittest.mock import Mock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.adapters.generation.base import AbstractVariantGenerator, VariantDraft
from app.adapters.generation.static import StaticVariantGenerator
from app.core.errors import StoreAppError, ValidationAppError
from app.models.localization import NameLocalizationRequest, NameVariant
from app.services.localization_service import LocalizationService


def _count(session: Session, model) -> int:
    return session.scalar(select(func.count()).select_from(model))


class TestCreate:
    def test_creates_request_with_three_chinese_variants(self, localization_service, make_payload):
        """Emma in Chinese yields the short/medium/long plum names."""
        response = localization_service.create(make_payload())

        assert response.id > 0
        assert response.original_name == "Emma"
        assert response.user_id is None
        assert [v.variant_type for v in response.variants] == ["short", "medium", "long"]
        assert [v.native_script for v in response.variants] == ["李", "李明", "李明华"]
        assert [v.confidence_score for v in response.variants] == [0.90, 0.85, 0.80]
        assert all(v.request_id == response.id for v in response.variants)
        assert response.variants[0].cultural_notes == 'A common Chinese surname derived from "Emma"'
        assert "modern tone" in response.variants[1].cultural_notes
        assert "female preference" in response.variants[1].cultural_notes

    def test_japanese_variants(self, localization_service, make_payload):
        response = localization_service.create(
            make_payload(target_language="japanese", user_id="user-1")
        )

        assert response.user_id == "user-1"
        assert [v.romanization for v in response.variants] == [
            "Tanaka",
            "Tanaka Taro",
            "Tanaka Taromaru",
        ]
        assert [v.confidence_score for v in response.variants] == [0.88, 0.82, 0.75]

    def test_persists_request_and_variants(self, localization_service, make_payload, db_session):
        response = localization_service.create(make_payload(user_id="user-1"))

        stored = db_session.get(NameLocalizationRequest, response.id)
        assert stored is not None
        assert stored.user_id == "user-1"
        assert _count(db_session, NameVariant) == 3

    def test_generator_failure_persists_nothing(self, db_session, make_payload):
        generator = Mock(spec=AbstractVariantGenerator)
        generator.generate.side_effect = ValidationAppError(
            code="unsupported_target_language", message="nope"
        )
        service = LocalizationService(db_session, generator)

        with pytest.raises(ValidationAppError):
            service.create(make_payload())

        assert _count(db_session, NameLocalizationRequest) == 0
        assert _count(db_session, NameVariant) == 0

    def test_empty_variant_text_persists_nothing(self, db_session, make_payload):
        generator = Mock(spec=AbstractVariantGenerator)
        generator.generate.return_value = [
            VariantDraft(
                variant_type="short",
                native_script="李",
                romanization="",
                meaning="Plum",
                pronunciation="Lee",
                cultural_notes="Common surname",
                confidence_score=0.9,
            )
        ]
        service = LocalizationService(db_session, generator)

        with pytest.raises(StoreAppError):
            service.create(make_payload())

        assert _count(db_session, NameLocalizationRequest) == 0
        assert _count(db_session, NameVariant) == 0

    def test_store_failure_raises_store_error(self, make_payload):
        session = Mock(spec=Session)
        session.flush.side_effect = OperationalError("INSERT", {}, Exception("disk full"))
        service = LocalizationService(session, StaticVariantGenerator())

        with pytest.raises(StoreAppError) as exc_info:
            service.create(make_payload())

        assert exc_info.value.details == {"operation": "localization.create"}
        session.rollback.assert_called_once()
        session.commit.assert_not_called()


class TestGetById:
    def test_returns_request_with_variants(self, localization_service, make_payload):
        created = localization_service.create(make_payload(user_id="user-1"))

        fetched = localization_service.get_by_id(created.id)

        assert fetched == created
        assert fetched.user_id == "user-1"

    def test_repeated_reads_are_identical(self, localization_service, make_payload):
        created = localization_service.create(make_payload())

        assert localization_service.get_by_id(created.id) == localization_service.get_by_id(
            created.id
        )

    def test_missing_id_returns_none(self, localization_service):
        assert localization_service.get_by_id(999) is None


class TestListRecent:
    def test_newest_first_with_user_id_removed(self, localization_service, make_payload):
        first = localization_service.create(make_payload(original_name="Emma", user_id="user-1"))
        second = localization_service.create(make_payload(original_name="Liam", user_id="user-2"))
        third = localization_service.create(make_payload(original_name="Ava"))

        recent = localization_service.list_recent(10)

        assert [r.id for r in recent] == [third.id, second.id, first.id]
        assert all(r.user_id is None for r in recent)
        assert all(len(r.variants) == 3 for r in recent)

    def test_orders_by_creation_time(self, localization_service, make_payload, db_session):
        older = localization_service.create(make_payload(original_name="Older"))
        newer = localization_service.create(make_payload(original_name="Newer"))

        # Backdate the newer id so creation time, not id, decides the order
        stored = db_session.get(NameLocalizationRequest, newer.id)
        stored.created_at = older.created_at - timedelta(minutes=5)
        db_session.commit()

        assert [r.original_name for r in localization_service.list_recent(10)] == [
            "Older",
            "Newer",
        ]

    def test_respects_limit(self, localization_service, make_payload):
        for index in range(12):
            localization_service.create(make_payload(original_name=f"Name {index}"))

        recent = localization_service.list_recent(10)

        assert len(recent) == 10
        assert recent[0].original_name == "Name 11"

    def test_stored_user_id_is_untouched(self, localization_service, make_payload):
        created = localization_service.create(make_payload(user_id="user-1"))

        localization_service.list_recent(10)

        assert localization_service.get_by_id(created.id).user_id == "user-1"

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit_returns_empty(self, localization_service, make_payload, limit):
        localization_service.create(make_payload())

        assert localization_service.list_recent(limit) == []

    def test_empty_store(self, localization_service):
        assert localization_service.list_recent(10) == []
