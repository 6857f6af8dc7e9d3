"""Tests for the static variant generator and its factory."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from app.adapters.generation.factory import create_variant_generator
from app.adapters.generation.static import StaticVariantGenerator
from app.core.errors import ValidationAppError
from app.schemas.enums import GENDER_PREFERENCES, TARGET_LANGUAGES, TONES

generator = StaticVariantGenerator()


@given(
    name=st.text(min_size=1, max_size=100),
    language=st.sampled_from(TARGET_LANGUAGES),
    gender=st.sampled_from(GENDER_PREFERENCES),
    tone=st.sampled_from(TONES),
)
def test_three_variants_with_decreasing_confidence(name, language, gender, tone):
    """Any valid input yields short/medium/long with non-increasing scores in [0, 1]."""
    drafts = generator.generate(name, language, gender, tone)

    assert [d.variant_type for d in drafts] == ["short", "medium", "long"]
    scores = [d.confidence_score for d in drafts]
    assert all(0 <= score <= 1 for score in scores)
    assert scores == sorted(scores, reverse=True)
    assert name in drafts[0].cultural_notes


def test_notes_mention_tone_and_gender():
    drafts = generator.generate("Emma", "japanese", "neutral", "formal")

    assert drafts[1].cultural_notes == (
        "Traditional Japanese name with formal tone, suitable for neutral preference"
    )
    assert drafts[2].cultural_notes == "Formal Japanese name with traditional suffix in formal style"


def test_unsupported_language_is_validation_error():
    with pytest.raises(ValidationAppError) as exc_info:
        generator.generate("Emma", "korean", "any", "casual")

    assert exc_info.value.code == "unsupported_target_language"


def test_supported_languages():
    assert set(generator.supported_languages) == set(TARGET_LANGUAGES)


def test_factory_returns_static_generator():
    assert isinstance(create_variant_generator("static"), StaticVariantGenerator)
    assert isinstance(create_variant_generator("STATIC"), StaticVariantGenerator)


def test_factory_rejects_unknown_generator():
    with pytest.raises(ValidationAppError) as exc_info:
        create_variant_generator("llm")

    assert exc_info.value.code == "unknown_variant_generator"
