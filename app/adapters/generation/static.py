"""Fixed-template variant generator.

Returns the same three renderings per target language, with cultural notes
interpolating the caller's name and preferences. It stands in for a real
naming model behind AbstractVariantGenerator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.adapters.generation.base import AbstractVariantGenerator, VariantDraft
from app.core.errors import ValidationAppError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Template:
    variant_type: str
    native_script: str
    romanization: str
    meaning: str
    pronunciation: str
    notes: str
    confidence_score: float


_TEMPLATES: dict[str, tuple[_Template, ...]] = {
    "chinese": (
        _Template(
            variant_type="short",
            native_script="李",
            romanization="Li",
            meaning="Plum",
            pronunciation="Lee",
            notes='A common Chinese surname derived from "{name}"',
            confidence_score=0.90,
        ),
        _Template(
            variant_type="medium",
            native_script="李明",
            romanization="Li Ming",
            meaning="Bright Plum",
            pronunciation="Lee Ming",
            notes="Traditional Chinese name with {tone} tone, suitable for {gender} preference",
            confidence_score=0.85,
        ),
        _Template(
            variant_type="long",
            native_script="李明华",
            romanization="Li Ming Hua",
            meaning="Bright and Magnificent Plum",
            pronunciation="Lee Ming Hwa",
            notes="Formal Chinese name with poetic meaning in {tone} style",
            confidence_score=0.80,
        ),
    ),
    "japanese": (
        _Template(
            variant_type="short",
            native_script="田中",
            romanization="Tanaka",
            meaning="Middle of rice field",
            pronunciation="Ta-na-ka",
            notes='Common Japanese surname derived from "{name}"',
            confidence_score=0.88,
        ),
        _Template(
            variant_type="medium",
            native_script="田中太郎",
            romanization="Tanaka Taro",
            meaning="First son from the rice field",
            pronunciation="Ta-na-ka Ta-ro",
            notes="Traditional Japanese name with {tone} tone, suitable for {gender} preference",
            confidence_score=0.82,
        ),
        _Template(
            variant_type="long",
            native_script="田中太郎丸",
            romanization="Tanaka Taromaru",
            meaning="Beloved first son from the rice field",
            pronunciation="Ta-na-ka Ta-ro-ma-ru",
            notes="Formal Japanese name with traditional suffix in {tone} style",
            confidence_score=0.75,
        ),
    ),
}


class StaticVariantGenerator(AbstractVariantGenerator):
    """Variant generator backed by a fixed lookup table."""

    def __init__(self, templates: dict[str, tuple[_Template, ...]] | None = None) -> None:
        self._templates = templates or _TEMPLATES

    @property
    def supported_languages(self) -> tuple[str, ...]:
        return tuple(self._templates)

    def generate(
        self,
        original_name: str,
        target_language: str,
        gender_preference: str,
        tone: str,
    ) -> list[VariantDraft]:
        templates = self._templates.get(target_language)
        if templates is None:
            raise ValidationAppError(
                code="unsupported_target_language",
                message=f"No variants available for target language '{target_language}'",
                details={"hint": f"Supported: {', '.join(self.supported_languages)}"},
            )

        drafts = [
            VariantDraft(
                variant_type=template.variant_type,
                native_script=template.native_script,
                romanization=template.romanization,
                meaning=template.meaning,
                pronunciation=template.pronunciation,
                cultural_notes=template.notes.format(
                    name=original_name, tone=tone, gender=gender_preference
                ),
                confidence_score=template.confidence_score,
            )
            for template in templates
        ]

        logger.debug(
            "generation.static",
            extra={"target_language": target_language, "variant_count": len(drafts)},
        )
        return drafts
