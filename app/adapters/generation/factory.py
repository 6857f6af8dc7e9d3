"""Factory pattern for creating variant generator instances."""

from app.adapters.generation.base import AbstractVariantGenerator
from app.adapters.generation.static import StaticVariantGenerator
from app.core.config import settings
from app.core.errors import ValidationAppError


def create_variant_generator(name: str | None = None) -> AbstractVariantGenerator:
    """Instantiate the variant generator selected by configuration.

    Args:
        name: Generator name; defaults to ``settings.app.variant_generator``.

    Returns:
        AbstractVariantGenerator: Configured generator instance.

    Raises:
        ValidationAppError: If the generator name is unknown.
    """
    generator = (name or settings.app.variant_generator).lower()

    if generator == "static":
        return StaticVariantGenerator()

    raise ValidationAppError(
        code="unknown_variant_generator",
        message=(
            f"Unknown variant generator: '{generator}'. Supported generators: static"
        ),
    )
