"""Variant generation adapters - produce candidate renderings of a name."""

from app.adapters.generation.base import AbstractVariantGenerator, VariantDraft
from app.adapters.generation.factory import create_variant_generator
from app.adapters.generation.static import StaticVariantGenerator

__all__ = [
    "AbstractVariantGenerator",
    "StaticVariantGenerator",
    "VariantDraft",
    "create_variant_generator",
]
