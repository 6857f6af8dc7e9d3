"""Value sets and bounds shared by request schemas and table constraints."""

from typing import Literal, get_args

TargetLanguage = Literal["chinese", "japanese"]
GenderPreference = Literal["male", "female", "neutral", "any"]
OutputFormat = Literal["native", "romanization", "both"]
Tone = Literal["formal", "casual", "traditional", "modern"]
VariantType = Literal["short", "medium", "long"]

TARGET_LANGUAGES: tuple[str, ...] = get_args(TargetLanguage)
GENDER_PREFERENCES: tuple[str, ...] = get_args(GenderPreference)
OUTPUT_FORMATS: tuple[str, ...] = get_args(OutputFormat)
TONES: tuple[str, ...] = get_args(Tone)
VARIANT_TYPES: tuple[str, ...] = get_args(VariantType)

# Largest primary key a signed 64-bit INTEGER column can hold
MAX_ROW_ID = 2**63 - 1
