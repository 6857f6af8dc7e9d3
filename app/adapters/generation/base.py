from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class VariantDraft:
	"""A generated variant that has not been persisted yet."""

	variant_type: str
	native_script: str
	romanization: str
	meaning: str
	pronunciation: str
	cultural_notes: str
	confidence_score: float


class AbstractVariantGenerator(ABC):
	"""Interface for strategies that turn a name into localized variants."""

	@abstractmethod
	def generate(
		self,
		original_name: str,
		target_language: str,
		gender_preference: str,
		tone: str,
	) -> list[VariantDraft]:
		"""Generate candidate variants for a name.

		Args:
			original_name: Name as supplied by the user.
			target_language: Script/language to render into.
			gender_preference: Gender framing requested.
			tone: Stylistic register requested.

		Returns:
			list[VariantDraft]: Drafts in presentation order (short, medium, long),
				with confidence scores in [0, 1] that never increase along the list.
		"""
		...
