"""Domain error types raised by services and adapters.

Each subclass corresponds to one failure class the HTTP layer knows how to
render (see ``app.core.exception_handlers``). Reads that find nothing do not
raise; they return ``None``, ``[]`` or ``False``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured context attached to an error.

    Only the keys relevant to a given failure are set.
    """

    hint: str
    limit: int
    retry_after: int
    localization_id: int
    variant_id: int
    favorite_id: int
    operation: str
    context: dict[str, Any]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code (e.g. ``variant_not_found``).
        message: Human-readable error message.
        details: Optional structured details returned to the client.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Input or configuration was rejected by a domain rule."""


class NotFoundAppError(AppError):
    """A write references a localization request or variant that does not exist."""


class ConflictAppError(AppError):
    """The user already saved this exact variant."""


class StoreAppError(AppError):
    """The relational store failed; the surrounding transaction was rolled back."""


@dataclass
class RateLimitAppError(AppError):
    """The caller used up its request budget for the current window.

    Attributes:
        headers: ``Retry-After``/``X-RateLimit-*`` headers sent with the 429.
    """

    headers: dict[str, str] | None = None
