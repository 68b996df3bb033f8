"""Field-level validation of book candidates.

``validate_book`` never raises for malformed input. It returns every
violated rule as a human-readable message, in field order, without
duplicates.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .book import BookInput

logger = logging.getLogger(__name__)

NULL_OBJECT_MESSAGE = "Object cannot be null"


class ValidationResult(BaseModel):
    """Outcome of validating a candidate book."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    book: BookInput | None = Field(
        default=None,
        description="The accepted candidate, present only when valid",
    )


def _candidate_data(candidate: Any) -> Any:
    if isinstance(candidate, BaseModel):
        return candidate.model_dump()
    if isinstance(candidate, Mapping):
        return dict(candidate)
    return candidate


def validate_book(candidate: Any) -> ValidationResult:
    """
    Validate a candidate book.

    Args:
        candidate: ``None``, a mapping (camelCase or snake_case keys) or a
            pydantic model carrying ``title``, ``author`` and ``isbn``

    Returns:
        ValidationResult with ``is_valid`` and the ordered violation messages
    """
    if candidate is None:
        return ValidationResult(is_valid=False, errors=[NULL_OBJECT_MESSAGE])

    try:
        book = BookInput.model_validate(_candidate_data(candidate))
    except ValidationError as e:
        messages = [error["msg"] for error in e.errors()]
        errors = list(dict.fromkeys(messages))
        logger.debug("Book validation failed: %s", ", ".join(errors))
        return ValidationResult(is_valid=False, errors=errors)

    return ValidationResult(is_valid=True, book=book)
