"""
Request-body validation for bookmark writes.

Handlers never look at raw request dicts: they call `validate_bookmark_create`
or `validate_bookmark_update`, which return a typed schema instance or raise
`BookmarkValidationError` carrying one `ValidationRule`. Pydantic reports
errors in field declaration order, so the first error is the first failing
field in the fixed `title`, `url`, `description`, `rating` order.
"""
from enum import Enum
from typing import Any

from pydantic import ValidationError
from pydantic_core import ErrorDetails

from models.bookmark import MAX_RATING, MIN_RATING
from schemas.bookmark import BOOKMARK_FIELDS, BookmarkCreate, BookmarkUpdate


RATING_RANGE_MESSAGE = f"'rating' must be a number between {MIN_RATING} and {MAX_RATING}"
NO_UPDATABLE_FIELDS_MESSAGE = (
    "Request body must contain either "
    + ", ".join(f"'{name}'" for name in BOOKMARK_FIELDS[:-1])
    + f" or '{BOOKMARK_FIELDS[-1]}'"
)


class ValidationRule(str, Enum):
    """The rule a rejected request body broke."""

    MISSING_FIELD = "missing_field"
    EMPTY_FIELD = "empty_field"
    INVALID_TYPE = "invalid_type"
    RATING_RANGE = "rating_range"
    NO_UPDATABLE_FIELDS = "no_updatable_fields"


class BookmarkValidationError(Exception):
    """Raised when a bookmark request body fails validation (mapped to 400)."""

    def __init__(self, rule: ValidationRule, field: str | None = None) -> None:
        self.rule = rule
        self.field = field
        self.message = _message_for(rule, field)
        super().__init__(self.message)


def _message_for(rule: ValidationRule, field: str | None) -> str:
    if rule is ValidationRule.MISSING_FIELD:
        return f"Missing '{field}' in request body"
    if rule is ValidationRule.EMPTY_FIELD:
        return f"'{field}' must not be empty"
    if rule is ValidationRule.INVALID_TYPE:
        return f"'{field}' must be a string"
    if rule is ValidationRule.RATING_RANGE:
        return RATING_RANGE_MESSAGE
    return NO_UPDATABLE_FIELDS_MESSAGE


def _error_from_pydantic(error: ErrorDetails, *, partial: bool) -> BookmarkValidationError:
    """
    Translate the first pydantic error into a single validation rule.

    A null or empty value counts as missing on create and as empty on update.
    Any other rating failure (out of range, not an integer) is a range error.
    """
    field = str(error["loc"][0])
    if error["type"] == "missing":
        return BookmarkValidationError(ValidationRule.MISSING_FIELD, field)
    if error["input"] is None or error["type"] == "string_too_short":
        rule = ValidationRule.EMPTY_FIELD if partial else ValidationRule.MISSING_FIELD
        return BookmarkValidationError(rule, field)
    if field == "rating":
        return BookmarkValidationError(ValidationRule.RATING_RANGE, field)
    return BookmarkValidationError(ValidationRule.INVALID_TYPE, field)


def validate_bookmark_create(payload: dict[str, Any] | None) -> BookmarkCreate:
    """
    Validate a create request body.

    Raises:
        BookmarkValidationError: on the first failing field, in fixed order.
    """
    try:
        return BookmarkCreate.model_validate(payload or {})
    except ValidationError as e:
        raise _error_from_pydantic(e.errors()[0], partial=False) from e


def validate_bookmark_update(payload: dict[str, Any] | None) -> BookmarkUpdate:
    """
    Validate a partial update request body.

    At least one updatable field must be present; unknown keys are ignored and
    do not count. Explicit nulls are rejected so stored rows stay complete.

    Raises:
        BookmarkValidationError: when no updatable field is supplied or a
            supplied field is invalid.
    """
    try:
        data = BookmarkUpdate.model_validate(payload or {})
    except ValidationError as e:
        raise _error_from_pydantic(e.errors()[0], partial=True) from e

    if not data.model_fields_set:
        raise BookmarkValidationError(ValidationRule.NO_UPDATABLE_FIELDS)

    for field in BOOKMARK_FIELDS:
        if field in data.model_fields_set and getattr(data, field) is None:
            raise BookmarkValidationError(ValidationRule.EMPTY_FIELD, field)

    return data
