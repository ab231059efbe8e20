"""Pydantic schemas for bookmark endpoints."""
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from models.bookmark import MAX_RATING, MIN_RATING


# Fixed check order for create validation; the first failing field is reported
BOOKMARK_FIELDS = ("title", "url", "description", "rating")


def reject_boolean_rating(value: object) -> object:
    """JSON true/false would otherwise coerce to 1/0 in lax int mode."""
    if isinstance(value, bool):
        raise ValueError("rating must be an integer, not a boolean")
    return value


Rating = Annotated[
    int,
    BeforeValidator(reject_boolean_rating),
    Field(ge=MIN_RATING, le=MAX_RATING),
]


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark. Unknown keys (including `id`) are dropped."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    # No format validation: any non-empty text is accepted
    url: str = Field(min_length=1)
    description: str = Field(min_length=1)
    rating: Rating


class BookmarkUpdate(BaseModel):
    """
    Schema for partially updating a bookmark.

    Only fields present in the request body end up in `model_fields_set`;
    services apply `model_dump(exclude_unset=True)` so omitted fields keep
    their stored values.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, min_length=1)
    url: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    rating: Rating | None = None


class BookmarkResponse(BaseModel):
    """
    Schema for bookmark responses.

    Always built through `services.sanitizer.sanitize_bookmark`, never directly
    from the ORM row, so text fields leave the API escaped.
    """

    id: int
    title: str
    url: str
    description: str
    rating: int
