"""
Error response schemas for API endpoints.

Every handled failure (400, 401, 404) uses the same envelope:
`{"error": {"message": "..."}}`. Used both to build responses and to document
them in OpenAPI.
"""
from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Human-readable error description."""

    message: str = Field(description="What went wrong")


class ErrorResponse(BaseModel):
    """Uniform error envelope."""

    error: ErrorDetail


class DebugErrorResponse(BaseModel):
    """500 response outside production; includes the exception text and class."""

    message: str
    error: str


def error_content(message: str) -> dict:
    """Build the JSON body for an error envelope."""
    return ErrorResponse(error=ErrorDetail(message=message)).model_dump()
