"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every error response.

    ``details`` is a list of ``{field, message}`` objects for validation
    failures and an object (or null) otherwise.
    """

    error_code: str = Field(..., examples=["NOT_ACCESSIBLE"])
    message: str
    details: Any | None = None


def error_body(error_code: str, message: str, details: Any | None = None) -> dict[str, Any]:
    return ErrorResponse(error_code=error_code, message=message, details=details).model_dump()


# Documented on every authenticated v1 route.
COMMON_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
}
