"""Common response schemas used across the API."""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Error body for failures that are not tied to a field.

    Attributes:
        detail: Human-readable error description
    """

    detail: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error envelope: ``{"errors": {"detail": "Not Found"}}``.

    Attributes:
        errors: The error detail
    """

    errors: ErrorDetail


class FieldErrorsResponse(BaseModel):
    """Validation error envelope keyed by field.

    Attributes:
        errors: Messages per field, e.g. ``{"password": ["can't be blank"]}``
    """

    errors: dict[str, list[str]] = Field(..., description="Error messages per field")


class MessageResponse(BaseModel):
    """Simple message response for operations that return only a message.

    Attributes:
        message: The response message
    """

    message: str
