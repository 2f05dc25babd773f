"""Pydantic schema for API error responses."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["INVALID_APPLICATION"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["loan_request.term_months must be positive"],
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )
