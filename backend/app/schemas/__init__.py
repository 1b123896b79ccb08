"""Shared schema utilities."""

from pydantic import BaseModel


class ErrorBody(BaseModel):
    code: str
    message: str
    details: list | None = None
    allowed_methods: list[str] | None = None


class ErrorResponse(BaseModel):
    """Envelope returned by the global error handlers."""
    success: bool = False
    error: ErrorBody
