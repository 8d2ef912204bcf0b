"""Error response models shared by all endpoints."""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Error detail with machine-readable code and human-readable message."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ApiErrorResponse(BaseModel):
    """Error body returned by every endpoint on failure."""

    error: ErrorDetail


def error_detail(code: str, message: str) -> dict:
    """Build the ``detail`` payload for an ``HTTPException``."""
    return {"error": {"code": code, "message": message}}
