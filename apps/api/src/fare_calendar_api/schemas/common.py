"""Shared response schemas."""

from __future__ import annotations

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error payload."""

    success: bool = False
    message: str | None = None
    error: str | None = None
    code: str | None = None
