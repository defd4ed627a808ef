"""
API Request and Response Schemas

This module defines all Pydantic models for API requests and responses.
Separated from endpoints to keep concerns separated and enable reuse.

The url field is a plain string rather than HttpUrl: a body that decodes but
carries a bad URL must be answered with 400, not with the 422 reserved for
bodies that cannot be decoded at all.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, StrictStr


class ShortenRequest(BaseModel):
    """Request model for URL shortening endpoint."""
    url: StrictStr = Field(..., description="The long URL to shorten")


class Envelope(BaseModel):
    """
    Envelope wrapping every JSON response.

    Exactly one of the fields is set: data on success, error on failure.
    Unset fields are left out of the encoded body.
    """
    error: Optional[str] = Field(default=None, description="Error message")
    data: Optional[Any] = Field(default=None, description="Response payload")


class HealthResponse(BaseModel):
    """Response model for health endpoint."""
    status: str
    mappings: int
