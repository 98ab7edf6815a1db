"""Response models for the voice-gateway API."""

from pydantic import BaseModel


class ActivityAccepted(BaseModel):
    """Empty acknowledgement returned to the channel."""


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
