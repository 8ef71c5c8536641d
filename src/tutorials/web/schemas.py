"""Pydantic schemas for the Web API.

Response envelopes for tutorials, the home route and the health check.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


# =============================================================================
# TUTORIAL SCHEMAS
# =============================================================================


class TutorialResponse(BaseModel):
    """A tutorial as returned to clients."""

    id: str
    title: str
    description: str | None = None
    published: bool = False

    model_config = {"from_attributes": True}


class TutorialListResponse(BaseModel):
    """Response for list endpoints."""

    success: bool = True
    tutorials: list[TutorialResponse]


class TutorialDetailResponse(BaseModel):
    """Response for a single tutorial."""

    success: bool = True
    tutorial: TutorialResponse


class TutorialCreatedResponse(BaseModel):
    """Response after creating a tutorial."""

    success: bool = True
    msg: str
    URL: str


class MessageResponse(BaseModel):
    """Confirmation or error message."""

    success: bool
    msg: str


class ValidationErrorResponse(BaseModel):
    """Field-level validation failures."""

    success: bool = False
    msgs: list[str]


# =============================================================================
# GENERAL SCHEMAS
# =============================================================================


class HomeResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    database: str = "unknown"  # ok | unavailable | unknown
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
