"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Action payloads are free-form JSON objects; their shape is checked by the
use case's own request schema, not by these models.
"""

from pydantic import BaseModel, Field


class ActionSummary(BaseModel):
    """One entry of the action catalogue."""

    name: str = Field(..., description="Use case name, used in the action URL")
    description: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
