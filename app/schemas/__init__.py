"""Pydantic request/response schemas for the API."""

from app.schemas.health import HealthResponse, ReadinessResponse
from app.schemas.search import (
    ErrorResponse,
    PostSuggestionsResponse,
    UnifiedSearchResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "PostSuggestionsResponse",
    "ReadinessResponse",
    "UnifiedSearchResponse",
]
