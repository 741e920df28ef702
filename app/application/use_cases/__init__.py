"""Application use cases: one entry point per workflow."""

from app.application.use_cases.search import UnifiedSearchService

__all__ = ["UnifiedSearchService"]
