"""Application services: search query normalization."""

from app.application.services.query_normalizer import normalize_search_query

__all__ = ["normalize_search_query"]
