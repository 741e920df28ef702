"""Cache: Redis service and cache key utilities.

Used by the search endpoint to cache serialized responses when
REDIS_ENABLED is set. Key format is in keys.py (DRY).
"""

from app.infrastructure.cache.keys import search_response_key
from app.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheService",
    "search_response_key",
]
