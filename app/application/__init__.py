"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (search repositories, URL signer, cache).
"""

from app.application.interfaces import (
    IActivitySearchRepository,
    ICacheService,
    IPostSearchRepository,
    ITagSearchRepository,
    IUrlSigner,
    IUserSearchRepository,
)
from app.application.services import normalize_search_query
from app.application.use_cases import UnifiedSearchService

__all__ = [
    "IActivitySearchRepository",
    "ICacheService",
    "IPostSearchRepository",
    "ITagSearchRepository",
    "IUrlSigner",
    "IUserSearchRepository",
    "UnifiedSearchService",
    "normalize_search_query",
]
