"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.presentation.
"""

from app.application.interfaces.repositories import (
    IActivitySearchRepository,
    IPostSearchRepository,
    ITagSearchRepository,
    IUserSearchRepository,
)
from app.application.interfaces.services import ICacheService, IUrlSigner

__all__ = [
    "IActivitySearchRepository",
    "ICacheService",
    "IPostSearchRepository",
    "ITagSearchRepository",
    "IUrlSigner",
    "IUserSearchRepository",
]
