"""Service interfaces (ports) for the application layer.

Protocols define contracts for infrastructure services (DIP).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol


# URL signer interface
class IUrlSigner(Protocol):
    """Protocol for turning private asset references into signed URLs."""

    async def sign_many(self, refs: Sequence[str]) -> dict[str, str]:
        """Sign refs in one batch. Returns original ref -> URL for every ref given.

        References that are not private storage objects map to themselves.
        """


# Cache service interface
class ICacheService(Protocol):
    """Protocol for cache backends (e.g. Redis)."""

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds."""

    async def delete(self, key: str) -> bool:
        """Remove key from cache."""

    async def expire(self, key: str, ttl: int) -> bool:
        """Reset the TTL of an existing key."""
