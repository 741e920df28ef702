"""Signs private asset references (avatars) for search responses.

Public URLs (http, https, data) pass through untouched. A signing failure
is logged and the original references are returned: search results must
not fail because storage is unavailable.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import timedelta

from app.infrastructure.external.storage.protocol import StorageProtocol

logger = logging.getLogger(__name__)

_PUBLIC_PREFIXES = ("http://", "https://", "data:")


def is_public_url(ref: str) -> bool:
    return ref.lower().startswith(_PUBLIC_PREFIXES)


class StorageUrlSigner:
    """IUrlSigner backed by a storage service; one backend call per batch."""

    def __init__(self, storage: StorageProtocol, ttl_seconds: int = 3600) -> None:
        self.storage = storage
        self.expiration = timedelta(seconds=ttl_seconds)

    async def sign_many(self, refs: Sequence[str]) -> dict[str, str]:
        """Return ref -> URL for every ref given (unsigned refs map to themselves)."""
        result = {ref: ref for ref in refs if ref}
        private = [ref for ref in result if not is_public_url(ref)]
        if not private:
            return result
        try:
            signed = await self.storage.generate_download_urls(private, self.expiration)
        except Exception as e:
            logger.warning(
                "Failed to sign %d asset reference(s); returning originals: %s",
                len(private),
                e,
            )
            return result
        result.update(signed)
        return result
