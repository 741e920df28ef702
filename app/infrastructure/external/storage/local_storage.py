"""Local filesystem storage: HMAC-signed download URLs.

This service only signs. The files themselves are served under
/storage/<ref> by the surrounding application, which checks each request
with verify_download_signature (same SECRET_KEY). The signature covers the
normalized reference and the expiry timestamp, so no state is shared.
"""

from __future__ import annotations

import hashlib
import hmac
import time
from collections.abc import Sequence
from datetime import timedelta
from pathlib import PurePosixPath
from urllib.parse import quote, urlencode

from app.infrastructure.exceptions import StoragePermissionError


class LocalStorageService:
    """Signs local storage references as base_url/storage/<ref> links."""

    DOWNLOAD_PATH = "/storage"

    def __init__(
        self,
        secret_key: str,
        base_url: str | None = None,
    ) -> None:
        self.base_url = (base_url or "").rstrip("/")
        self._secret = secret_key.encode()

    def _normalize_ref(self, storage_ref: str) -> str:
        """Return the ref as a relative POSIX path; reject traversal outside the root."""
        path = PurePosixPath(storage_ref.lstrip("/"))
        if not path.parts or ".." in path.parts:
            raise StoragePermissionError(storage_ref, "download")
        return path.as_posix()

    def _signature(self, storage_ref: str, expires: int) -> str:
        message = f"{storage_ref}:{expires}".encode()
        return hmac.new(self._secret, message, hashlib.sha256).hexdigest()

    async def generate_download_urls(
        self,
        storage_refs: Sequence[str],
        expiration: timedelta = timedelta(hours=1),
    ) -> dict[str, str]:
        """Return signed URLs keyed by the refs as given."""
        expires = int(time.time() + expiration.total_seconds())
        urls: dict[str, str] = {}
        for ref in storage_refs:
            normalized = self._normalize_ref(ref)
            query = urlencode(
                {"expires": expires, "signature": self._signature(normalized, expires)}
            )
            urls[ref] = f"{self.base_url}{self.DOWNLOAD_PATH}/{quote(normalized)}?{query}"
        return urls

    def verify_download_signature(
        self, storage_ref: str, expires: int, signature: str
    ) -> bool:
        """Return True if signature matches the ref and has not expired.

        Called by whatever serves /storage; URLs built here carry expires and
        signature as query parameters.
        """
        if expires < time.time():
            return False
        try:
            normalized = self._normalize_ref(storage_ref)
        except StoragePermissionError:
            return False
        return hmac.compare_digest(self._signature(normalized, expires), signature)
