"""Storage service protocol (DIP). Implementations: LocalStorageService, S3StorageService."""

from collections.abc import Sequence
from datetime import timedelta
from typing import Protocol


class StorageProtocol(Protocol):
    """Protocol for object storage backends that hand out temporary read URLs."""

    async def generate_download_urls(
        self,
        storage_refs: Sequence[str],
        expiration: timedelta = timedelta(hours=1),
    ) -> dict[str, str]:
        """Return storage_ref -> temporary download URL for every ref, in one batch.

        Raises:
            StorageSigningError: The batch could not be signed.
            StoragePermissionError: A ref escapes the storage root.
        """
        ...
