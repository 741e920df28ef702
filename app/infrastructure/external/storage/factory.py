"""Storage service factory: picks the avatar signing backend from settings."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from app.infrastructure.external.storage.protocol import StorageProtocol

if TYPE_CHECKING:
    from app.core.config import Settings


def _local(settings: Settings) -> StorageProtocol:
    from app.infrastructure.external.storage.local_storage import LocalStorageService

    return LocalStorageService(
        secret_key=settings.secret_key.get_secret_value(),
        base_url=settings.storage_base_url,
    )


def _s3(settings: Settings) -> StorageProtocol:
    # boto3 is imported only when the s3 backend is selected.
    from app.infrastructure.external.storage.s3_storage import S3StorageService

    if not settings.s3_bucket:
        raise ValueError("S3_BUCKET required for s3 backend")
    return S3StorageService(
        bucket=settings.s3_bucket,
        region=settings.s3_region,
        endpoint_url=settings.s3_endpoint_url,
        access_key=settings.s3_access_key,
        secret_key=(
            settings.s3_secret_key.get_secret_value() if settings.s3_secret_key else None
        ),
    )


_BACKENDS: dict[str, Callable[[Settings], StorageProtocol]] = {
    "local": _local,
    "s3": _s3,
}


class StorageFactory:
    """Creates the storage service that signs avatar references."""

    @staticmethod
    def create_storage_service(settings: Settings | None = None) -> StorageProtocol:
        """Create storage service from settings (get_settings() when omitted).

        Raises:
            ValueError: Unknown backend or missing required config.
        """
        from app.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()
        try:
            build = _BACKENDS[backend]
        except KeyError:
            raise ValueError(
                f"Unknown storage backend: {backend}. Supported: {', '.join(_BACKENDS)}"
            ) from None
        return build(s)
