"""Storage: local filesystem and S3-compatible backends for signed asset URLs.

Factory creates backend from app.core.config. Implementations are loaded
lazily inside StorageFactory.create_storage_service() so boto3 is only
imported when the s3 backend is configured.
"""

from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.external.storage.protocol import StorageProtocol
from app.infrastructure.external.storage.url_signer import StorageUrlSigner

__all__ = [
    "StorageFactory",
    "StorageProtocol",
    "StorageUrlSigner",
]
