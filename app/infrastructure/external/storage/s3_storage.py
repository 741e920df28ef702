"""S3-compatible storage: presigned GET URLs for private objects."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from datetime import timedelta

import boto3

from app.infrastructure.exceptions import StorageSigningError


class S3StorageService:
    """S3-compatible storage that signs download URLs.

    Uses boto3 (sync) via asyncio.to_thread for async API. Compatible with
    AWS S3, MinIO, DigitalOcean Spaces. Presigning is computed locally, so a
    whole batch is signed in one worker thread without network calls.
    """

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket: Bucket name.
            region: AWS region.
            endpoint_url: Custom endpoint (MinIO/Spaces).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
        """
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            **extra,
        )

    async def generate_download_urls(
        self,
        storage_refs: Sequence[str],
        expiration: timedelta = timedelta(hours=1),
    ) -> dict[str, str]:
        """Return presigned GET URLs keyed by storage ref."""
        refs = list(dict.fromkeys(storage_refs))
        expires_in = int(expiration.total_seconds())

        def _presign() -> dict[str, str]:
            return {
                ref: self._client.generate_presigned_url(
                    "get_object",
                    Params={"Bucket": self.bucket, "Key": ref.lstrip("/")},
                    ExpiresIn=expires_in,
                )
                for ref in refs
            }

        if not refs:
            return {}
        try:
            return await asyncio.to_thread(_presign)
        except Exception as e:
            raise StorageSigningError(refs, str(e)) from e
