"""Avatar URL signing: storage backends and the batch signer."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock
from urllib.parse import parse_qs, urlparse

import pytest

from app.core.config import Settings
from app.infrastructure.exceptions import StoragePermissionError, StorageSigningError
from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.external.storage.local_storage import LocalStorageService
from app.infrastructure.external.storage.s3_storage import S3StorageService
from app.infrastructure.external.storage.url_signer import StorageUrlSigner, is_public_url


@pytest.fixture
def local_storage() -> LocalStorageService:
    return LocalStorageService(secret_key="k", base_url="https://files.test/")


@pytest.mark.parametrize(
    ("ref", "expected"),
    [
        ("https://cdn/x.png", True),
        ("HTTP://cdn/x.png", True),
        ("data:image/png;base64,AA", True),
        ("avatars/x.png", False),
    ],
)
def test_is_public_url(ref: str, expected: bool) -> None:
    assert is_public_url(ref) is expected


async def test_local_urls_verify(local_storage: LocalStorageService) -> None:
    urls = await local_storage.generate_download_urls(["/avatars/a.png"], timedelta(minutes=5))
    url = urlparse(urls["/avatars/a.png"])
    assert url.netloc == "files.test"
    assert url.path == "/storage/avatars/a.png"
    query = parse_qs(url.query)
    expires = int(query["expires"][0])
    signature = query["signature"][0]
    assert local_storage.verify_download_signature("avatars/a.png", expires, signature)
    assert not local_storage.verify_download_signature("avatars/b.png", expires, signature)
    assert not local_storage.verify_download_signature("avatars/a.png", 0, signature)


async def test_local_rejects_traversal(local_storage: LocalStorageService) -> None:
    with pytest.raises(StoragePermissionError):
        await local_storage.generate_download_urls(["../secret"])


async def test_s3_presigns_batch() -> None:
    storage = S3StorageService(
        bucket="avatars", region="us-east-1", access_key="test", secret_key="test"
    )
    urls = await storage.generate_download_urls(["a.png", "a.png", "b.png"])
    assert set(urls) == {"a.png", "b.png"}
    assert "X-Amz-Signature" in urls["a.png"] or "Signature" in urls["a.png"]


async def test_s3_failure_raises_signing_error() -> None:
    storage = S3StorageService(bucket="avatars", access_key="test", secret_key="test")
    storage._client = MagicMock()
    storage._client.generate_presigned_url.side_effect = RuntimeError("no credentials")
    with pytest.raises(StorageSigningError) as exc_info:
        await storage.generate_download_urls(["a.png"])
    assert exc_info.value.details["file_paths"] == ["a.png"]


async def test_signer_passes_public_urls_through() -> None:
    storage = AsyncMock()
    storage.generate_download_urls = AsyncMock(return_value={"a.png": "https://signed/a"})
    signer = StorageUrlSigner(storage, ttl_seconds=60)
    result = await signer.sign_many(["a.png", "https://cdn/b.png"])
    assert result == {"a.png": "https://signed/a", "https://cdn/b.png": "https://cdn/b.png"}
    storage.generate_download_urls.assert_awaited_once_with(["a.png"], timedelta(seconds=60))


async def test_signer_returns_originals_on_failure() -> None:
    storage = AsyncMock()
    storage.generate_download_urls = AsyncMock(side_effect=StorageSigningError(["a.png"], "down"))
    signer = StorageUrlSigner(storage)
    assert await signer.sign_many(["a.png"]) == {"a.png": "a.png"}


async def test_signer_skips_backend_for_public_only() -> None:
    storage = AsyncMock()
    signer = StorageUrlSigner(storage)
    assert await signer.sign_many(["https://cdn/x"]) == {"https://cdn/x": "https://cdn/x"}
    storage.generate_download_urls.assert_not_called()


def test_factory_builds_local_signer_from_secret_key() -> None:
    settings = Settings(
        secret_key="s3cret", storage_backend="local", storage_base_url="https://files.test"
    )
    storage = StorageFactory.create_storage_service(settings)
    assert isinstance(storage, LocalStorageService)
    assert storage.base_url == "https://files.test"


def test_settings_reject_unknown_backend() -> None:
    with pytest.raises(ValueError, match="Invalid storage_backend"):
        Settings(storage_backend="ftp")
