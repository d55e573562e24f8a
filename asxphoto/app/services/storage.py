"""
Object storage for contest photos: local disk, S3-compatible buckets and an
in-memory test double.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Protocol

import boto3
from botocore.config import Config

from asxphoto.app.core.config import settings

logger = logging.getLogger(__name__)


class StorageClient(Protocol):
    """Defines the operations the contest needs from object storage."""

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Store ``data`` under ``path`` and return its public URL."""
        ...

    async def delete(self, path: str) -> None:
        ...


@dataclass
class InMemoryStorageClient:
    """Test double for storage interactions."""

    base_url: str = "https://storage.test/photos"
    stored_objects: dict[str, tuple[bytes, str]] = field(default_factory=dict)

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        self.stored_objects[path] = (data, content_type)
        return f"{self.base_url}/{path}"

    async def delete(self, path: str) -> None:
        self.stored_objects.pop(path, None)


@dataclass
class LocalStorageClient:
    """Stores files under a directory served by the app at ``url_prefix``."""

    root: Path
    url_prefix: str = "/media"

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if not target.is_relative_to(self.root.resolve()):
            raise ValueError(f"Path escapes media directory: {path}")
        return target

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        target = self._resolve(path)

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)

        await asyncio.to_thread(_write)
        return f"{self.url_prefix}/{path}"

    async def delete(self, path: str) -> None:
        target = self._resolve(path)
        await asyncio.to_thread(target.unlink, True)


@dataclass
class S3StorageClient:
    """
    S3-compatible storage client.
    """

    bucket: str
    region: str | None = None
    endpoint: str | None = None
    access_key_id: str | None = None
    secret_access_key: str | None = None
    public_base_url: str | None = None

    def __post_init__(self):
        config = Config(signature_version="s3v4")
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint,
            region_name=self.region,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            config=config,
        )

    def _public_url(self, path: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{path}"
        if self.endpoint:
            return f"{self.endpoint.rstrip('/')}/{self.bucket}/{path}"
        return f"https://{self.bucket}.s3.amazonaws.com/{path}"

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        await asyncio.to_thread(
            self._client.put_object,
            Bucket=self.bucket,
            Key=path,
            Body=data,
            ContentType=content_type,
        )
        return self._public_url(path)

    async def delete(self, path: str) -> None:
        await asyncio.to_thread(self._client.delete_object, Bucket=self.bucket, Key=path)


@lru_cache
def get_storage_client() -> StorageClient:
    """Return the configured storage client (one per process)."""
    if settings.storage_backend == "memory":
        logger.info("[STORAGE] Using in-memory storage")
        return InMemoryStorageClient()

    if settings.storage_backend == "s3":
        logger.info(f"[STORAGE] Using S3 bucket {settings.s3_bucket}")
        return S3StorageClient(
            bucket=settings.s3_bucket or "",
            region=settings.s3_region,
            endpoint=settings.s3_endpoint,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
            public_base_url=settings.s3_public_base_url,
        )

    logger.info(f"[STORAGE] Using local media directory {settings.media_dir}")
    return LocalStorageClient(root=Path(settings.media_dir), url_prefix=settings.media_url_prefix)
