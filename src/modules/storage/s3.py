"""S3-compatible photo store (hosted object storage or a local emulator)."""

from __future__ import annotations

import asyncio
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.config import settings
from src.modules.storage.base import ObjectExistsError, PhotoStore, StorageError
from src.modules.storage.urls import build_public_url

logger = logging.getLogger(__name__)

_PRECONDITION_CODES = {"PreconditionFailed", "412", "ConditionalRequestConflict"}


def create_s3_client():
    return boto3.client(
        "s3",
        endpoint_url=settings.storage_endpoint_url or None,
        region_name=settings.storage_region,
        aws_access_key_id=settings.storage_access_key_id or None,
        aws_secret_access_key=settings.storage_secret_access_key or None,
    )


class S3PhotoStore(PhotoStore):
    def __init__(self, bucket: str, client=None, public_base_url: str | None = None) -> None:
        self.bucket = bucket
        self.client = client if client is not None else create_s3_client()
        self.public_base_url = public_base_url or settings.storage_public_base_url

    async def put(
        self, path: str, data: bytes, content_type: str, *, overwrite: bool = False
    ) -> str:
        params = {
            "Bucket": self.bucket,
            "Key": path,
            "Body": data,
            "ContentType": content_type,
            "CacheControl": "max-age=3600",
        }
        if not overwrite:
            # Conditional write: the store refuses if the key already exists
            params["IfNoneMatch"] = "*"
        try:
            await asyncio.to_thread(self.client.put_object, **params)
        except ClientError as exc:
            error = exc.response.get("Error", {})
            status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
            if error.get("Code") in _PRECONDITION_CODES or status == 412:
                raise ObjectExistsError(f"Object already exists: {self.bucket}/{path}") from exc
            logger.error("S3 upload failed for %s/%s: %s", self.bucket, path, exc)
            raise StorageError(f"Upload failed: {error.get('Message') or exc}") from exc
        except BotoCoreError as exc:
            logger.error("S3 upload failed for %s/%s: %s", self.bucket, path, exc)
            raise StorageError(f"Upload failed: {exc}") from exc

        logger.info("Uploaded s3://%s/%s (%d bytes)", self.bucket, path, len(data))
        return path

    async def delete(self, path: str) -> None:
        try:
            await asyncio.to_thread(self.client.delete_object, Bucket=self.bucket, Key=path)
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"Delete failed for {path}: {exc}") from exc
        logger.info("Deleted s3://%s/%s", self.bucket, path)

    def public_url(self, path: str, request_host: str | None = None) -> str:
        return build_public_url(self.public_base_url, self.bucket, path, request_host)
