"""
CDN asset host: storage keys and storage-zone cleanup.

Public media URLs are composed by engine.gallery.renderer.asset_url.
"""

from __future__ import annotations

import asyncio
import logging
from uuid import UUID

import aioboto3
from botocore.exceptions import ClientError

from backend.config import settings
from engine.gallery.types import Media

logger = logging.getLogger(__name__)

# Retryable S3 error codes
_RETRYABLE_CODES = {"RequestTimeout", "ServiceUnavailable", "ThrottlingException", "Throttling"}
_MISSING_CODES = {"NoSuchKey", "404"}


class CdnService:
    """Media storage zone behind the CDN, reached through its S3-compatible API."""

    def __init__(self) -> None:
        """Initialize the CDN service with credentials from settings."""
        self.session = aioboto3.Session()
        self.endpoint = settings.CDN_STORAGE_ENDPOINT
        self.access_key = settings.CDN_ACCESS_KEY
        self.secret_key = settings.CDN_SECRET_KEY
        self.bucket = settings.CDN_STORAGE_ZONE
        self.folder = settings.CDN_STORAGE_FOLDER

    def object_key(self, media_id: UUID | str, file_extension: str) -> str:
        """Storage key for a media file: <folder>/<id>.<ext>."""
        return f"{self.folder}/{media_id}.{file_extension}"

    async def delete_asset(self, media: Media, max_retries: int = 1) -> None:
        """
        Remove a media file from the storage zone with retry on transient failures.

        A file that is already gone counts as deleted.

        Args:
            media: The media whose file should be removed
            max_retries: Number of retries on transient failures (default 1)
        """
        key = self.object_key(media.id, media.file_extension)
        last_error: Exception | None = None

        for attempt in range(max_retries + 1):
            try:
                async with self.session.client(
                    "s3",
                    endpoint_url=self.endpoint,
                    aws_access_key_id=self.access_key,
                    aws_secret_access_key=self.secret_key,
                ) as s3:
                    await s3.delete_object(Bucket=self.bucket, Key=key)
                logger.info("Deleted CDN object %s", key)
                return
            except ClientError as e:
                error_code = e.response.get("Error", {}).get("Code", "")
                if error_code in _MISSING_CODES:
                    logger.info("CDN object %s already absent", key)
                    return
                if error_code in _RETRYABLE_CODES and attempt < max_retries:
                    wait_time = 2**attempt
                    logger.warning(
                        "CDN delete error (attempt %d), retrying in %ds: %s", attempt + 1, wait_time, e
                    )
                    await asyncio.sleep(wait_time)
                    last_error = e
                else:
                    raise
            except OSError as e:
                # Network errors, timeouts, etc.
                if attempt < max_retries:
                    wait_time = 2**attempt
                    logger.warning(
                        "CDN delete error (attempt %d), retrying in %ds: %s", attempt + 1, wait_time, e
                    )
                    await asyncio.sleep(wait_time)
                    last_error = e
                else:
                    raise

        raise last_error  # type: ignore[misc]


# Singleton instance
cdn_service = CdnService()
