"""Tests for the CDN asset host."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from botocore.exceptions import ClientError

from backend.config import settings
from backend.services.cdn import CdnService
from engine.gallery.types import Media

pytestmark = pytest.mark.asyncio(loop_scope="session")


def _client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, "DeleteObject")


@pytest.fixture
def media():
    return Media(id=uuid4(), file_name="portrait", file_extension="png", mimetype="image/png")


@pytest.fixture
def s3():
    return AsyncMock()


@pytest.fixture
def service(s3):
    svc = CdnService()
    svc.session = MagicMock()
    svc.session.client.return_value.__aenter__.return_value = s3
    return svc


class TestObjectKey:
    async def test_object_key(self, service, media):
        assert service.object_key(media.id, "png") == f"{settings.CDN_STORAGE_FOLDER}/{media.id}.png"


class TestDeleteAsset:
    async def test_delete(self, service, s3, media):
        await service.delete_asset(media)

        s3.delete_object.assert_awaited_once_with(
            Bucket=settings.CDN_STORAGE_ZONE,
            Key=f"{settings.CDN_STORAGE_FOLDER}/{media.id}.png",
        )

    async def test_missing_object_counts_as_deleted(self, service, s3, media):
        s3.delete_object.side_effect = _client_error("NoSuchKey")

        await service.delete_asset(media)

        assert s3.delete_object.await_count == 1

    async def test_retries_transient_error(self, service, s3, media):
        s3.delete_object.side_effect = [_client_error("ServiceUnavailable"), {}]

        with patch("backend.services.cdn.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await service.delete_asset(media)

        assert s3.delete_object.await_count == 2
        sleep.assert_awaited_once_with(1)

    async def test_gives_up_after_retries(self, service, s3, media):
        s3.delete_object.side_effect = OSError("connection reset")

        with patch("backend.services.cdn.asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(OSError):
                await service.delete_asset(media, max_retries=2)

        assert s3.delete_object.await_count == 3

    async def test_permanent_error_not_retried(self, service, s3, media):
        s3.delete_object.side_effect = _client_error("AccessDenied")

        with pytest.raises(ClientError):
            await service.delete_asset(media)

        assert s3.delete_object.await_count == 1
