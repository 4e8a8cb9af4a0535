"""Tests for liking and deleting media."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from engine.gallery.types import Media

pytestmark = pytest.mark.asyncio(loop_scope="session")

REPO = "backend.routes.media.media_repo"


def _media(like_ids=()):
    return Media(
        id=uuid4(),
        file_name="portrait.png",
        file_extension="png",
        mimetype="image/png",
        like_ids=frozenset(like_ids),
    )


class TestToggleLike:
    async def test_like(self, async_client, auth_headers, user):
        media = _media(like_ids=[user.id])
        with patch(f"{REPO}.toggle_like", new_callable=AsyncMock, return_value=media) as toggle:
            res = await async_client.post(f"/api/media/{media.id}/like", headers=auth_headers)

        assert res.status_code == 200
        data = res.json()
        assert data["liked"] is True
        assert data["like_count"] == 1
        assert data["like_ids"] == [str(user.id)]
        toggle.assert_awaited_once_with(user.id, media.id)

    async def test_unlike(self, async_client, auth_headers):
        media = _media(like_ids=[uuid4()])
        with patch(f"{REPO}.toggle_like", new_callable=AsyncMock, return_value=media):
            res = await async_client.post(f"/api/media/{media.id}/like", headers=auth_headers)

        assert res.json()["liked"] is False
        assert res.json()["like_count"] == 1

    async def test_missing(self, async_client, auth_headers):
        with patch(f"{REPO}.toggle_like", new_callable=AsyncMock, return_value=None):
            res = await async_client.post(f"/api/media/{uuid4()}/like", headers=auth_headers)
        assert res.status_code == 404


class TestDeleteMedia:
    async def test_delete_removes_cdn_object(self, async_client, auth_headers, user):
        media = _media()
        with (
            patch(f"{REPO}.delete", new_callable=AsyncMock, return_value=media) as delete,
            patch("backend.routes.media.cdn_service.delete_asset", new_callable=AsyncMock) as delete_asset,
        ):
            res = await async_client.delete(f"/api/media/{media.id}", headers=auth_headers)

        assert res.status_code == 200
        delete.assert_awaited_once_with(user.id, media.id)
        delete_asset.assert_awaited_once_with(media)

    async def test_delete_not_owned(self, async_client, auth_headers):
        with (
            patch(f"{REPO}.delete", new_callable=AsyncMock, return_value=None),
            patch("backend.routes.media.cdn_service.delete_asset", new_callable=AsyncMock) as delete_asset,
        ):
            res = await async_client.delete(f"/api/media/{uuid4()}", headers=auth_headers)

        assert res.status_code == 404
        delete_asset.assert_not_called()

    async def test_requires_session(self, async_client):
        res = await async_client.delete(f"/api/media/{uuid4()}")
        assert res.status_code == 401
