"""Tests for the tag API."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import asyncpg
import pytest

from engine.gallery.types import Tag

pytestmark = pytest.mark.asyncio(loop_scope="session")

REPO = "backend.routes.tags.tag_repo"


class TestTagRoutes:
    async def test_list(self, async_client, auth_headers, user):
        tags = [
            Tag(id=uuid4(), name="Hero", character_ids=frozenset({uuid4(), uuid4()})),
            Tag(id=uuid4(), name="Villain"),
        ]
        with patch(f"{REPO}.list_all", new_callable=AsyncMock, return_value=tags):
            res = await async_client.get("/api/tags", headers=auth_headers)

        assert res.status_code == 200
        data = res.json()
        assert [t["name"] for t in data] == ["Hero", "Villain"]
        assert data[0]["character_count"] == 2
        assert data[1]["character_ids"] == []
        assert data[1]["cover"] is None

    async def test_get_not_found(self, async_client, auth_headers):
        with patch(f"{REPO}.get", new_callable=AsyncMock, return_value=None):
            res = await async_client.get(f"/api/tags/{uuid4()}", headers=auth_headers)
        assert res.status_code == 404

    async def test_create(self, async_client, auth_headers, user):
        tag = Tag(id=uuid4(), name="Hero")
        with patch(f"{REPO}.create", new_callable=AsyncMock, return_value=tag) as create:
            res = await async_client.post("/api/tags", json={"name": " Hero "}, headers=auth_headers)

        assert res.status_code == 201
        assert res.json()["id"] == str(tag.id)
        assert create.call_args.args[1].name == "Hero"

    async def test_create_duplicate(self, async_client, auth_headers):
        with patch(
            f"{REPO}.create",
            new_callable=AsyncMock,
            side_effect=asyncpg.UniqueViolationError("tags_name_key"),
        ):
            res = await async_client.post("/api/tags", json={"name": "Hero"}, headers=auth_headers)
        assert res.status_code == 409

    async def test_create_short_name(self, async_client, auth_headers):
        res = await async_client.post("/api/tags", json={"name": "ab"}, headers=auth_headers)
        assert res.status_code == 422
        assert res.json()["detail"][0]["msg"] == "must contain at least 3 character(s)"

    async def test_requires_session(self, async_client):
        res = await async_client.post("/api/tags", json={"name": "Hero"})
        assert res.status_code == 401
