"""
Tests for character and tag input validation.

Fields are trimmed before their length is checked, and every failure
carries a field-level message.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from backend.main import app
from backend.models.character import CreateCharacterRequest, EditCharacterRequest
from backend.models.tag import CreateTagRequest

client = TestClient(app)


def _errors(exc_info) -> dict[str, str]:
    return {str(err["loc"][0]): err["msg"] for err in exc_info.value.errors()}


class TestCreateCharacterRequest:
    """Validation rules for creating a character."""

    def test_valid_request_is_trimmed(self):
        req = CreateCharacterRequest(name="  Aria  ", description="  Fire mage  ")
        assert req.name == "Aria"
        assert req.description == "Fire mage"
        assert req.tags is None

    def test_name_too_short(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateCharacterRequest(name="ab", description="Fire mage")
        assert _errors(exc_info) == {"name": "must contain at least 3 character(s)"}

    def test_name_too_short_after_trimming(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateCharacterRequest(name="   Al   ", description="Fire mage")
        assert _errors(exc_info) == {"name": "must contain at least 3 character(s)"}

    def test_name_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateCharacterRequest(name="x" * 19, description="Fire mage")
        assert _errors(exc_info) == {"name": "must contain at most 18 character(s)"}

    def test_name_boundaries(self):
        assert CreateCharacterRequest(name="abc", description="abc").name == "abc"
        assert CreateCharacterRequest(name="x" * 18, description="abc").name == "x" * 18

    def test_description_bounds(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateCharacterRequest(name="Aria", description=" hi ")
        assert _errors(exc_info) == {"description": "must contain at least 3 character(s)"}

        with pytest.raises(ValidationError) as exc_info:
            CreateCharacterRequest(name="Aria", description="x" * 141)
        assert _errors(exc_info) == {"description": "must contain at most 140 character(s)"}

        assert len(CreateCharacterRequest(name="Aria", description="x" * 140).description) == 140

    def test_both_fields_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateCharacterRequest(name="a", description="b")
        assert set(_errors(exc_info)) == {"name", "description"}

    def test_tags_nullable(self):
        tag_id = uuid4()
        assert CreateCharacterRequest(name="Aria", description="Mage", tags=None).tags is None
        assert CreateCharacterRequest(name="Aria", description="Mage", tags=[str(tag_id)]).tags == [tag_id]

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError):
            CreateCharacterRequest(name="Aria", description="Mage", author_id=str(uuid4()))


class TestEditCharacterRequest:
    """Validation rules for editing a character."""

    def test_tags_required(self):
        with pytest.raises(ValidationError) as exc_info:
            EditCharacterRequest(name="Aria", description="Mage")
        assert "tags" in _errors(exc_info)

    def test_empty_tags_allowed(self):
        assert EditCharacterRequest(name="Aria", description="Mage", tags=[]).tags == []

    def test_same_length_rules(self):
        with pytest.raises(ValidationError) as exc_info:
            EditCharacterRequest(name="ab", description="Mage", tags=[])
        assert _errors(exc_info) == {"name": "must contain at least 3 character(s)"}


class TestCreateTagRequest:
    def test_name_rules(self):
        assert CreateTagRequest(name=" Hero ").name == "Hero"
        with pytest.raises(ValidationError) as exc_info:
            CreateTagRequest(name="  x ")
        assert _errors(exc_info) == {"name": "must contain at least 3 character(s)"}


class TestValidationOverHttp:
    """Invalid input is answered with 422 and never reaches the store."""

    def test_create_character_rejected_before_store(self, auth_headers):
        with patch("backend.routes.characters.character_repo.create", new_callable=AsyncMock) as create:
            res = client.post(
                "/api/characters",
                json={"name": "ab", "description": "Fire mage"},
                headers=auth_headers,
            )

        assert res.status_code == 422
        detail = res.json()["detail"]
        assert detail[0]["loc"] == ["body", "name"]
        assert detail[0]["msg"] == "must contain at least 3 character(s)"
        create.assert_not_called()

    def test_edit_character_requires_tags(self, auth_headers):
        with patch("backend.routes.characters.character_repo.edit", new_callable=AsyncMock) as edit:
            res = client.patch(
                f"/api/characters/{uuid4()}",
                json={"name": "Aria", "description": "Fire mage"},
                headers=auth_headers,
            )

        assert res.status_code == 422
        edit.assert_not_called()

    def test_create_without_session_is_auth_error(self):
        with patch("backend.routes.characters.character_repo.create", new_callable=AsyncMock) as create:
            res = client.post("/api/characters", json={"name": "ab", "description": "x"})

        assert res.status_code == 401
        create.assert_not_called()
