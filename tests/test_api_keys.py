"""
Tests for API-key registration and management.
"""

import hashlib

import pytest

from docmost.config import get_settings
from docmost.modules.api_keys.service import get_api_keys_service, hash_api_key

REGISTER = "/api/api-keys/register"
TOKEN = {"x-registration-token": "test-registration-secret"}


def _registration(**overrides):
    body = {"name": "Automation", "userId": "user-member", "workspaceId": "ws-acme"}
    body.update(overrides)
    return body


class TestRegistrationToken:
    """The token is checked before anything else."""

    def test_missing_token(self, client):
        response = client.post(REGISTER, json=_registration())
        assert response.status_code == 401

    def test_wrong_token(self, client):
        response = client.post(REGISTER, json=_registration(), headers={"x-registration-token": "nope"})
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid registration token"

    def test_token_checked_before_body(self, client):
        response = client.post(REGISTER, json={"name": "ab"}, headers={"x-registration-token": "nope"})
        assert response.status_code == 401

    def test_registration_disabled_without_secret(self, client, monkeypatch):
        monkeypatch.setenv("APP_SECRET", "")
        get_settings.cache_clear()

        response = client.post(REGISTER, json=_registration(), headers={"x-registration-token": "anything"})
        assert response.status_code == 401


class TestRegistrationBody:
    """Body validation with a valid token."""

    def test_short_name(self, client):
        response = client.post(REGISTER, json=_registration(name="ab"), headers=TOKEN)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.parametrize("missing", ["name", "userId", "workspaceId"])
    def test_required_fields(self, client, missing):
        body = _registration()
        del body[missing]
        assert client.post(REGISTER, json=body, headers=TOKEN).status_code == 400

    def test_not_json(self, client):
        response = client.post(REGISTER, content=b"name=x", headers={**TOKEN, "Content-Type": "text/plain"})
        assert response.status_code == 400

    def test_unknown_user(self, client, seed):
        response = client.post(REGISTER, json=_registration(userId="ghost"), headers=TOKEN)
        assert response.status_code == 400
        assert "User or workspace not found" in response.json()["error"]["message"]

    def test_unknown_workspace(self, client, seed):
        response = client.post(REGISTER, json=_registration(workspaceId="ws-ghost"), headers=TOKEN)
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "User or workspace not found"


class TestRegistrationSuccess:
    def test_creates_working_key(self, client, seed):
        response = client.post(REGISTER, json=_registration(), headers=TOKEN)
        assert response.status_code == 201

        data = response.json()
        assert data["name"] == "Automation"
        assert data["message"] == "Registration API key created successfully."
        assert data["key"].startswith("mcp_")
        assert len(data["key"]) == 4 + 64

        rpc = client.post(
            "/api/mcp",
            json={"jsonrpc": "2.0", "method": "space.list", "id": 1},
            headers={"Authorization": f"Bearer {data['key']}"},
        ).json()
        assert "result" in rpc

    def test_only_hash_is_stored(self, client, seed):
        data = client.post(REGISTER, json=_registration(), headers=TOKEN).json()

        repository = get_api_keys_service().repository
        record = repository._records[data["id"]]
        assert record.hashed_key == hashlib.sha256(data["key"].encode()).hexdigest()
        assert record.hashed_key == hash_api_key(data["key"])
        assert data["key"] not in record.model_dump_json()

    def test_reachable_without_workspace(self, client, seed, monkeypatch):
        monkeypatch.setenv("DEFAULT_WORKSPACE_ID", "ws-missing")
        get_settings.cache_clear()

        response = client.post(REGISTER, json=_registration(), headers=TOKEN)
        assert response.status_code == 201


class TestKeyManagement:
    """Workspace-bound endpoints."""

    def _headers(self, seed, role="member"):
        return {**seed.headers(role), "X-Workspace-Id": "ws-acme"}

    def test_list_own_keys(self, client, seed):
        response = client.get("/api/api-keys", headers=self._headers(seed))
        assert response.status_code == 200

        items = response.json()["items"]
        assert [k["name"] for k in items] == ["member key"]
        assert "hashedKey" not in items[0]
        assert items[0]["lastUsedAt"] is not None

    def test_requires_workspace(self, client, seed):
        response = client.get("/api/api-keys", headers=seed.headers())
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "WORKSPACE_NOT_FOUND"

    def test_requires_key(self, client, seed):
        response = client.get("/api/api-keys", headers={"X-Workspace-Id": "ws-acme"})
        assert response.status_code == 401

    def test_create_and_revoke(self, client, seed):
        created = client.post("/api/api-keys", json={"name": "CI"}, headers=self._headers(seed))
        assert created.status_code == 201
        key_id = created.json()["id"]

        assert client.delete(f"/api/api-keys/{key_id}", headers=self._headers(seed)).status_code == 204
        assert client.delete(f"/api/api-keys/{key_id}", headers=self._headers(seed)).status_code == 404

    def test_create_validates_name(self, client, seed):
        response = client.post("/api/api-keys", json={"name": "x"}, headers=self._headers(seed))
        assert response.status_code == 400

    def test_cannot_revoke_others_key(self, client, seed):
        admin_keys = client.get("/api/api-keys", headers=self._headers(seed, "admin")).json()["items"]

        response = client.delete(f"/api/api-keys/{admin_keys[0]['id']}", headers=self._headers(seed, "member"))
        assert response.status_code == 404

    def test_admin_revokes_member_key(self, client, seed):
        member_keys = client.get("/api/api-keys", headers=self._headers(seed)).json()["items"]

        response = client.delete(f"/api/api-keys/{member_keys[0]['id']}", headers=self._headers(seed, "admin"))
        assert response.status_code == 204
