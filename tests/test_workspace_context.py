"""
Tests for the context exemption list and workspace resolution middleware.
"""

import pytest

from docmost.config import get_settings
from docmost.core.workspace_context import is_exempt_path, normalize_path


class TestExemptionList:
    """Path matching."""

    @pytest.mark.parametrize(
        "path",
        [
            "/api/mcp",
            "/api/mcp/",
            "/api/mcp/batch",
            "/api/mcp/batch/",
            "/api/mcp/tools",
            "/api/mcp/openapi.json",
            "//api//mcp//tools",
            "/api/api-keys/register",
            "/api/api-keys/register/",
            "/health",
            "/",
            "/docs",
            "/openapi.json",
        ],
    )
    def test_exempt(self, path):
        assert is_exempt_path(path)

    @pytest.mark.parametrize(
        "path",
        [
            "/api/api-keys",
            "/api/api-keys/123",
            "/api/api-keys/register-extra",
            "/api/mcpx",
            "/api/pages",
            "/healthz",
        ],
    )
    def test_not_exempt(self, path):
        assert not is_exempt_path(path)

    @pytest.mark.parametrize(
        "raw,expected",
        [("/", "/"), ("", "/"), ("/api/mcp/", "/api/mcp"), ("//api///mcp", "/api/mcp"), ("///", "/")],
    )
    def test_normalize(self, raw, expected):
        assert normalize_path(raw) == expected


class TestWorkspaceResolution:
    """Middleware behaviour."""

    @pytest.mark.parametrize(
        "method,path,body",
        [
            ("post", "/api/mcp", {"jsonrpc": "2.0", "method": "system.ping", "id": 1}),
            ("post", "/api/mcp/batch", [{"jsonrpc": "2.0", "method": "system.ping", "id": 1}]),
            ("get", "/api/mcp/tools", None),
            ("get", "/api/mcp/openapi.json", None),
            ("post", "/api/api-keys/register", {"name": "Automation", "userId": "u", "workspaceId": "w"}),
            ("get", "/health", None),
        ],
    )
    def test_exempt_routes_never_need_a_workspace(self, client, method, path, body):
        kwargs = {"json": body} if body is not None else {}
        response = getattr(client, method)(path, headers={"x-registration-token": "any-token"}, **kwargs)

        assert response.status_code != 404
        assert "Workspace not found" not in response.text

    def test_unknown_workspace_header(self, client, seed):
        response = client.get("/api/api-keys", headers={**seed.headers(), "X-Workspace-Id": "ws-ghost"})
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Workspace not found"

    def test_default_workspace(self, client, seed, monkeypatch):
        monkeypatch.setenv("DEFAULT_WORKSPACE_ID", "ws-acme")
        get_settings.cache_clear()

        response = client.get("/api/api-keys", headers=seed.headers())
        assert response.status_code == 200

    def test_key_from_other_workspace(self, client, seed):
        import asyncio

        from docmost.modules.workspace.service import get_workspace_service

        asyncio.run(get_workspace_service().create_workspace("Other", workspace_id="ws-other"))
        response = client.get("/api/api-keys", headers={**seed.headers(), "X-Workspace-Id": "ws-other"})
        assert response.status_code == 403

    def test_request_id_header(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"
