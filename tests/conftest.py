"""
Shared fixtures: isolated in-memory stores, a seeded workspace with one
member per role, and a JSON-RPC helper bound to the test client.
"""

import asyncio
from dataclasses import dataclass, field

import pytest
from fastapi.testclient import TestClient

from docmost.auth.schemas import User, Workspace
from docmost.config import get_settings
from docmost.main import app
from docmost.modules.api_keys.service import get_api_keys_service
from docmost.modules.comments.service import get_comments_service
from docmost.modules.pages.service import get_pages_service
from docmost.modules.projects.service import get_projects_service
from docmost.modules.spaces.service import get_spaces_service
from docmost.modules.tasks.service import get_tasks_service
from docmost.modules.workspace.service import get_workspace_service
from docmost.observability import get_metrics_store

REGISTRATION_SECRET = "test-registration-secret"
WORKSPACE_ID = "ws-acme"


@dataclass
class Seed:
    workspace: Workspace
    users: dict[str, User] = field(default_factory=dict)
    keys: dict[str, str] = field(default_factory=dict)

    def headers(self, role: str = "member") -> dict[str, str]:
        return {"Authorization": f"Bearer {self.keys[role]}"}


def reset_state() -> None:
    for service in (
        get_workspace_service(),
        get_spaces_service(),
        get_pages_service(),
        get_comments_service(),
        get_projects_service(),
        get_tasks_service(),
    ):
        service.clear()
    get_api_keys_service().repository.clear()
    get_metrics_store().reset()


async def _seed() -> Seed:
    workspace = await get_workspace_service().create_workspace("Acme", workspace_id=WORKSPACE_ID)
    seed = Seed(workspace=workspace)
    for role in ("owner", "admin", "member", "viewer"):
        user = await get_workspace_service().add_user(
            WORKSPACE_ID, f"{role}@acme.test", name=role.title(), role=role, user_id=f"user-{role}"
        )
        raw_key, _ = await get_api_keys_service().generate_api_key(user, f"{role} key")
        seed.users[role] = user
        seed.keys[role] = raw_key
    return seed


@pytest.fixture(autouse=True)
def _isolated_state(monkeypatch):
    """Fresh stores and settings for every test."""
    monkeypatch.setenv("APP_SECRET", REGISTRATION_SECRET)
    monkeypatch.delenv("DEFAULT_WORKSPACE_ID", raising=False)
    get_settings.cache_clear()
    reset_state()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def seed() -> Seed:
    """Workspace ``ws-acme`` with an owner, admin, member and viewer, each holding an API key."""
    return asyncio.run(_seed())


@pytest.fixture
def rpc(client, seed):
    """Call one method as ``role`` and return the response envelope."""

    def call(method: str, params: dict | None = None, role: str | None = "member", request_id="1") -> dict:
        body = {"jsonrpc": "2.0", "method": method, "id": request_id}
        if params is not None:
            body["params"] = params
        headers = seed.headers(role) if role else {}
        response = client.post("/api/mcp", json=body, headers=headers)
        assert response.status_code == 200
        return response.json()

    return call
