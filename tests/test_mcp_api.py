"""
Tests for the MCP HTTP endpoints.
"""

from docmost.config import get_settings
from docmost.modules.mcp.methods import get_registry


class TestSystemMethods:
    """Public introspection methods."""

    def test_ping(self, client):
        response = client.post(
            "/api/mcp",
            json={"jsonrpc": "2.0", "method": "system.ping", "params": {}, "id": "t1"},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["jsonrpc"] == "2.0"
        assert data["id"] == "t1"
        assert data["result"]["pong"] is True
        assert "error" not in data

    def test_ping_without_id(self, client):
        data = client.post("/api/mcp", json={"jsonrpc": "2.0", "method": "system.ping"}).json()
        assert data["id"] is None
        assert data["result"]["pong"] is True

    def test_numeric_id_echoed(self, client):
        data = client.post("/api/mcp", json={"jsonrpc": "2.0", "method": "system.ping", "id": 42}).json()
        assert data["id"] == 42

    def test_list_methods(self, client):
        data = client.post("/api/mcp", json={"jsonrpc": "2.0", "method": "system.listMethods", "id": 1}).json()
        assert data["result"]["methods"] == get_registry().names()
        assert "task.moveToProject" in data["result"]["categories"]["task"]

    def test_get_method_schema(self, client):
        data = client.post(
            "/api/mcp",
            json={"jsonrpc": "2.0", "method": "system.getMethodSchema", "params": {"methodName": "page.get"}, "id": 1},
        ).json()
        result = data["result"]
        assert result["name"] == "page.get"
        assert result["permission"] == "read"
        assert result["parameters"]["required"] == ["pageId"]

    def test_get_method_schema_unknown(self, client):
        data = client.post(
            "/api/mcp",
            json={"jsonrpc": "2.0", "method": "system.getMethodSchema", "params": {"methodName": "nope.nope"}, "id": 1},
        ).json()
        assert data["error"]["code"] == -32001


class TestEnvelopeErrors:
    """Malformed requests answer with an error envelope, HTTP 200."""

    def test_missing_version(self, client):
        response = client.post("/api/mcp", json={"method": "test"})
        assert response.status_code == 200
        error = response.json()["error"]
        assert error["code"] == -32600
        assert "Invalid JSON-RPC version" in error["message"]

    def test_missing_method(self, client):
        data = client.post("/api/mcp", json={"jsonrpc": "2.0", "id": "m"}).json()
        assert data["id"] == "m"
        assert data["error"]["message"] == "Method is required"

    def test_non_object_body(self, client):
        data = client.post("/api/mcp", json="system.ping").json()
        assert data["id"] is None
        assert data["error"]["code"] == -32600

    def test_parse_error(self, client):
        response = client.post("/api/mcp", content=b"{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 200
        data = response.json()
        assert data["id"] is None
        assert data["error"]["code"] == -32700

    def test_unknown_method(self, client):
        data = client.post("/api/mcp", json={"jsonrpc": "2.0", "method": "nope.nope", "id": "x"}).json()
        assert data["id"] == "x"
        assert data["error"]["code"] == -32601

    def test_invalid_params(self, client):
        data = client.post(
            "/api/mcp",
            json={"jsonrpc": "2.0", "method": "system.getMethodSchema", "params": {}, "id": 1},
        ).json()
        assert data["error"]["code"] == -32602


class TestBatch:
    """Batch endpoint."""

    def test_mixed_batch(self, client):
        response = client.post(
            "/api/mcp/batch",
            json=[
                {"jsonrpc": "2.0", "method": "system.ping", "id": "b1"},
                {"jsonrpc": "2.0", "method": "nope.nope", "id": "b2"},
            ],
        )
        assert response.status_code == 200

        data = response.json()
        assert len(data) == 2
        assert data[0]["id"] == "b1"
        assert data[0]["result"]["pong"] is True
        assert data[1]["id"] == "b2"
        assert data[1]["error"]["code"] == -32601

    def test_ids_follow_input_order(self, client):
        body = [{"jsonrpc": "2.0", "method": "system.ping", "id": f"req-{i}"} for i in range(10)]
        data = client.post("/api/mcp/batch", json=body).json()
        assert [r["id"] for r in data] == [b["id"] for b in body]

    def test_malformed_element_does_not_abort(self, client):
        data = client.post(
            "/api/mcp/batch",
            json=[{"method": "system.ping", "id": 1}, "junk", {"jsonrpc": "2.0", "method": "system.ping", "id": 3}],
        ).json()
        assert len(data) == 3
        assert data[0]["error"]["code"] == -32600
        assert data[1]["error"]["code"] == -32600
        assert data[2]["result"]["pong"] is True

    def test_non_array_is_400(self, client):
        response = client.post("/api/mcp/batch", json={"jsonrpc": "2.0", "method": "system.ping", "id": 1})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BAD_REQUEST"

    def test_empty_array_is_400(self, client):
        assert client.post("/api/mcp/batch", json=[]).status_code == 400

    def test_invalid_json_is_400(self, client):
        response = client.post("/api/mcp/batch", content=b"[", headers={"Content-Type": "application/json"})
        assert response.status_code == 400

    def test_batch_size_limit(self, client, monkeypatch):
        monkeypatch.setenv("MCP_MAX_BATCH_SIZE", "2")
        get_settings.cache_clear()

        body = [{"jsonrpc": "2.0", "method": "system.ping", "id": i} for i in range(3)]
        response = client.post("/api/mcp/batch", json=body)
        assert response.status_code == 400
        assert response.json()["error"]["details"] == {"size": 3, "limit": 2}

    def test_array_on_main_endpoint_is_a_batch(self, client):
        data = client.post(
            "/api/mcp",
            json=[{"jsonrpc": "2.0", "method": "system.ping", "id": "a"}, {"jsonrpc": "2.0", "method": "system.ping", "id": "b"}],
        ).json()
        assert [r["id"] for r in data] == ["a", "b"]

    def test_batch_carries_principal(self, client, seed):
        data = client.post(
            "/api/mcp/batch",
            json=[
                {"jsonrpc": "2.0", "method": "space.list", "id": 1},
                {"jsonrpc": "2.0", "method": "space.create", "params": {"name": "Docs"}, "id": 2},
            ],
            headers=seed.headers("member"),
        ).json()
        assert "result" in data[0]
        assert data[1]["result"]["slug"] == "docs"


class TestExports:
    """Tool manifest and OpenAPI endpoints."""

    def test_tools(self, client):
        response = client.get("/api/mcp/tools")
        assert response.status_code == 200

        data = response.json()
        assert data["schema_version"] == "1.0"
        assert data["name_for_model"] == "Docmost MCP"
        assert len(data["tools"]) > 0

        registry = get_registry()
        for tool in data["tools"]:
            assert tool["type"] == "function"
            assert tool["function"]["name"] in registry
        assert len(data["tools"]) == len(registry)

    def test_openapi(self, client):
        response = client.get("/api/mcp/openapi.json")
        assert response.status_code == 200

        data = response.json()
        assert data["openapi"] == "3.0.0"
        assert data["info"]["title"] == "Docmost Machine Control Protocol API"
        assert set(data["paths"]) == set(get_registry().names())
        assert "components" in data

    def test_metrics(self, client, seed):
        client.post("/api/mcp", json={"jsonrpc": "2.0", "method": "system.ping", "id": 1})
        client.post("/api/mcp", json={"jsonrpc": "2.0", "method": "nope.nope", "id": 2})

        data = client.get("/api/mcp/metrics", headers=seed.headers("admin")).json()
        assert data["methods"]["system.ping"]["call_count"] == 1
        assert data["global_errors"]["-32601"] == 1

    def test_metrics_count_batches(self, client, seed):
        batch = [{"jsonrpc": "2.0", "method": "system.ping", "id": i} for i in range(4)]
        client.post("/api/mcp/batch", json=batch)

        data = client.get("/api/mcp/metrics", headers=seed.headers("admin")).json()
        assert data["batches"]["count"] == 1
        assert data["batches"]["largest"] == 4
        assert data["methods"]["system.ping"]["call_count"] == 4

    def test_metrics_require_admin_key(self, client, seed):
        assert client.get("/api/mcp/metrics").status_code == 401

        response = client.get("/api/mcp/metrics", headers=seed.headers("member"))
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

        assert client.get("/api/mcp/metrics", headers=seed.headers("owner")).status_code == 200


class TestAuthentication:
    """API-key principals and role permissions."""

    def test_anonymous_domain_call(self, rpc):
        data = rpc("space.list", role=None)
        assert data["error"]["code"] == -32002
        assert data["error"]["message"] == "Authentication required"

    def test_unknown_key(self, client, seed):
        data = client.post(
            "/api/mcp",
            json={"jsonrpc": "2.0", "method": "space.list", "id": 1},
            headers={"Authorization": "Bearer mcp_" + "0" * 64},
        ).json()
        assert data["error"]["message"] == "Authentication required"

    def test_non_api_key_bearer_ignored(self, client, seed):
        data = client.post(
            "/api/mcp",
            json={"jsonrpc": "2.0", "method": "system.ping", "id": 1},
            headers={"Authorization": "Bearer some.jwt.token"},
        ).json()
        assert data["result"]["pong"] is True

    def test_viewer_can_read_not_write(self, rpc):
        assert "result" in rpc("space.list", role="viewer")

        data = rpc("space.create", {"name": "Docs"}, role="viewer")
        assert data["error"]["code"] == -32002
        assert data["error"]["message"] == "Permission denied"

    def test_member_cannot_delete_space(self, rpc):
        space = rpc("space.create", {"name": "Docs"})["result"]

        data = rpc("space.delete", {"spaceId": space["id"]})
        assert data["error"]["code"] == -32002
        assert "result" in rpc("space.delete", {"spaceId": space["id"]}, role="admin")
