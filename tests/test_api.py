"""
Tests for the application-level endpoints.
"""

from docmost.modules.mcp.methods import get_registry


class TestHealth:
    """Health check tests."""

    def test_health_check(self, client):
        """Test health endpoint returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert data["registered_methods"] == len(get_registry())


class TestRoot:
    """Root endpoint tests."""

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["mcp"] == "/api/mcp"

    def test_app_openapi_lists_gateway_routes(self, client):
        paths = client.get("/openapi.json").json()["paths"]
        assert "/api/mcp" in paths
        assert "/api/mcp/batch" in paths
        assert "/api/api-keys/register" in paths

    def test_api_key_errors_documented(self, client):
        schemas = client.get("/openapi.json").json()["components"]["schemas"]
        assert "ErrorResponse" in schemas
