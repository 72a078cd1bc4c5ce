"""
Tests for the tool manifest and OpenAPI projections of the registry.
"""

from docmost.config import McpSettings
from docmost.modules.mcp.exporters import (
    build_openapi_document,
    build_tool_manifest,
    component_name,
)
from docmost.modules.mcp.methods import build_registry


def _settings():
    return McpSettings()


class TestToolManifest:
    """Function-calling manifest."""

    def test_header(self):
        manifest = build_tool_manifest(build_registry(), _settings())
        assert manifest.schema_version == "1.0"
        assert manifest.name_for_model == "Docmost MCP"
        assert manifest.name_for_human == "Docmost Machine Control Protocol"

    def test_one_tool_per_method(self):
        registry = build_registry()
        manifest = build_tool_manifest(registry, _settings())

        names = [tool.function.name for tool in manifest.tools]
        assert names == registry.names()
        assert all(tool.type == "function" for tool in manifest.tools)

    def test_parameters_are_the_declared_schema(self):
        registry = build_registry()
        manifest = build_tool_manifest(registry, _settings())

        for tool in manifest.tools:
            assert tool.function.parameters == registry.get(tool.function.name).params_schema

    def test_parameters_are_copies(self):
        registry = build_registry()
        manifest = build_tool_manifest(registry, _settings())

        manifest.tools[0].function.parameters["properties"]["injected"] = {"type": "string"}
        assert "injected" not in registry.get(manifest.tools[0].function.name).params_schema["properties"]

    def test_names_from_settings(self, monkeypatch):
        monkeypatch.setenv("MCP_NAME_FOR_MODEL", "Acme Docs")
        manifest = build_tool_manifest(build_registry(), McpSettings())
        assert manifest.name_for_model == "Acme Docs"


class TestOpenApiDocument:
    """OpenAPI 3.0.0 document."""

    def test_header(self):
        document = build_openapi_document(build_registry(), _settings())
        assert document["openapi"] == "3.0.0"
        assert document["info"]["title"] == "Docmost Machine Control Protocol API"
        assert document["info"]["version"] == "1.0.0"
        assert document["servers"] == [{"url": "/api/mcp"}]

    def test_paths_are_exactly_the_method_names(self):
        registry = build_registry()
        document = build_openapi_document(registry, _settings())
        assert sorted(document["paths"]) == sorted(registry.names())

    def test_every_operation_is_post_with_shared_envelopes(self):
        document = build_openapi_document(build_registry(), _settings())
        schemas = document["components"]["schemas"]
        assert {"JsonRpcRequest", "JsonRpcResponse", "JsonRpcError"} <= set(schemas)

        for name, path in document["paths"].items():
            assert list(path) == ["post"]
            operation = path["post"]
            assert operation["x-jsonrpc-method"] == name
            request_ref = operation["requestBody"]["content"]["application/json"]["schema"]["$ref"]
            assert request_ref.rsplit("/", 1)[1] in schemas
            response_ref = operation["responses"]["200"]["content"]["application/json"]["schema"]["$ref"]
            assert response_ref == "#/components/schemas/JsonRpcResponse"

    def test_params_components_match_registry(self):
        registry = build_registry()
        schemas = build_openapi_document(registry, _settings())["components"]["schemas"]

        for descriptor in registry:
            assert schemas[f"{component_name(descriptor.name)}Params"] == descriptor.params_schema

    def test_permissions_and_security(self):
        document = build_openapi_document(build_registry(), _settings())

        ping = document["paths"]["system.ping"]["post"]
        assert ping["security"] == []
        assert ping["x-permission"] == "public"

        delete = document["paths"]["space.delete"]["post"]
        assert delete["security"] == [{"mcpApiKey": []}]
        assert delete["x-permission"] == "admin"

    def test_operation_ids_are_unique(self):
        document = build_openapi_document(build_registry(), _settings())
        ids = [path["post"]["operationId"] for path in document["paths"].values()]
        assert len(ids) == len(set(ids))


class TestComponentName:
    def test_camel_case(self):
        assert component_name("task.moveToProject") == "TaskMoveToProject"
        assert component_name("system.ping") == "SystemPing"
