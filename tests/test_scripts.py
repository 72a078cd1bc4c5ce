"""
Tests for the maintenance scripts under scripts/.
"""

import importlib.util
import json
from pathlib import Path

import pytest

SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"


def _load(name: str):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def exporter(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return _load("export_mcp_manifest")


class TestExportManifest:
    """Manifest export and its --check mode."""

    def test_check_without_export_is_stale(self, exporter, tmp_path):
        assert exporter.main(["--check"]) == 1
        assert not (tmp_path / "mcp-tools.json").exists()

    def test_export_then_check(self, exporter, tmp_path):
        assert exporter.main([]) == 0

        tools = json.loads((tmp_path / "mcp-tools.json").read_text(encoding="utf-8"))
        openapi = json.loads((tmp_path / "mcp-openapi.json").read_text(encoding="utf-8"))
        assert tools["schema_version"] == "1.0"
        assert "user.list" in openapi["paths"]

        assert exporter.main(["--check"]) == 0

    def test_edited_export_is_stale(self, exporter, tmp_path):
        exporter.main([])
        (tmp_path / "mcp-openapi.json").write_text("{}\n", encoding="utf-8")

        assert exporter.main(["--check"]) == 1
