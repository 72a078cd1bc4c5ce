"""Export the MCP tool manifest and OpenAPI document to files, or verify an export.

Both files are projections of the live method registry and are generated on
demand, for example when publishing client bundles:
- mcp-tools.json    (same body as GET /api/mcp/tools)
- mcp-openapi.json  (same body as GET /api/mcp/openapi.json)

Do NOT edit them by hand. --check compares an earlier export against the
registry and reports a missing file as stale.

Usage:
  python scripts/export_mcp_manifest.py           # write both files
  python scripts/export_mcp_manifest.py --check   # exit 1 if either is stale
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

TOOLS_PATH = Path("mcp-tools.json")
OPENAPI_PATH = Path("mcp-openapi.json")


def _render(document: dict) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def _generate() -> dict[Path, str]:
    from docmost.config import get_settings
    from docmost.modules.mcp.exporters import build_openapi_document, build_tool_manifest
    from docmost.modules.mcp.methods import get_registry

    registry = get_registry()
    settings = get_settings().mcp
    return {
        TOOLS_PATH: _render(build_tool_manifest(registry, settings).model_dump()),
        OPENAPI_PATH: _render(build_openapi_document(registry, settings)),
    }


def main(argv: list[str]) -> int:
    generated = _generate()

    if "--check" in argv:
        stale = [
            path for path, content in generated.items()
            if not path.exists() or path.read_text(encoding="utf-8") != content
        ]
        if stale:
            print(f"ERROR: out of sync with the method registry: {', '.join(map(str, stale))}")
            print("Fix: run `python scripts/export_mcp_manifest.py` and commit the updated files")
            return 1
        print("OK: MCP manifests are in sync with the method registry")
        return 0

    for path, content in generated.items():
        path.write_text(content, encoding="utf-8")
        print(f"Wrote {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
