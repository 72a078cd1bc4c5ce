"""Create an API key through the bootstrap registration endpoint.

Usage:
  APP_SECRET=... python scripts/register_api_key.py <user_id> <workspace_id> [name] [--url http://127.0.0.1:3000]
"""

from __future__ import annotations

import argparse
import os
import sys

import httpx


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("user_id")
    parser.add_argument("workspace_id")
    parser.add_argument("name", nargs="?", default="mcp-client")
    parser.add_argument("--url", default=os.environ.get("DOCMOST_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--token", default=os.environ.get("APP_SECRET"), help="Registration token (defaults to $APP_SECRET)")
    args = parser.parse_args()

    if not args.token:
        print("ERROR: pass --token or set APP_SECRET", file=sys.stderr)
        return 2

    try:
        r = httpx.post(
            f"{args.url.rstrip('/')}/api/api-keys/register",
            headers={"x-registration-token": args.token},
            json={"name": args.name, "userId": args.user_id, "workspaceId": args.workspace_id},
            timeout=10.0,
        )
    except httpx.HTTPError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if r.status_code != 201:
        error = r.json().get("error", {}) if r.headers.get("content-type", "").startswith("application/json") else {}
        print(f"ERROR {r.status_code}: {error.get('message', r.text)}", file=sys.stderr)
        return 1

    data = r.json()
    print(f"Created API key '{data['name']}' ({data['id']})")
    print(data["key"])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
