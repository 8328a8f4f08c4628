#!/usr/bin/env python3
"""
Simple smoke test for a running rulenav instance.

Usage:
  API_URL (optional, default http://localhost:8080)
  RULENAV_API_KEY (optional) exported into env for authenticated endpoints
  SMOKE_PREFIX (optional) ruleset prefix to list from the upstream

Run:
  python3 scripts/smoke_test.py
"""

import os
import sys

import httpx

API_URL = os.getenv("API_URL", "http://localhost:8080").rstrip("/")
API_KEY = os.getenv("RULENAV_API_KEY", "")
PREFIX = os.getenv("SMOKE_PREFIX", "")
TIMEOUT = 10


def headers_with_auth():
    h = {"Content-Type": "application/json"}
    if API_KEY:
        h["X-API-Key"] = API_KEY
    return h


def fail(msg):
    print("FAIL:", msg)
    sys.exit(2)


def ok(msg):
    print("OK:", msg)


def check_paths(nodes, parents=()):
    names = [n["name"] for n in nodes]
    if names != sorted(names) or len(names) != len(set(names)):
        fail(f"siblings not unique and sorted: {names}")
    for n in nodes:
        expected = "/".join((*parents, n["name"]))
        if n["path"] != expected:
            fail(f"node path {n['path']!r} != {expected!r}")
        if "children" in n:
            check_paths(n["children"], (*parents, n["name"]))


def main():
    client = httpx.Client(timeout=TIMEOUT)
    # 1) readiness
    try:
        r = client.get(f"{API_URL}/api/v1/ready")
    except Exception as e:
        fail(f"ready request failed: {e}")
    if r.status_code != 200:
        fail(f"ready returned {r.status_code}: {r.text}")
    ok("ready OK")

    # 2) pure tree computation
    r = client.post(
        f"{API_URL}/api/v1/tree",
        headers=headers_with_auth(),
        json={"paths": ["smoke/a", "smoke/b/c", "smoke/b"]},
    )
    if r.status_code != 200:
        fail(f"tree failed: {r.status_code} {r.text}")
    expected = [
        {
            "name": "smoke",
            "path": "smoke",
            "children": [
                {"name": "a", "path": "smoke/a"},
                {"name": "b", "path": "smoke/b", "children": [{"name": "c", "path": "smoke/b/c"}]},
            ],
        }
    ]
    if r.json().get("items") != expected:
        fail(f"unexpected tree: {r.text}")
    ok("tree OK")

    # 3) tree built from the upstream rulesets
    r = client.get(f"{API_URL}/api/v1/rulesets/tree", headers=headers_with_auth(), params={"prefix": PREFIX})
    if r.status_code != 200:
        fail(f"rulesets tree failed: {r.status_code} {r.text}")
    body = r.json()
    check_paths(body.get("items", []))
    ok(f"rulesets tree OK ({body['stats']['ruleset_count']} rulesets)")

    print("\nSMOKE TEST PASSED\n")
    client.close()


if __name__ == "__main__":
    main()
