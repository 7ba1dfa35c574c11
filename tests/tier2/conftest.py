"""Tier 2 fixtures: real Kubo daemon."""

from __future__ import annotations

import json

import httpx
import pytest

from tests.conftest import KUBO_RPC_URL


@pytest.fixture(scope="session")
def kubo_available():
    """Check if local Kubo daemon is running. Skip tier2 tests if not."""
    try:
        r = httpx.post(f"{KUBO_RPC_URL}/api/v0/id", timeout=3)
        if r.status_code == 200:
            return True
        pytest.skip(f"Kubo daemon not available at {KUBO_RPC_URL}")
    except (httpx.ConnectError, httpx.TimeoutException):
        pytest.skip(f"Kubo daemon not available at {KUBO_RPC_URL}")


@pytest.fixture
async def sample_dir(kubo_available):
    """Add a one-file directory to Kubo; yields (dir_cid, file_cid)."""
    async with httpx.AsyncClient(timeout=10) as client:
        resp = await client.post(
            f"{KUBO_RPC_URL}/api/v0/add",
            params={"wrap-with-directory": "true", "pin": "false"},
            files={"file": ("hello.txt", b"remotepin tier2 sample")},
        )
        resp.raise_for_status()
        # NDJSON: the file entry, then the wrapping directory
        entries = [json.loads(line) for line in resp.text.splitlines() if line]
        file_cid = next(e["Hash"] for e in entries if e["Name"] == "hello.txt")
        dir_cid = next(e["Hash"] for e in entries if e["Name"] == "")
        yield dir_cid, file_cid
