"""Kubo content resolver - resolves IPFS paths via the Kubo HTTP RPC."""

from __future__ import annotations

import logging

import httpx

from remotepin.errors import PathResolutionError

log = logging.getLogger(__name__)


class KuboContentResolver:
    """Resolves paths such as ``/ipfs/<cid>/dir/file`` or a bare CID.

    Uses /api/v0/resolve with ``recursive=true`` so IPNS names and
    sub-paths end up at the CID of the final object.
    """

    def __init__(
        self,
        kubo_rpc_url: str = "http://127.0.0.1:5001",
        timeout: int = 30,
    ) -> None:
        self._base_url = kubo_rpc_url.rstrip("/")
        self._timeout = timeout

    def _url(self, endpoint: str) -> str:
        return f"{self._base_url}/api/v0/{endpoint}"

    async def resolve(self, path: str) -> str:
        path = path.strip()
        if not path:
            raise PathResolutionError(path, "empty path")
        arg = path if path.startswith("/") else f"/ipfs/{path}"

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(
                    self._url("resolve"),
                    params={"arg": arg, "recursive": "true"},
                )
        except httpx.HTTPError as exc:
            raise PathResolutionError(path, f"kubo unreachable: {exc}") from exc

        if resp.status_code != 200:
            raise PathResolutionError(path, kubo_error_message(resp))

        try:
            body = resp.json()
        except ValueError as exc:
            raise PathResolutionError(path, f"malformed resolve response: {exc}") from exc
        resolved = body.get("Path") if isinstance(body, dict) else None
        if not isinstance(resolved, str):
            raise PathResolutionError(path, f"unexpected resolve result {body!r}")
        # "/ipfs/<cid>"
        parts = [p for p in resolved.split("/") if p]
        if len(parts) < 2 or parts[0] != "ipfs":
            raise PathResolutionError(path, f"unexpected resolve result {resolved!r}")
        log.debug("Resolved %s to %s", path, parts[1])
        return parts[1]


def kubo_error_message(resp: httpx.Response) -> str:
    """Kubo reports RPC errors as {"Message": ..., "Code": ..., "Type": "error"}."""
    try:
        body = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}"
    message = body.get("Message") if isinstance(body, dict) else None
    return str(message) if message else f"HTTP {resp.status_code}"
