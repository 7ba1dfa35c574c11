"""Kubo swarm connector - dials pin delegates through the local node."""

from __future__ import annotations

import logging

import httpx

from remotepin.ipfs.resolver import kubo_error_message

log = logging.getLogger(__name__)


class SwarmConnectError(Exception):
    def __init__(self, multiaddr: str, reason: str) -> None:
        self.multiaddr = multiaddr
        super().__init__(f"connecting to {multiaddr}: {reason}")


class KuboSwarmConnector:
    """Opens libp2p connections via /api/v0/swarm/connect.

    The multiaddr must carry a /p2p/<peer-id> component; Kubo rejects it
    otherwise and that is reported like any other connection failure.
    """

    def __init__(
        self,
        kubo_rpc_url: str = "http://127.0.0.1:5001",
        timeout: int = 30,
    ) -> None:
        self._base_url = kubo_rpc_url.rstrip("/")
        self._timeout = timeout

    async def connect(self, multiaddr: str) -> None:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(
                    f"{self._base_url}/api/v0/swarm/connect",
                    params={"arg": multiaddr},
                )
        except httpx.HTTPError as exc:
            raise SwarmConnectError(multiaddr, str(exc)) from exc

        if resp.status_code != 200:
            raise SwarmConnectError(multiaddr, kubo_error_message(resp))
        log.debug("Connected to %s", multiaddr)
