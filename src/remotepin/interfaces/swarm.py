"""SwarmConnector protocol - dials peers through the local IPFS node."""

from __future__ import annotations

from typing import Protocol


class SwarmConnector(Protocol):
    async def connect(self, multiaddr: str) -> None:
        """Open a connection to the peer at ``multiaddr``.

        Raises SwarmConnectError if the node could not connect.
        """
        ...
