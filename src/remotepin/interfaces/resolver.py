"""ContentResolver protocol - turns an IPFS path into a CID."""

from __future__ import annotations

from typing import Protocol


class ContentResolver(Protocol):
    async def resolve(self, path: str) -> str:
        """Resolve ``path`` to the CID of the object it names.

        Raises PathResolutionError on failure.
        """
        ...
