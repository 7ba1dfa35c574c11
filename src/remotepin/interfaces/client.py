"""PinningClient protocol - typed access to a remote Pinning Service API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from remotepin.models.records import FilterSet, PinRecord

if TYPE_CHECKING:
    from remotepin.pinsvc.stream import PinStream


class PinningClient(Protocol):
    """Remote pinning service operations consumed by the orchestrators.

    Implementations are async context managers; leaving the context releases
    any transport resources.
    """

    async def __aenter__(self) -> PinningClient:
        ...

    async def __aexit__(self, *exc_info: object) -> None:
        ...

    async def add(self, cid: str, name: str | None = None) -> PinRecord:
        """Submit a pin request for ``cid``."""
        ...

    async def get_status(self, request_id: str) -> PinRecord:
        ...

    async def delete(self, request_id: str) -> None:
        ...

    def ls(self, filters: FilterSet) -> PinStream:
        """Stream pin requests matching ``filters``.

        The returned stream yields records in service order; its terminal
        error is obtained separately from ``PinStream.wait()``.
        """
        ...
