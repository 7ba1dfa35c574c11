"""List orchestrator - filtered, streaming listing of remote pins."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable

from remotepin.errors import RemoteServiceError
from remotepin.interfaces.client import PinningClient
from remotepin.models.records import (
    FilterSet,
    ListOptions,
    PinRecord,
    PinStatus,
    validate_cid,
)
from remotepin.pinsvc.stream import PinStream
from remotepin.registry.services import ServiceRegistry

log = logging.getLogger(__name__)


class PinListing:
    """Records relayed from a PinStream, followed by ``finish()``.

    Records come out in the order the service sent them. ``finish()`` must
    be awaited once iteration is over: it waits for the stream's error
    signal and raises RemoteServiceError if the listing failed part way.
    """

    def __init__(self, stream: PinStream, filters: FilterSet) -> None:
        self._stream = stream
        self._filters = filters

    @property
    def filters(self) -> FilterSet:
        return self._filters

    def __aiter__(self) -> AsyncIterator[PinRecord]:
        return self._stream.__aiter__()

    async def finish(self) -> None:
        err = await self._stream.wait()
        if err is not None:
            raise RemoteServiceError(
                f"listing remote pins ({self._filters.describe()})", err,
            ) from err

    async def aclose(self) -> None:
        await self._stream.aclose()


class RemotePinLister:
    """Builds a FilterSet from caller criteria and lists matching pins."""

    def __init__(
        self,
        registry: ServiceRegistry,
        logger: logging.Logger | None = None,
    ) -> None:
        self._registry = registry
        self._log = logger or log

    @staticmethod
    def build_filters(
        name: str | None = None,
        cids: Iterable[str] = (),
        statuses: Iterable[str] = (),
    ) -> FilterSet:
        """Validate criteria; fails on the first bad CID or status token."""
        return FilterSet(
            name=name,
            cids=tuple(validate_cid(c) for c in cids),
            statuses=tuple(PinStatus.parse_filter(s) for s in statuses),
        )

    def listing(self, client: PinningClient, filters: FilterSet) -> PinListing:
        self._log.debug("Listing remote pins with %s", filters.describe())
        return PinListing(client.ls(filters), filters)

    @asynccontextmanager
    async def ls(self, opts: ListOptions) -> AsyncIterator[PinListing]:
        """Open a listing on ``opts.service``.

        Filters are validated and the service resolved before anything is
        sent over the network.
        """
        filters = self.build_filters(opts.name, opts.cids, opts.statuses)
        client = await self._registry.client(opts.service)
        async with client:
            listing = self.listing(client, filters)
            try:
                yield listing
            finally:
                await listing.aclose()

    async def collect(self, opts: ListOptions) -> list[PinRecord]:
        async with self.ls(opts) as listing:
            records = [record async for record in listing]
            await listing.finish()
        return records
