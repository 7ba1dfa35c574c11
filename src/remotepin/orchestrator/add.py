"""Add orchestrator - submits a pin request and optionally waits for it."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Sequence, TypeVar

from remotepin.errors import (
    Interrupted,
    InvalidArgument,
    PinFailed,
    RemoteServiceError,
)
from remotepin.interfaces.client import PinningClient
from remotepin.interfaces.resolver import ContentResolver
from remotepin.interfaces.swarm import SwarmConnector
from remotepin.ipfs.swarm import SwarmConnectError
from remotepin.models.records import AddOptions, PinRecord, PinStatus
from remotepin.pinsvc.client import PinningServiceError
from remotepin.registry.services import ServiceRegistry

log = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.5  # seconds

T = TypeVar("T")


class RemotePinAdder:
    """Pins one object to a remote pinning service.

    1. Resolve the target path to a CID
    2. Submit the pin request
    3. Connect to every delegate the service suggests (best effort)
    4. Unless running in background mode, poll the request until it is
       pinned or failed
    """

    def __init__(
        self,
        registry: ServiceRegistry,
        resolver: ContentResolver,
        swarm: SwarmConnector,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        logger: logging.Logger | None = None,
    ) -> None:
        self._registry = registry
        self._resolver = resolver
        self._swarm = swarm
        self._poll_interval = poll_interval
        self._log = logger or log

    async def add(
        self,
        paths: Sequence[str],
        opts: AddOptions,
        cancel: asyncio.Event | None = None,
    ) -> PinRecord:
        """Pin the single object named in ``paths``.

        Setting ``cancel`` interrupts whichever step is in flight (resolve,
        submit, delegate dial or the synchronous wait) with Interrupted, as
        does ``opts.timeout`` elapsing during the wait. Without either the
        wait lasts until the pin settles.
        """
        if len(paths) != 1:
            raise InvalidArgument("expecting one CID argument")

        cancel = cancel or asyncio.Event()
        client = await self._registry.client(opts.service)

        async with client:
            cid = await _race(self._resolver.resolve(paths[0]), cancel)
            try:
                record = await _race(client.add(cid, name=opts.name), cancel)
            except PinningServiceError as exc:
                raise RemoteServiceError(f"adding pin for {cid}", exc) from exc
            self._log.info(
                "Pin request %s for %s is %s", record.request_id, cid, record.status.value,
            )

            await self._connect_delegates(record, cancel)

            if not opts.background:
                record = await self._wait(client, record, cancel, opts.timeout)
        return record

    async def _connect_delegates(self, record: PinRecord, cancel: asyncio.Event) -> None:
        for addr in record.delegates:
            try:
                await _race(self._swarm.connect(addr), cancel, record.request_id)
            except SwarmConnectError as exc:
                self._log.info("error connecting to remote pin delegate %s: %s", addr, exc)

    async def _wait(
        self,
        client: PinningClient,
        record: PinRecord,
        cancel: asyncio.Event,
        timeout: float | None,
    ) -> PinRecord:
        """Poll until the pin request reaches a terminal status."""
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout
        request_id = record.request_id

        while True:
            try:
                record = await _race(client.get_status(request_id), cancel, request_id)
            except PinningServiceError as exc:
                raise RemoteServiceError(f"failed to query pin {request_id}", exc) from exc

            if record.status is PinStatus.PINNED:
                self._log.info("Pin request %s is pinned", request_id)
                return record
            if record.status is PinStatus.FAILED:
                raise PinFailed(record)
            self._log.debug("Pin request %s is %s", request_id, record.status.value)

            delay = self._poll_interval
            if deadline is not None:
                delay = min(delay, deadline - loop.time())
                if delay <= 0:
                    raise Interrupted(request_id)
            try:
                await asyncio.wait_for(cancel.wait(), timeout=delay)
            except asyncio.TimeoutError:
                continue
            raise Interrupted(request_id)


async def _race(
    coro: Awaitable[T], cancel: asyncio.Event, request_id: str | None = None,
) -> T:
    """Await ``coro`` unless ``cancel`` fires first; then raise Interrupted."""
    task = asyncio.ensure_future(coro)
    if cancel.is_set():
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise Interrupted(request_id)

    waiter = asyncio.ensure_future(cancel.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not task.done():
            task.cancel()
            # Let the call unwind (close its connection) before moving on
            await asyncio.gather(task, return_exceptions=True)
    if task.cancelled() and cancel.is_set():
        raise Interrupted(request_id)
    return task.result()
