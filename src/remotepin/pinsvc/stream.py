"""Paired record stream and terminal error signal for pin listings."""

from __future__ import annotations

import logging
from typing import AsyncIterator

from remotepin.models.records import PinRecord

log = logging.getLogger(__name__)


class PinStream:
    """Records from a listing plus a separate completion signal.

    Iterating yields records in the order the service returns them. The
    iterator always ends with a plain ``StopAsyncIteration``: if the
    underlying producer failed, the failure is held back and handed out by
    ``wait()``. Consumers must call ``wait()`` after iterating; it drains
    anything left unconsumed first, so it only reports success once the
    producer has really finished.
    """

    def __init__(self, source: AsyncIterator[PinRecord]) -> None:
        self._source = source
        self._closed = False
        self._error: Exception | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> PinStream:
        return self

    async def __anext__(self) -> PinRecord:
        if self._closed:
            raise StopAsyncIteration
        try:
            return await self._source.__anext__()
        except StopAsyncIteration:
            self._closed = True
            raise
        except Exception as exc:
            self._closed = True
            self._error = exc
            raise StopAsyncIteration from None

    async def wait(self) -> Exception | None:
        """Wait for the producer to finish and return its error, if any."""
        discarded = 0
        async for _ in self:
            discarded += 1
        if discarded:
            log.debug("Discarded %d unconsumed pin records", discarded)
        return self._error

    async def aclose(self) -> None:
        """Stop the producer without waiting for the rest of the listing."""
        if self._closed:
            return
        self._closed = True
        aclose = getattr(self._source, "aclose", None)
        if aclose is not None:
            await aclose()
