"""Remove orchestrator - deletes pin requests by id or by filter."""

from __future__ import annotations

import logging
from typing import Sequence

from remotepin.errors import InvalidArgument, RemoteServiceError, RequiresForce
from remotepin.interfaces.client import PinningClient
from remotepin.models.records import FilterSet, RemoveOptions
from remotepin.orchestrator.ls import RemotePinLister
from remotepin.pinsvc.client import PinningServiceError
from remotepin.registry.services import ServiceRegistry

log = logging.getLogger(__name__)


class RemotePinRemover:
    """Removes pin requests from a remote pinning service.

    Explicit request ids are deleted exactly as given. Without ids the
    targets come from a filtered listing; when that matches more than one
    pin, nothing is deleted unless ``force`` is set.
    """

    def __init__(
        self,
        registry: ServiceRegistry,
        lister: RemotePinLister,
        logger: logging.Logger | None = None,
    ) -> None:
        self._registry = registry
        self._lister = lister
        self._log = logger or log

    async def rm(self, request_ids: Sequence[str], opts: RemoveOptions) -> list[str]:
        """Delete the targeted pin requests and return their ids."""
        request_ids = list(request_ids)
        if request_ids and opts.has_filters:
            raise InvalidArgument("request IDs cannot be combined with --name, --cid or --status")
        if any(not rid for rid in request_ids):
            raise InvalidArgument("empty request ID")

        filters = None
        if not request_ids:
            filters = self._lister.build_filters(opts.name, opts.cids, opts.statuses)

        client = await self._registry.client(opts.service)
        async with client:
            if filters is not None:
                request_ids = await self._matching_ids(client, filters)
                if len(request_ids) > 1 and not opts.force:
                    raise RequiresForce(len(request_ids), filters)
                if not request_ids:
                    self._log.info("No remote pins match %s", filters.describe())

            for request_id in request_ids:
                await self._delete(client, request_id)
        return request_ids

    async def _matching_ids(self, client: PinningClient, filters: FilterSet) -> list[str]:
        listing = self._lister.listing(client, filters)
        ids = [record.request_id async for record in listing]
        await listing.finish()
        return ids

    async def _delete(self, client: PinningClient, request_id: str) -> None:
        try:
            await client.delete(request_id)
        except PinningServiceError as exc:
            raise RemoteServiceError(
                f"removing pin with request ID {request_id}", exc,
            ) from exc
        self._log.info("Removed remote pin %s", request_id)
