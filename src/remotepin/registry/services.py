"""Service registry - named remote pinning service credentials."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from remotepin.errors import AlreadyExists, InvalidArgument, NotConfigured
from remotepin.interfaces.client import PinningClient
from remotepin.interfaces.repo import ConfigRepo, RepoConfig, RepoOpener
from remotepin.models.records import ServiceCredential, ServiceEntry
from remotepin.pinsvc.client import PinningServiceClient
from remotepin.storage.sqlite import open_repo

log = logging.getLogger(__name__)

ClientFactory = Callable[[str, str], PinningClient]


class ServiceRegistry:
    """CRUD over the services stored in the repository config.

    Every call opens the repo, reads the current config, and closes the repo
    again, so edits made by other processes between calls are never
    clobbered by a stale copy.
    """

    def __init__(
        self,
        repo_root: str,
        opener: RepoOpener = open_repo,
        client_factory: ClientFactory = PinningServiceClient,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repo_root = repo_root
        self._open = opener
        self._client_factory = client_factory
        self._log = logger or log

    @asynccontextmanager
    async def _repo(self) -> AsyncIterator[ConfigRepo]:
        repo = await self._open(self._repo_root)
        try:
            yield repo
        finally:
            await repo.close()

    async def _read(self) -> RepoConfig:
        async with self._repo() as repo:
            return await repo.read_config()

    # ── Mutations ──────────────────────────────────────────

    async def add_service(self, name: str, url: str, key: str) -> None:
        if not name:
            raise InvalidArgument("service name not given")
        if not url:
            raise InvalidArgument("service url not given")
        if not key:
            raise InvalidArgument("service key not given")

        async with self._repo() as repo:
            cfg = await repo.read_config()
            if name in cfg.services:
                raise AlreadyExists(name)
            cfg.services[name] = ServiceCredential(name=name, url=url, key=key)
            await repo.write_config(cfg)
        self._log.info("Added remote pinning service %s (%s)", name, url)

    async def remove_service(self, name: str) -> None:
        """Remove ``name``; removing an unknown service is not an error."""
        async with self._repo() as repo:
            cfg = await repo.read_config()
            if cfg.services.pop(name, None) is None:
                self._log.debug("Service %s not present, nothing to remove", name)
            else:
                self._log.info("Removed remote pinning service %s", name)
            await repo.write_config(cfg)

    # ── Queries ────────────────────────────────────────────

    async def list_services(self) -> list[ServiceEntry]:
        cfg = await self._read()
        return [
            ServiceEntry(name=name, url=cfg.services[name].url)
            for name in sorted(cfg.services)
        ]

    async def resolve_service(self, name: str) -> tuple[str, str]:
        """Return ``(url, key)`` for ``name``."""
        if not name:
            raise NotConfigured(name)
        cfg = await self._read()
        svc = cfg.services.get(name)
        if svc is None:
            raise NotConfigured(name)
        return svc.url, svc.key

    async def client(self, name: str) -> PinningClient:
        """Build a pinning client for the named service."""
        url, key = await self.resolve_service(name)
        self._log.debug("Using remote pinning service %s at %s", name, url)
        return self._client_factory(url, key)
