"""Wires the registry, IPFS adapters and orchestrators together."""

from __future__ import annotations

import functools
import logging

from remotepin.ipfs.resolver import KuboContentResolver
from remotepin.ipfs.swarm import KuboSwarmConnector
from remotepin.models.config import ClientConfig
from remotepin.orchestrator.add import RemotePinAdder
from remotepin.orchestrator.ls import RemotePinLister
from remotepin.orchestrator.rm import RemotePinRemover
from remotepin.pinsvc.client import PinningServiceClient
from remotepin.registry.services import ServiceRegistry
from remotepin.storage.sqlite import open_repo

log = logging.getLogger(__name__)


class RemotePinning:
    """Everything one command invocation needs, built from a ClientConfig.

    Components are plain attributes so tests can swap in fakes after
    construction.
    """

    def __init__(self, cfg: ClientConfig, logger: logging.Logger | None = None) -> None:
        self._cfg = cfg
        self.log = logger or log

        client_factory = functools.partial(
            PinningServiceClient,
            timeout=cfg.request_timeout,
            page_size=cfg.page_size,
        )
        self.registry = ServiceRegistry(
            cfg.repo_path, open_repo, client_factory, logger=self.log,
        )
        self.resolver = KuboContentResolver(cfg.kubo_rpc_url, cfg.kubo_timeout)
        self.swarm = KuboSwarmConnector(cfg.kubo_rpc_url, cfg.kubo_timeout)

        self.lister = RemotePinLister(self.registry, logger=self.log)
        self.remover = RemotePinRemover(self.registry, self.lister, logger=self.log)
        self.adder = RemotePinAdder(
            self.registry,
            self.resolver,
            self.swarm,
            poll_interval=cfg.poll_interval,
            logger=self.log,
        )

    def service_name(self, name: str | None) -> str:
        """The service named on the command line, else the configured default."""
        return name or self._cfg.default_service
