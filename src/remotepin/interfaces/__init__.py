"""Protocol interfaces for the collaborators remotepin depends on."""

from remotepin.interfaces.client import PinningClient
from remotepin.interfaces.repo import ConfigRepo, RepoConfig, RepoOpener
from remotepin.interfaces.resolver import ContentResolver
from remotepin.interfaces.swarm import SwarmConnector

__all__ = [
    "PinningClient",
    "ConfigRepo", "RepoConfig", "RepoOpener",
    "ContentResolver",
    "SwarmConnector",
]
