"""Orchestrators for the add, ls and rm remote pin operations."""

from remotepin.orchestrator.add import RemotePinAdder
from remotepin.orchestrator.ls import PinListing, RemotePinLister
from remotepin.orchestrator.rm import RemotePinRemover

__all__ = ["RemotePinAdder", "RemotePinLister", "PinListing", "RemotePinRemover"]
