"""HTTP client for the IPFS Pinning Service API."""

from remotepin.pinsvc.client import PinningServiceClient, PinningServiceError
from remotepin.pinsvc.stream import PinStream

__all__ = ["PinningServiceClient", "PinningServiceError", "PinStream"]
