"""Remote pinning service registry."""

from remotepin.registry.services import ServiceRegistry

__all__ = ["ServiceRegistry"]
