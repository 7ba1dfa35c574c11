"""Data models for the remotepin client."""

from remotepin.models.config import ClientConfig
from remotepin.models.records import (
    AddOptions,
    FilterSet,
    ListOptions,
    PinRecord,
    PinStatus,
    RemoveOptions,
    ServiceCredential,
    ServiceEntry,
    validate_cid,
)

__all__ = [
    "ClientConfig",
    "AddOptions", "ListOptions", "RemoveOptions",
    "FilterSet", "PinRecord", "PinStatus",
    "ServiceCredential", "ServiceEntry",
    "validate_cid",
]
