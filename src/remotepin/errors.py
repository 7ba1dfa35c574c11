"""Error taxonomy for remote pinning operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from remotepin.models.records import FilterSet, PinRecord


class RemotePinError(Exception):
    """Base class for every error surfaced to the command layer."""


class InvalidArgument(RemotePinError):
    """Malformed or contradictory caller input."""


class NotConfigured(RemotePinError):
    """Referenced pinning service is empty or absent from the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        if not name:
            super().__init__("remote pinning service name not specified")
        else:
            super().__init__(f"remote pinning service {name!r} is not known")


class AlreadyExists(RemotePinError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"remote pinning service {name!r} already present")


class RemoteServiceError(RemotePinError):
    """A failure reported by the pinning service client.

    ``operation`` describes what was being attempted, including the request
    id or CID involved. The client error is chained as ``__cause__``.
    """

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        msg = operation if cause is None else f"{operation} ({cause})"
        super().__init__(msg)


class PinFailed(RemotePinError):
    def __init__(self, record: PinRecord) -> None:
        self.record = record
        super().__init__(
            f"failed to pin {record.cid} (request ID {record.request_id})"
        )


class Interrupted(RemotePinError):
    def __init__(self, request_id: str | None = None) -> None:
        self.request_id = request_id
        if request_id is None:
            super().__init__("adding remote pin interrupted")
        else:
            super().__init__(f"waiting for pin {request_id} interrupted")


class RequiresForce(RemotePinError):
    """Filter-derived removal matched several pins without ``force``."""

    def __init__(self, count: int, filters: FilterSet) -> None:
        self.count = count
        self.filters = filters
        super().__init__(
            f"{count} pins match {filters.describe()}; "
            "multiple pins may be removed, use --force"
        )


class PathResolutionError(RemotePinError):
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"cannot resolve {path}: {reason}")
