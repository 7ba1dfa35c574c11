"""Record types for pin requests, service credentials and operation options."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from remotepin.errors import InvalidArgument

_CID_V0 = re.compile(r"^Qm[1-9A-HJ-NP-Za-km-z]{44}$")
_CID_V1 = {
    "b": re.compile(r"^b[a-z2-7]{20,}$"),  # base32
    "B": re.compile(r"^B[A-Z2-7]{20,}$"),  # base32upper
    "k": re.compile(r"^k[0-9a-z]{20,}$"),  # base36
    "z": re.compile(r"^z[1-9A-HJ-NP-Za-km-z]{20,}$"),  # base58btc
    "f": re.compile(r"^f[0-9a-f]{20,}$"),  # base16
}


def validate_cid(raw: str) -> str:
    """Return ``raw`` if it looks like a CID, else raise InvalidArgument."""
    if _CID_V0.match(raw):
        return raw
    pattern = _CID_V1.get(raw[:1])
    if pattern is not None and pattern.match(raw):
        return raw
    raise InvalidArgument(f"CID {raw} cannot be parsed")


class PinStatus(str, Enum):
    """Lifecycle status of a pin request on the remote service."""

    QUEUED = "queued"
    PINNING = "pinning"
    PINNED = "pinned"
    FAILED = "failed"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> PinStatus:
        return cls.UNKNOWN

    @property
    def is_terminal(self) -> bool:
        return self in (PinStatus.PINNED, PinStatus.FAILED)

    @classmethod
    def parse_filter(cls, token: str) -> PinStatus:
        """Parse a user-supplied status filter token.

        ``unknown`` is not something a service can be asked to filter on, so
        it is rejected along with anything unrecognised.
        """
        status = cls(token)
        if status is cls.UNKNOWN:
            raise InvalidArgument(f"status {token} is not valid")
        return status


@dataclass
class PinRecord:
    """A pin request as reported by the remote pinning service."""

    request_id: str
    cid: str
    status: PinStatus = PinStatus.UNKNOWN
    name: str | None = None
    delegates: list[str] = field(default_factory=list)
    created: str | None = None  # ISO 8601
    info: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> PinRecord:
        """Build a record from a Pinning Service API ``PinStatus`` object.

        Raises ValueError when the object does not have the documented shape.
        """
        pin = data.get("pin") or {}
        if not isinstance(pin, dict):
            raise ValueError(f"pin is {type(pin).__name__}, expected an object")
        raw_delegates = data.get("delegates") or []
        if not isinstance(raw_delegates, list) or not all(isinstance(d, str) for d in raw_delegates):
            raise ValueError("delegates is not a list of multiaddrs")
        info = data.get("info") or {}
        if not isinstance(info, dict):
            raise ValueError(f"info is {type(info).__name__}, expected an object")

        delegates: list[str] = []
        for d in raw_delegates:
            if d not in delegates:
                delegates.append(d)
        return cls(
            request_id=str(data.get("requestid", "")),
            cid=str(pin.get("cid", "")),
            status=PinStatus(data.get("status", "unknown")),
            name=pin.get("name"),
            delegates=delegates,
            created=data.get("created"),
            info=dict(info),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "RequestID": self.request_id,
            "Name": self.name or "",
            "Delegates": list(self.delegates),
            "Status": self.status.value,
            "Cid": self.cid,
        }


@dataclass
class ServiceCredential:
    """Registry entry for one remote pinning service."""

    name: str
    url: str
    key: str

    def to_config(self) -> dict[str, str]:
        return {"Name": self.name, "URL": self.url, "Key": self.key}

    @classmethod
    def from_config(cls, name: str, data: dict[str, Any]) -> ServiceCredential:
        return cls(
            name=data.get("Name") or name,
            url=data.get("URL", ""),
            key=data.get("Key", ""),
        )


@dataclass(frozen=True)
class ServiceEntry:
    """What ``service ls`` exposes: never the key."""

    name: str
    url: str


@dataclass(frozen=True)
class FilterSet:
    """Validated list filters sent to the pinning service."""

    name: str | None = None
    cids: tuple[str, ...] = ()
    statuses: tuple[PinStatus, ...] = ()

    @property
    def empty(self) -> bool:
        return self.name is None and not self.cids and not self.statuses

    def describe(self) -> str:
        parts = []
        if self.name is not None:
            parts.append(f"name={self.name!r}")
        if self.cids:
            parts.append(f"cid={','.join(self.cids)}")
        if self.statuses:
            parts.append(f"status={','.join(s.value for s in self.statuses)}")
        if not parts:
            return "no filter"
        return "filter " + " ".join(parts)


# ── Per-operation options ───────────────────────────────


@dataclass
class AddOptions:
    """Options for submitting one pin request."""

    service: str = ""
    name: str | None = None
    background: bool = True
    timeout: float | None = None  # seconds; only bounds the synchronous wait


@dataclass
class ListOptions:
    """Raw, unvalidated list criteria as supplied by the caller."""

    service: str = ""
    name: str | None = None
    cids: list[str] = field(default_factory=list)
    statuses: list[str] = field(default_factory=list)


@dataclass
class RemoveOptions(ListOptions):
    force: bool = False

    @property
    def has_filters(self) -> bool:
        return self.name is not None or bool(self.cids) or bool(self.statuses)
