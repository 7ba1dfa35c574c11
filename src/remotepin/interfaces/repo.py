"""ConfigRepo protocol - the persisted repository configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Protocol

from remotepin.models.records import ServiceCredential

SERVICES_SECTION = "RemotePinServices"


@dataclass
class RepoConfig:
    """The repository config document.

    Only the remote pinning services sub-mapping is modelled; every other
    top-level key is carried through ``extra`` so a write never drops
    settings owned by someone else.
    """

    services: dict[str, ServiceCredential] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> RepoConfig:
        extra = {k: v for k, v in doc.items() if k != SERVICES_SECTION}
        section = doc.get(SERVICES_SECTION) or {}
        services = {
            name: ServiceCredential.from_config(name, entry)
            for name, entry in (section.get("Services") or {}).items()
        }
        return cls(services=services, extra=extra)

    def to_document(self) -> dict[str, Any]:
        doc = dict(self.extra)
        doc[SERVICES_SECTION] = {
            "Services": {name: svc.to_config() for name, svc in self.services.items()},
        }
        return doc


class ConfigRepo(Protocol):
    """An open handle on a repository's configuration."""

    async def read_config(self) -> RepoConfig:
        ...

    async def write_config(self, cfg: RepoConfig) -> None:
        ...

    async def close(self) -> None:
        ...


RepoOpener = Callable[[str], Awaitable[ConfigRepo]]
