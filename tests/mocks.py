"""Mock implementations of all external-facing components."""

from __future__ import annotations

from dataclasses import replace

from remotepin.errors import PathResolutionError
from remotepin.interfaces.repo import RepoConfig
from remotepin.ipfs.swarm import SwarmConnectError
from remotepin.models.records import FilterSet, PinRecord, PinStatus
from remotepin.pinsvc.client import PinningServiceError
from remotepin.pinsvc.stream import PinStream


class MockPinningClient:
    """Implements PinningClient protocol against in-memory pin requests."""

    def __init__(
        self,
        statuses: list[PinStatus] | None = None,
        delegates: list[str] | None = None,
    ) -> None:
        self.pins: dict[str, PinRecord] = {}
        # Statuses handed out one per get_status() call; the last one sticks
        self.status_script: list[PinStatus] = list(statuses or [])
        self.delegates = list(delegates or [])
        self.add_error: Exception | None = None
        self.list_error: Exception | None = None
        self.fail_delete: set[str] = set()

        self.add_calls: list[tuple[str, str | None]] = []
        self.status_calls: list[str] = []
        self.delete_calls: list[str] = []
        self.ls_calls: list[FilterSet] = []
        self.opened = 0
        self.closed = 0
        self._next_id = 0

    async def __aenter__(self) -> MockPinningClient:
        self.opened += 1
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.closed += 1

    def seed(self, *records: PinRecord) -> None:
        """Test helper: pre-load pin requests, kept in insertion order."""
        for r in records:
            self.pins[r.request_id] = r

    async def add(self, cid: str, name: str | None = None) -> PinRecord:
        self.add_calls.append((cid, name))
        if self.add_error is not None:
            raise self.add_error
        self._next_id += 1
        record = PinRecord(
            request_id=f"req-{self._next_id}",
            cid=cid,
            name=name,
            status=PinStatus.QUEUED,
            delegates=list(self.delegates),
        )
        self.pins[record.request_id] = record
        return replace(record)

    async def get_status(self, request_id: str) -> PinRecord:
        self.status_calls.append(request_id)
        record = self.pins.get(request_id)
        if record is None:
            raise PinningServiceError("NOT_FOUND", status_code=404)
        if self.status_script:
            status = self.status_script.pop(0) if len(self.status_script) > 1 else self.status_script[0]
            record.status = status
        return replace(record)

    async def delete(self, request_id: str) -> None:
        self.delete_calls.append(request_id)
        if request_id in self.fail_delete or request_id not in self.pins:
            raise PinningServiceError("NOT_FOUND", status_code=404)
        del self.pins[request_id]

    def ls(self, filters: FilterSet) -> PinStream:
        self.ls_calls.append(filters)
        return PinStream(self._iter(filters))

    async def _iter(self, filters: FilterSet):
        for record in list(self.pins.values()):
            if filters.name is not None and record.name != filters.name:
                continue
            if filters.cids and record.cid not in filters.cids:
                continue
            if filters.statuses and record.status not in filters.statuses:
                continue
            yield replace(record)
        if self.list_error is not None:
            raise self.list_error


class MockClientFactory:
    """Stands in for PinningServiceClient(url, key); always hands out one client."""

    def __init__(self, client: MockPinningClient) -> None:
        self.client = client
        self.calls: list[tuple[str, str]] = []

    def __call__(self, url: str, key: str) -> MockPinningClient:
        self.calls.append((url, key))
        return self.client


class MockResolver:
    """Implements ContentResolver protocol. Bare CIDs resolve to themselves."""

    def __init__(self, paths: dict[str, str] | None = None) -> None:
        self.paths = dict(paths or {})
        self.resolve_calls: list[str] = []

    async def resolve(self, path: str) -> str:
        self.resolve_calls.append(path)
        if path in self.paths:
            return self.paths[path]
        if path.startswith("/"):
            raise PathResolutionError(path, "no link named in mock")
        return path


class MockSwarm:
    """Implements SwarmConnector protocol."""

    def __init__(self, unreachable: set[str] | None = None) -> None:
        self.unreachable = set(unreachable or ())
        self.connect_calls: list[str] = []

    async def connect(self, multiaddr: str) -> None:
        self.connect_calls.append(multiaddr)
        if multiaddr in self.unreachable:
            raise SwarmConnectError(multiaddr, "dial backoff")


class MemoryConfigRepo:
    """Implements ConfigRepo protocol over a dict shared between handles."""

    def __init__(self, backing: dict) -> None:
        self._backing = backing
        self.closed = False

    async def read_config(self) -> RepoConfig:
        return RepoConfig.from_document(dict(self._backing))

    async def write_config(self, cfg: RepoConfig) -> None:
        self._backing.clear()
        self._backing.update(cfg.to_document())

    async def close(self) -> None:
        self.closed = True


class MemoryRepoOpener:
    """Implements RepoOpener; records every handle it opens."""

    def __init__(self, backing: dict | None = None) -> None:
        self.backing = backing if backing is not None else {}
        self.handles: list[MemoryConfigRepo] = []

    async def __call__(self, root: str) -> MemoryConfigRepo:
        repo = MemoryConfigRepo(self.backing)
        self.handles.append(repo)
        return repo
