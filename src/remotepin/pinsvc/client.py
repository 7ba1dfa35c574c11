"""Pinning Service API client - pin requests over HTTPS with bearer auth."""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator
from urllib.parse import quote

import httpx

from remotepin.models.records import FilterSet, PinRecord
from remotepin.pinsvc.stream import PinStream

log = logging.getLogger(__name__)


class PinningServiceError(Exception):
    """An error reported by, or while talking to, a pinning service.

    ``status_code`` is None for transport failures and malformed responses.
    """

    def __init__(
        self, reason: str, status_code: int | None = None, details: str | None = None
    ) -> None:
        self.reason = reason
        self.status_code = status_code
        self.details = details
        msg = reason if status_code is None else f"HTTP {status_code} {reason}"
        if details:
            msg = f"{msg}: {details}"
        super().__init__(msg)


class PinningServiceClient:
    """Talks to one remote pinning service.

    Implements the subset of the IPFS Pinning Service API used by remotepin:
    - POST   /pins            submit a pin request
    - GET    /pins/{id}       fetch a pin request's status
    - DELETE /pins/{id}       remove a pin request
    - GET    /pins            list pin requests, paging backwards by ``before``
    """

    def __init__(
        self,
        url: str,
        key: str,
        timeout: int = 60,
        page_size: int = 1000,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = url.rstrip("/")
        self._page_size = page_size
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Authorization": f"Bearer {key}"},
            timeout=httpx.Timeout(timeout, connect=10),
            transport=transport,
        )

    async def __aenter__(self) -> PinningServiceClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # ── Requests ───────────────────────────────────────────

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise PinningServiceError(f"{method} {path}: {exc}") from exc
        if resp.is_error:
            raise _error_from(resp)
        return resp

    async def _json(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        resp = await self._request(method, path, **kwargs)
        try:
            data = resp.json()
        except ValueError as exc:
            raise PinningServiceError(f"malformed response from {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PinningServiceError(f"malformed response from {path}: expected an object")
        return data

    # ── Operations ─────────────────────────────────────────

    async def add(self, cid: str, name: str | None = None) -> PinRecord:
        body: dict[str, Any] = {"cid": cid}
        if name is not None:
            body["name"] = name
        data = await self._json("POST", "/pins", json=body)
        record = _record(data, "/pins")
        log.debug("Submitted pin for %s: request %s (%s)", cid, record.request_id, record.status.value)
        return record

    async def get_status(self, request_id: str) -> PinRecord:
        path = _pin_path(request_id)
        return _record(await self._json("GET", path), path)

    async def delete(self, request_id: str) -> None:
        await self._request("DELETE", _pin_path(request_id))
        log.debug("Deleted pin request %s", request_id)

    def ls(self, filters: FilterSet) -> PinStream:
        return PinStream(self._iter_pins(filters))

    async def _iter_pins(self, filters: FilterSet) -> AsyncIterator[PinRecord]:
        params: dict[str, str] = {"limit": str(self._page_size)}
        if filters.name is not None:
            params["name"] = filters.name
            params["match"] = "exact"
        if filters.cids:
            params["cid"] = ",".join(filters.cids)
        if filters.statuses:
            params["status"] = ",".join(s.value for s in filters.statuses)

        seen = 0
        while True:
            data = await self._json("GET", "/pins", params=params)
            results = data.get("results") or []
            if not isinstance(results, list) or not all(isinstance(r, dict) for r in results):
                raise PinningServiceError("malformed response from /pins: results is not a list of objects")
            total = int(data.get("count", 0))
            for raw in results:
                yield _record(raw, "/pins")
            seen += len(results)

            # Short page or everything counted: no more results
            if len(results) < self._page_size or seen >= total:
                return
            before = results[-1].get("created")
            if not before:
                return
            params["before"] = before


def _pin_path(request_id: str) -> str:
    # The id is opaque and may hold any character, including "/" and "?"
    segment = quote(request_id, safe="")
    if segment in (".", ".."):
        segment = segment.replace(".", "%2E")
    return f"/pins/{segment}"


def _record(data: dict[str, Any], path: str) -> PinRecord:
    try:
        return PinRecord.from_api(data)
    except ValueError as exc:
        raise PinningServiceError(f"malformed response from {path}: {exc}") from exc


def _error_from(resp: httpx.Response) -> PinningServiceError:
    """Decode the API's ``{"error": {"reason", "details"}}`` failure body."""
    reason = resp.reason_phrase or "error"
    details: str | None = None
    try:
        body = resp.json()
    except ValueError:
        details = resp.text[:200] or None
    else:
        err = body.get("error") if isinstance(body, dict) else None
        if isinstance(err, dict):
            reason = err.get("reason") or reason
            details = err.get("details")
    return PinningServiceError(reason, status_code=resp.status_code, details=details)
