"""HTTP client for the entries API.

One method per operation. Each sends a normalized request, unwraps the
response envelope and normalizes the returned entries. Every failure
raises :class:`ClientError`, which keeps the failure category so callers
can tell a rejected payload from a missing entry or a dead server.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Mapping

import httpx

from medialib.client.models import (
    EntryPageResult,
    EntryResult,
    MediaEntry,
    normalize_entry,
    to_request_payload,
)
from medialib.config import load_settings

logger = logging.getLogger(__name__)

ErrorKind = Literal["validation", "not_found", "store", "transport"]

DEFAULT_TIMEOUT = 10.0


class ClientError(Exception):
    """A failed entries API call.

    Attributes:
        kind: validation, not_found, store or transport.
        message: Generic description of the failed operation.
        detail: Server-supplied error detail, if any.
        status_code: HTTP status, or None when no response was received.
        server_message: The envelope message, if any.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        detail: Any = None,
        status_code: int | None = None,
        server_message: str | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail
        self.status_code = status_code
        self.server_message = server_message


def _error_kind(status_code: int, payload: Any) -> ErrorKind:
    if status_code == 404:
        return "not_found"
    error = payload.get("error") if isinstance(payload, dict) else None
    if status_code in (400, 422) and isinstance(error, list):
        return "validation"
    return "store"


def _unwrap(payload: Any) -> Any:
    """Return the envelope's data, tolerating a bare payload."""
    if isinstance(payload, dict) and payload.get("data") is not None:
        return payload["data"]
    return payload


def _unwrap_item(payload: Any) -> Any:
    data = _unwrap(payload)
    if isinstance(data, dict) and isinstance(data.get("item"), dict):
        return data["item"]
    return data


def _message(payload: Any) -> str | None:
    return payload.get("message") if isinstance(payload, dict) else None


class EntryClient:
    """Client for the entries API.

    Args:
        base_url: API root. Defaults to MEDIALIB_API_URL.
        http: Preconfigured httpx.Client (e.g. a FastAPI TestClient).
            When given, base_url and timeout are ignored.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str | None = None,
        http: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._owns_http = http is None
        if http is None:
            http = httpx.Client(
                base_url=base_url or load_settings().api_base_url,
                timeout=timeout,
            )
        self._http = http

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> EntryClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, path: str, failure: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded success envelope.

        Raises:
            ClientError: On transport failure, a non-JSON body, or an error
                envelope / status.
        """
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ClientError("transport", failure, detail=str(e)) from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning(f"{method} {path} returned non-JSON body ({response.status_code})")
            raise ClientError(
                "transport", failure, detail="Response was not JSON", status_code=response.status_code
            ) from e

        if response.is_error or (isinstance(payload, dict) and payload.get("success") is False):
            raise ClientError(
                _error_kind(response.status_code, payload),
                failure,
                detail=payload.get("error") if isinstance(payload, dict) else None,
                status_code=response.status_code,
                server_message=_message(payload),
            )
        return payload

    def _entry(self, payload: Any, failure: str) -> EntryResult:
        try:
            item = normalize_entry(_unwrap_item(payload))
        except (KeyError, TypeError, ValueError) as e:
            raise ClientError("transport", failure, detail=f"Malformed entry: {e}") from e
        return EntryResult(item=item, message=_message(payload))

    def create_entry(self, entry: Mapping[str, Any] | MediaEntry) -> EntryResult:
        """Create an entry from its fields (an id, if present, is ignored)."""
        failure = "Failed to create entry"
        fields = entry.fields() if isinstance(entry, MediaEntry) else entry
        try:
            body = to_request_payload(fields)
        except TypeError as e:
            raise ClientError("validation", failure, detail=str(e)) from e
        payload = self._request("POST", "/api/entries", failure, json=body)
        return self._entry(payload, failure)

    def get_entries(self, page: int = 1, limit: int = 10) -> EntryPageResult:
        """Fetch one page of entries, newest first."""
        failure = "Failed to fetch entries"
        payload = self._request(
            "GET", "/api/entries", failure, params={"page": page, "limit": limit}
        )
        data = _unwrap(payload)
        if not isinstance(data, dict):
            raise ClientError("transport", failure, detail="Malformed page")

        try:
            items = [normalize_entry(raw) for raw in data.get("items") or []]
        except (KeyError, TypeError, ValueError) as e:
            raise ClientError("transport", failure, detail=f"Malformed entry: {e}") from e

        page_limit = data.get("limit") or limit
        has_more = data.get("hasMore")
        return EntryPageResult(
            items=items,
            total=data.get("total") or 0,
            page=data.get("page") or page,
            limit=page_limit,
            has_more=has_more if has_more is not None else len(items) == page_limit,
            message=_message(payload),
        )

    def update_entry(
        self, entry_id: int | str, fields: Mapping[str, Any] | MediaEntry
    ) -> EntryResult:
        """Apply a partial update. Only the supplied fields are sent."""
        failure = "Failed to update entry"
        if isinstance(fields, MediaEntry):
            fields = fields.fields()
        try:
            body = to_request_payload(fields)
        except TypeError as e:
            raise ClientError("validation", failure, detail=str(e)) from e
        payload = self._request("PUT", f"/api/entries/{entry_id}", failure, json=body)
        return self._entry(payload, failure)

    def delete_entry(self, entry_id: int | str) -> str | None:
        """Delete an entry. Returns the server message."""
        payload = self._request("DELETE", f"/api/entries/{entry_id}", "Failed to delete entry")
        return _message(payload)
