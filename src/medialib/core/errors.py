"""Error taxonomy for the entry service.

Each error carries the HTTP status and envelope message it maps to, so
the API layer can render any of them without knowing which operation
raised it.
"""

from __future__ import annotations

from typing import Any


class MediaLibError(Exception):
    """Base class for failures reported through the response envelope."""

    status_code: int = 400

    def __init__(self, message: str, detail: Any = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class ValidationError(MediaLibError):
    """Payload is malformed or missing required fields.

    ``detail`` is a list of ``{"field": ..., "message": ...}`` items, one
    per violated field.
    """

    status_code = 400

    def __init__(self, errors: list[dict[str, str]], message: str = "Validation failed"):
        super().__init__(message, detail=errors)

    @property
    def fields(self) -> list[str]:
        return [e["field"] for e in self.detail]


class NotFound(MediaLibError):
    """No entry with the requested id."""

    status_code = 404

    def __init__(self, message: str = "Entry not found", detail: Any = None):
        super().__init__(message, detail=detail)


class StoreError(MediaLibError):
    """The underlying store failed.

    400 on write paths, 500 on the list path.
    """

    status_code = 400
