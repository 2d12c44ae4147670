"""Client-side entry representation and wire normalization.

Whatever shape the service sends back (numeric or text ids, numeric
budget/year, null or missing optional fields), callers always receive a
:class:`MediaEntry` with the same set of attributes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from medialib.core.normalize import NUMERIC_TEXT_FIELDS, as_text, parse_id
from medialib.models.domain import MediaType

# Text fields that are always present on a MediaEntry ("" when empty)
TEXT_FIELDS: tuple[str, ...] = ("director", "budget", "location", "duration", "year")

# Wire (camelCase) name for each snake_case attribute that differs
_WIRE_NAMES = {"poster_url": "posterUrl"}
_ATTR_NAMES = {v: k for k, v in _WIRE_NAMES.items()}


@dataclass
class MediaEntry:
    """Canonical client-side entry."""

    id: int
    title: str
    type: MediaType
    director: str = ""
    budget: str = ""
    location: str = ""
    duration: str = ""
    year: str = ""
    poster_url: str | None = None
    notes: str | None = None

    def fields(self) -> dict[str, Any]:
        """Settable fields, without the id."""
        return {
            "title": self.title,
            "type": self.type,
            "director": self.director,
            "budget": self.budget,
            "location": self.location,
            "duration": self.duration,
            "year": self.year,
            "poster_url": self.poster_url,
            "notes": self.notes,
        }


@dataclass
class EntryResult:
    """A single entry returned by create/update, with the server message."""

    item: MediaEntry
    message: str | None = None


@dataclass
class EntryPageResult:
    """One page of entries returned by list."""

    items: list[MediaEntry] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10
    has_more: bool = False
    message: str | None = None


def _text(value: Any) -> str:
    text = as_text(value)
    return "" if text is None else text


def _optional(value: Any) -> str | None:
    return None if value is None else _text(value)


def _wire_get(raw: Mapping[str, Any], name: str) -> Any:
    wire = _WIRE_NAMES.get(name)
    if wire is not None and wire in raw:
        return raw[wire]
    return raw.get(name)


def normalize_entry(raw: Mapping[str, Any]) -> MediaEntry:
    """Normalize an entry as received from the service.

    Raises:
        KeyError: If the id is missing.
        TypeError, ValueError: If the id or a field has an unusable type.
    """
    return MediaEntry(
        id=parse_id(raw["id"]),
        title=_text(raw.get("title")),
        type=raw.get("type"),
        **{name: _text(raw.get(name)) for name in TEXT_FIELDS},
        poster_url=_optional(_wire_get(raw, "poster_url")),
        notes=_optional(raw.get("notes")),
    )


def normalize_media_type(value: Any) -> str:
    """Coerce a display or enum type to the wire enum ("TV show" -> "TV_SHOW")."""
    return str(value).strip().replace(" ", "_").upper()


def to_request_payload(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Build a request body from snake_case or camelCase fields.

    ``id`` is dropped, ``type`` goes to the enum form and budget/year go
    to text. Keys absent from ``fields`` stay absent, so the result can
    serve as a partial update.
    """
    payload: dict[str, Any] = {}
    for key, value in fields.items():
        name = _ATTR_NAMES.get(key, key)
        if name == "id":
            continue
        if name == "type" and value is not None:
            value = normalize_media_type(value)
        elif name in NUMERIC_TEXT_FIELDS:
            value = as_text(value)
        payload[_WIRE_NAMES.get(name, name)] = value
    return payload
