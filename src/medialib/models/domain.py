"""Domain models for the media library.

Pure Python dataclasses, independent of SQLAlchemy, used by the service
layer so routes never touch ORM rows directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

MediaType = Literal["MOVIE", "TV_SHOW"]

# Entry fields a client may set, in display order
ENTRY_FIELDS: tuple[str, ...] = (
    "title",
    "type",
    "director",
    "budget",
    "location",
    "duration",
    "year",
    "poster_url",
    "notes",
)


@dataclass
class EntryEntity:
    """Domain model for a stored media entry."""

    id: int
    title: str
    type: MediaType
    director: str | None = None
    budget: str | None = None
    location: str | None = None
    duration: str | None = None
    year: str | None = None
    poster_url: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class EntryPage:
    """One page of entries, newest first."""

    items: list[EntryEntity]
    total: int
    page: int
    limit: int
    has_more: bool
