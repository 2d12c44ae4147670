"""Pydantic models for the media library API.

Request models validate incoming payloads; response models shape the
``data`` part of the envelope. JSON keys are camelCase on the wire, and
requests also accept the snake_case field names.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from medialib.core.normalize import NUMERIC_TEXT_FIELDS, as_text

_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


class EntryCreate(BaseModel):
    """Payload for creating an entry."""

    model_config = _WIRE_CONFIG

    title: str = Field(..., min_length=1)
    type: Literal["MOVIE", "TV_SHOW"]
    director: str | None = None
    budget: str | None = None
    location: str | None = None
    duration: str | None = None
    year: str | None = None
    poster_url: str | None = None
    notes: str | None = None

    @field_validator(*NUMERIC_TEXT_FIELDS, mode="before")
    @classmethod
    def _numeric_to_text(cls, value: Any) -> Any:
        try:
            return as_text(value)
        except TypeError as e:
            raise ValueError(str(e)) from e


class EntryUpdate(EntryCreate):
    """Payload for a partial update. Every field is optional.

    ``title`` and ``type`` may be omitted but not set to null.
    """

    title: Annotated[str, Field(min_length=1)] | None = None
    type: Literal["MOVIE", "TV_SHOW"] | None = None

    @field_validator("title", "type")
    @classmethod
    def _required_not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("may not be null")
        return value


class EntryOut(BaseModel):
    """An entry as returned in response envelopes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    type: Literal["MOVIE", "TV_SHOW"]
    director: str | None = None
    budget: str | None = None
    location: str | None = None
    duration: str | None = None
    year: str | None = None
    poster_url: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EntryPageOut(BaseModel):
    """A page of entries for infinite scroll."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[EntryOut]
    total: int
    page: int
    limit: int
    has_more: bool
