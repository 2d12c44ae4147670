"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping domain logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.
Functions never commit; callers decide the transaction boundary.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Mapping

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from medialib.db.schema import Entry
from medialib.models.domain import ENTRY_FIELDS, EntryEntity

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]


# ============================================================================
# Converters: SQLAlchemy -> Domain
# ============================================================================


def _as_utc(value: datetime | None) -> datetime | None:
    """SQLite drops tzinfo on read; stored timestamps are always UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def _entry_to_entity(entry: Entry) -> EntryEntity:
    """Convert SQLAlchemy Entry to domain entity."""
    return EntryEntity(
        id=entry.id,
        title=entry.title,
        type=entry.type,
        director=entry.director,
        budget=entry.budget,
        location=entry.location,
        duration=entry.duration,
        year=entry.year,
        poster_url=entry.poster_url,
        notes=entry.notes,
        created_at=_as_utc(entry.created_at),
        updated_at=_as_utc(entry.updated_at),
    )


def _settable(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Drop keys that are not client-settable columns."""
    return {k: v for k, v in fields.items() if k in ENTRY_FIELDS}


# ============================================================================
# Entry Repository
# ============================================================================


def create_entry(session: DbSession, fields: Mapping[str, Any]) -> EntryEntity:
    """Insert an entry and flush so the store assigns its id."""
    entry = Entry(**_settable(fields))
    session.add(entry)
    session.flush()
    return _entry_to_entity(entry)


def get_entry(session: DbSession, entry_id: int) -> EntryEntity | None:
    """Get entry by ID."""
    entry = session.get(Entry, entry_id)
    return _entry_to_entity(entry) if entry else None


def count_entries(session: DbSession) -> int:
    """Count all stored entries."""
    return session.scalar(select(func.count()).select_from(Entry)) or 0


def list_entries(
    session: DbSession, offset: int, limit: int
) -> tuple[list[EntryEntity], int]:
    """Get a slice of entries, newest first, with the total count.

    Ordering is by id descending, which is creation order since ids are
    never reused.
    """
    rows = session.scalars(
        select(Entry).order_by(Entry.id.desc()).offset(offset).limit(limit)
    ).all()
    return [_entry_to_entity(r) for r in rows], count_entries(session)


def update_entry(
    session: DbSession, entry_id: int, fields: Mapping[str, Any]
) -> EntryEntity | None:
    """Apply the supplied fields to an entry.

    Fields not present in ``fields`` are left untouched.
    """
    entry = session.get(Entry, entry_id)
    if entry is None:
        return None
    for name, value in _settable(fields).items():
        setattr(entry, name, value)
    session.flush()
    return _entry_to_entity(entry)


def delete_entry(session: DbSession, entry_id: int) -> bool:
    """Hard-delete an entry. Returns False if it did not exist."""
    entry = session.get(Entry, entry_id)
    if entry is None:
        return False
    session.delete(entry)
    session.flush()
    return True


# ============================================================================
# Transaction Management
# ============================================================================


def commit(session: DbSession) -> None:
    """Commit current transaction."""
    session.commit()


def rollback(session: DbSession) -> None:
    """Roll back current transaction."""
    session.rollback()
