"""Entry operations behind the HTTP surface.

Validates payloads, calls the repository, and raises the error taxonomy
from :mod:`medialib.core.errors`. Store failures are rolled back and
reported as :class:`StoreError` with the status of the operation that
failed.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from medialib.core.errors import NotFound, StoreError
from medialib.core.normalize import MAX_SQLITE_INTEGER
from medialib.db import repo
from medialib.db.repo import DbSession
from medialib.library.validation import validate_create, validate_update
from medialib.models.domain import EntryEntity, EntryPage

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def _store_failure(session: DbSession, message: str, error: Exception, status_code: int) -> StoreError:
    logger.error(f"{message}: {error}")
    repo.rollback(session)
    return StoreError(message, detail=str(error), status_code=status_code)


def _require_storable_id(entry_id: int) -> None:
    """Ids outside the INTEGER range can never match a row."""
    if not 1 <= entry_id <= MAX_SQLITE_INTEGER:
        raise NotFound()


def create_entry(session: DbSession, payload: Any) -> EntryEntity:
    """Validate and store a new entry.

    Raises:
        ValidationError: If the payload breaks the create rules.
        StoreError: 400 if the insert fails.
    """
    fields = validate_create(payload)
    try:
        entry = repo.create_entry(session, fields)
        repo.commit(session)
    except SQLAlchemyError as e:
        raise _store_failure(session, "Failed to create entry", e, 400) from e

    logger.info(f"Created entry {entry.id} ({entry.type}): {entry.title}")
    return entry


def list_entries(
    session: DbSession, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT
) -> EntryPage:
    """Get one page of entries, newest first.

    Args:
        session: Database session.
        page: 1-based page number.
        limit: Page size, capped at MAX_LIMIT.

    Returns:
        EntryPage where has_more is true iff entries remain past this page.

    Raises:
        StoreError: 500 if the query fails.
    """
    limit = min(max(limit, 1), MAX_LIMIT)
    # Keep the row offset within what SQLite accepts
    page = min(max(page, 1), MAX_SQLITE_INTEGER // limit)
    skip = (page - 1) * limit

    try:
        items, total = repo.list_entries(session, offset=skip, limit=limit)
    except SQLAlchemyError as e:
        raise _store_failure(session, "Failed to fetch entries", e, 500) from e

    return EntryPage(
        items=items,
        total=total,
        page=page,
        limit=limit,
        has_more=skip + len(items) < total,
    )


def get_entry(session: DbSession, entry_id: int) -> EntryEntity:
    """Get a single entry.

    Raises:
        NotFound: If no entry has this id.
        StoreError: 500 if the query fails.
    """
    _require_storable_id(entry_id)
    try:
        entry = repo.get_entry(session, entry_id)
    except SQLAlchemyError as e:
        raise _store_failure(session, "Failed to fetch entry", e, 500) from e
    if entry is None:
        raise NotFound()
    return entry


def update_entry(session: DbSession, entry_id: int, payload: Any) -> EntryEntity:
    """Apply a partial update to an existing entry.

    Existence is checked before the payload is validated, so an unknown id
    is a 404 even when the payload is also invalid.

    Raises:
        NotFound: If no entry has this id.
        ValidationError: If a supplied field breaks the rules.
        StoreError: 400 if the update fails.
    """
    _require_storable_id(entry_id)
    try:
        existing = repo.get_entry(session, entry_id)
    except SQLAlchemyError as e:
        raise _store_failure(session, "Failed to update entry", e, 400) from e
    if existing is None:
        raise NotFound()

    fields = validate_update(payload)
    try:
        entry = repo.update_entry(session, entry_id, fields)
        repo.commit(session)
    except SQLAlchemyError as e:
        raise _store_failure(session, "Failed to update entry", e, 400) from e

    # Deleted between the lookup and the update
    if entry is None:
        raise NotFound()

    logger.info(f"Updated entry {entry_id}: {sorted(fields)}")
    return entry


def delete_entry(session: DbSession, entry_id: int) -> None:
    """Hard-delete an entry.

    Raises:
        NotFound: If no entry has this id.
        StoreError: 400 if the delete fails.
    """
    _require_storable_id(entry_id)
    try:
        deleted = repo.delete_entry(session, entry_id)
        repo.commit(session)
    except SQLAlchemyError as e:
        raise _store_failure(session, "Failed to delete entry", e, 400) from e

    if not deleted:
        raise NotFound()

    logger.info(f"Deleted entry {entry_id}")
