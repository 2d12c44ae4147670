"""Entries API endpoints.

POST   /api/entries            - Create entry
GET    /api/entries            - List entries (page, limit)
GET    /api/entries/{entry_id} - Get entry
PUT    /api/entries/{entry_id} - Partially update entry
DELETE /api/entries/{entry_id} - Delete entry
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Body, Depends, Path
from fastapi.responses import JSONResponse

from medialib.api.app import get_db_session
from medialib.api.envelope import success_response
from medialib.core.normalize import MAX_SQLITE_INTEGER, parse_positive_int
from medialib.db.repo import DbSession
from medialib.library import entries as service
from medialib.models.domain import EntryEntity, EntryPage
from medialib.models.types import EntryOut, EntryPageOut

router = APIRouter()


def _entry_out(entry: EntryEntity) -> EntryOut:
    return EntryOut(**asdict(entry))


def _page_out(page: EntryPage) -> EntryPageOut:
    return EntryPageOut(
        items=[_entry_out(e) for e in page.items],
        total=page.total,
        page=page.page,
        limit=page.limit,
        has_more=page.has_more,
    )


@router.post("/entries", status_code=201)
def create_entry(
    payload: Any = Body(None),
    session: DbSession = Depends(get_db_session),
) -> JSONResponse:
    """Create an entry.

    Raises:
        ValidationError: 400 with per-field detail.
        StoreError: 400 if the insert fails.
    """
    entry = service.create_entry(session, payload)
    return success_response(_entry_out(entry), "Entry created successfully", status_code=201)


@router.get("/entries")
def list_entries(
    page: str | None = None,
    limit: str | None = None,
    session: DbSession = Depends(get_db_session),
) -> JSONResponse:
    """List entries newest first.

    Unparseable or non-positive page/limit values fall back to defaults.

    Raises:
        StoreError: 500 if the query fails.
    """
    result = service.list_entries(
        session,
        page=parse_positive_int(page, service.DEFAULT_PAGE),
        limit=parse_positive_int(limit, service.DEFAULT_LIMIT),
    )
    return success_response(_page_out(result), "Entries fetched successfully")


@router.get("/entries/{entry_id}")
def get_entry(
    entry_id: int = Path(..., ge=1, le=MAX_SQLITE_INTEGER),
    session: DbSession = Depends(get_db_session),
) -> JSONResponse:
    """Get a single entry.

    Raises:
        NotFound: 404 if entry not found.
    """
    entry = service.get_entry(session, entry_id)
    return success_response(_entry_out(entry), "Entry fetched successfully")


@router.put("/entries/{entry_id}")
def update_entry(
    entry_id: int = Path(..., ge=1, le=MAX_SQLITE_INTEGER),
    payload: Any = Body(None),
    session: DbSession = Depends(get_db_session),
) -> JSONResponse:
    """Apply a partial update.

    Raises:
        NotFound: 404 if entry not found.
        ValidationError: 400 with per-field detail.
        StoreError: 400 if the update fails.
    """
    entry = service.update_entry(session, entry_id, payload)
    return success_response(_entry_out(entry), "Entry updated successfully")


@router.delete("/entries/{entry_id}")
def delete_entry(
    entry_id: int = Path(..., ge=1, le=MAX_SQLITE_INTEGER),
    session: DbSession = Depends(get_db_session),
) -> JSONResponse:
    """Delete an entry.

    Raises:
        NotFound: 404 if entry not found.
        StoreError: 400 if the delete fails.
    """
    service.delete_entry(session, entry_id)
    return success_response(None, "Entry deleted successfully")
