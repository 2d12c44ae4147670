"""Tests for entry service operations and store-failure mapping."""

import pytest
from sqlalchemy.exc import OperationalError

from medialib.core.errors import NotFound, StoreError, ValidationError
from medialib.core.normalize import MAX_SQLITE_INTEGER
from medialib.db import repo
from medialib.library import entries


def _broken(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("database is locked"))


class TestListEntries:
    def test_has_more_math(self, session):
        for i in range(25):
            entries.create_entry(session, {"title": f"Entry {i}", "type": "MOVIE"})

        page3 = entries.list_entries(session, page=3, limit=10)

        assert len(page3.items) == 5
        assert page3.has_more is False
        assert page3.total == 25

    def test_clamps_out_of_range_arguments(self, session):
        page = entries.list_entries(session, page=-2, limit=500)

        assert page.page == 1
        assert page.limit == entries.MAX_LIMIT

    def test_oversized_page_keeps_offset_in_range(self, session):
        entries.create_entry(session, {"title": "Heat", "type": "MOVIE"})

        page = entries.list_entries(session, page=10**20, limit=7)

        assert page.page == MAX_SQLITE_INTEGER // 7
        assert (page.page - 1) * page.limit <= MAX_SQLITE_INTEGER
        assert page.items == []
        assert page.total == 1
        assert page.has_more is False

    def test_store_failure_is_500(self, session, monkeypatch):
        monkeypatch.setattr(repo, "list_entries", _broken)

        with pytest.raises(StoreError) as exc_info:
            entries.list_entries(session)

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Failed to fetch entries"


class TestWriteFailures:
    def test_create_store_failure_is_400(self, session, monkeypatch):
        monkeypatch.setattr(repo, "create_entry", _broken)

        with pytest.raises(StoreError) as exc_info:
            entries.create_entry(session, {"title": "Heat", "type": "MOVIE"})

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Failed to create entry"

    def test_validation_runs_before_store(self, session, monkeypatch):
        monkeypatch.setattr(repo, "create_entry", _broken)

        with pytest.raises(ValidationError):
            entries.create_entry(session, {"title": "", "type": "MOVIE"})

    def test_update_store_failure_is_400(self, session, monkeypatch):
        created = entries.create_entry(session, {"title": "Heat", "type": "MOVIE"})
        monkeypatch.setattr(repo, "update_entry", _broken)

        with pytest.raises(StoreError) as exc_info:
            entries.update_entry(session, created.id, {"notes": "x"})

        assert exc_info.value.status_code == 400

    def test_delete_store_failure_is_400(self, session, monkeypatch):
        created = entries.create_entry(session, {"title": "Heat", "type": "MOVIE"})
        monkeypatch.setattr(repo, "delete_entry", _broken)

        with pytest.raises(StoreError) as exc_info:
            entries.delete_entry(session, created.id)

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Failed to delete entry"


class TestNotFound:
    def test_get_missing(self, session):
        with pytest.raises(NotFound):
            entries.get_entry(session, 1)

    def test_update_missing(self, session):
        with pytest.raises(NotFound):
            entries.update_entry(session, 1, {"title": "Ghost"})

    def test_delete_missing(self, session):
        with pytest.raises(NotFound):
            entries.delete_entry(session, 1)

    @pytest.mark.parametrize("entry_id", [0, -1, MAX_SQLITE_INTEGER + 1])
    def test_unstorable_ids_are_missing(self, session, entry_id):
        """Ids outside the INTEGER range never reach the store."""
        with pytest.raises(NotFound):
            entries.get_entry(session, entry_id)
        with pytest.raises(NotFound):
            entries.update_entry(session, entry_id, {"title": "Ghost"})
        with pytest.raises(NotFound):
            entries.delete_entry(session, entry_id)


class TestApiStoreFailure:
    def test_list_failure_returns_500_envelope(self, client, monkeypatch):
        monkeypatch.setattr(repo, "list_entries", _broken)

        response = client.get("/api/entries")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Failed to fetch entries"
        assert "database is locked" in body["error"]
