"""Tests for the entry repository."""

from medialib.db import repo


def _create(session, title, media_type="MOVIE", **fields):
    entry = repo.create_entry(session, {"title": title, "type": media_type, **fields})
    repo.commit(session)
    return entry


class TestCreateEntry:
    def test_returns_entity_with_id(self, session):
        """Store assigns an id and echoes the stored fields."""
        entry = _create(session, "Inception", director="Christopher Nolan")

        assert entry.id > 0
        assert entry.title == "Inception"
        assert entry.type == "MOVIE"
        assert entry.director == "Christopher Nolan"
        assert entry.budget is None

    def test_ignores_unknown_fields(self, session):
        """Keys that are not columns, including id, are dropped."""
        entry = _create(session, "Heat", id=999, rating=5)

        assert entry.id != 999


class TestGetEntry:
    def test_returns_none_for_missing(self, session):
        assert repo.get_entry(session, 12345) is None

    def test_returns_stored_entry(self, session):
        created = _create(session, "Heat", budget="$60M")

        fetched = repo.get_entry(session, created.id)

        assert fetched is not None
        assert fetched.budget == "$60M"

    def test_timestamps_read_back_as_utc(self, session):
        created = _create(session, "Heat")
        session.expire_all()

        fetched = repo.get_entry(session, created.id)

        assert fetched.created_at.tzinfo is not None
        assert fetched.created_at.utcoffset().total_seconds() == 0
        assert fetched.created_at == created.created_at


class TestListEntries:
    def test_newest_first(self, session):
        """Entries come back in descending id order."""
        ids = [_create(session, f"Entry {i}").id for i in range(5)]

        items, total = repo.list_entries(session, offset=0, limit=10)

        assert [e.id for e in items] == sorted(ids, reverse=True)
        assert total == 5

    def test_offset_and_limit(self, session):
        ids = [_create(session, f"Entry {i}").id for i in range(7)]
        newest_first = sorted(ids, reverse=True)

        items, total = repo.list_entries(session, offset=3, limit=3)

        assert [e.id for e in items] == newest_first[3:6]
        assert total == 7

    def test_empty_store(self, session):
        items, total = repo.list_entries(session, offset=0, limit=10)

        assert items == []
        assert total == 0


class TestUpdateEntry:
    def test_applies_only_supplied_fields(self, session):
        created = _create(session, "Heat", director="Michael Mann", year="1995")

        updated = repo.update_entry(session, created.id, {"year": "1996"})
        repo.commit(session)

        assert updated.year == "1996"
        assert updated.director == "Michael Mann"
        assert updated.title == "Heat"
        assert updated.id == created.id

    def test_returns_none_for_missing(self, session):
        assert repo.update_entry(session, 404, {"title": "Nope"}) is None


class TestDeleteEntry:
    def test_deletes_existing(self, session):
        created = _create(session, "Heat")

        assert repo.delete_entry(session, created.id) is True
        repo.commit(session)
        assert repo.get_entry(session, created.id) is None

    def test_missing_returns_false(self, session):
        assert repo.delete_entry(session, 404) is False
