"""Tests for entry payload validation."""

import pytest

from medialib.core.errors import ValidationError
from medialib.library.validation import validate_create, validate_update


class TestValidateCreate:
    def test_minimal_payload(self):
        """Only title and type are required."""
        fields = validate_create({"title": "Inception", "type": "MOVIE"})

        assert fields["title"] == "Inception"
        assert fields["type"] == "MOVIE"
        assert fields["director"] is None
        assert fields["poster_url"] is None

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_create({"title": "", "type": "MOVIE"})

        assert exc_info.value.fields == ["title"]

    def test_reports_every_violated_field(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_create({"type": "DOCUMENTARY"})

        assert set(exc_info.value.fields) == {"title", "type"}
        assert exc_info.value.status_code == 400

    def test_lowercase_type_rejected(self):
        with pytest.raises(ValidationError):
            validate_create({"title": "Heat", "type": "movie"})

    def test_numeric_budget_and_year_become_text(self):
        fields = validate_create(
            {"title": "Inception", "type": "MOVIE", "budget": 160000000, "year": 2010}
        )

        assert fields["budget"] == "160000000"
        assert fields["year"] == "2010"

    def test_camel_case_poster_url(self):
        fields = validate_create(
            {"title": "Heat", "type": "MOVIE", "posterUrl": "https://img.example/heat.jpg"}
        )

        assert fields["poster_url"] == "https://img.example/heat.jpg"

    def test_non_text_director_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_create({"title": "Heat", "type": "MOVIE", "director": 42})

        assert exc_info.value.fields == ["director"]

    def test_unknown_keys_ignored(self):
        fields = validate_create({"title": "Heat", "type": "MOVIE", "id": 5, "rating": 4})

        assert "id" not in fields
        assert "rating" not in fields

    def test_non_object_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_create(["Heat"])

        assert exc_info.value.fields == ["body"]


class TestValidateUpdate:
    def test_empty_payload_is_valid(self):
        assert validate_update({}) == {}

    def test_returns_only_supplied_fields(self):
        fields = validate_update({"notes": "Rewatch", "year": 1995})

        assert fields == {"notes": "Rewatch", "year": "1995"}

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_update({"title": ""})

        assert exc_info.value.fields == ["title"]

    def test_null_title_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_update({"title": None})

        assert exc_info.value.fields == ["title"]

    def test_null_type_rejected(self):
        with pytest.raises(ValidationError):
            validate_update({"type": None})

    def test_null_optional_field_clears(self):
        assert validate_update({"notes": None}) == {"notes": None}

    def test_invalid_type_rejected(self):
        with pytest.raises(ValidationError):
            validate_update({"type": "PODCAST"})
