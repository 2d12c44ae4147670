"""Tests for display formatting."""

import pytest

from medialib.ui.format import format_budget, format_type


class TestFormatBudget:
    @pytest.mark.parametrize(
        "budget,expected",
        [
            ("$3M", "$3M"),
            ("5000000", "$5,000,000"),
            (5000000, "$5,000,000"),
            ("160 million", "$160"),
            ("1,200", "$1,200"),
            ("unknown", "unknown"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_formats(self, budget, expected):
        assert format_budget(budget) == expected


class TestFormatType:
    def test_movie(self):
        assert format_type("MOVIE") == "Movie"

    def test_tv_show(self):
        assert format_type("TV_SHOW") == "TV Show"
