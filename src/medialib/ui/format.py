"""Display formatting for entry fields. Display only; never persisted."""

from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"[^0-9]")


def format_budget(budget: str | int | float | None) -> str:
    """Render a budget for the table.

    Text that already carries a "$" is shown as-is. Otherwise the digits
    are read as a whole-dollar amount ("5000000" -> "$5,000,000",
    "150 million" -> "$150"). Text with no digits is shown unchanged.
    """
    if budget is None:
        return ""
    text = str(budget)
    if "$" in text:
        return text

    digits = _NON_DIGITS.sub("", text)
    if not digits:
        return text
    return f"${int(digits):,}"


def format_type(media_type: str) -> str:
    return "Movie" if media_type == "MOVIE" else "TV Show"
