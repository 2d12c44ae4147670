"""Text normalization for fields that travel as either numbers or text.

``budget`` and ``year`` may come back from storage or from a client as a
number. Both the validation layer and the client data layer route them
through :func:`as_text` so there is one coercion rule.
"""

from __future__ import annotations

from typing import Any

# Fields whose wire value may be numeric but whose canonical form is text
NUMERIC_TEXT_FIELDS: tuple[str, ...] = ("budget", "year")

# Largest value SQLite stores in an INTEGER column
MAX_SQLITE_INTEGER = 2**63 - 1


def as_text(value: Any) -> str | None:
    """Coerce a numeric-or-text value to its canonical text form.

    Args:
        value: None, str, int or float.

    Returns:
        None for None, the value itself for str, decimal text for numbers.
        Integral floats drop the fractional part (2010.0 -> "2010").

    Raises:
        TypeError: For booleans and any other type.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise TypeError("expected text or number, got bool")
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(value)
    raise TypeError(f"expected text or number, got {type(value).__name__}")


def parse_id(value: Any) -> int:
    """Parse an entry id that may arrive as int or numeric text."""
    if isinstance(value, bool):
        raise TypeError("expected id, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"expected id, got {type(value).__name__}")


def parse_positive_int(value: Any, default: int) -> int:
    """Parse a query value as a positive int, falling back to ``default``.

    Missing, non-numeric, zero and negative values all yield ``default``.
    """
    if value is None:
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        return default
    return number if number > 0 else default
