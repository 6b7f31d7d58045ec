"""
Parse-or-zero helpers for values read from a stored gradebook document.

Stored documents are edited by hand and by older frontends, so numbers may
arrive as strings, empty strings or nulls. Every numeric field is read through
these helpers instead of converting ad hoc at the call site.
"""
from __future__ import annotations

import math
import typing as t
from datetime import date, datetime


def to_number(value: t.Any) -> float:
    """Convert a stored value to a float, falling back to 0.

    :param value: Raw value (number, numeric string, None, anything else).
    :return: The parsed float, or 0.0 when the value is not a finite number.
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def to_int(value: t.Any) -> int:
    """Like :func:`to_number` but truncated to an int."""
    return int(to_number(value))


def parse_date(value: t.Any) -> t.Optional[date]:
    """Parse an ISO ``YYYY-MM-DD`` due date.

    A datetime string is accepted and truncated to its date part. Anything
    unparseable returns None.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None
