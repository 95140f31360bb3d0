"""Date manipulation utilities"""

from datetime import date, datetime
from typing import Optional, Union


def parse_date(value: Union[date, datetime, str, None]) -> Optional[date]:
    """
    Parse a payment date from a date, datetime or ISO-8601 string.

    Returns None for missing values. Raises ValueError for unparseable text
    or unsupported types.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        # Records store timestamps look like 2024-03-01T10:00:00+00:00 or ...Z
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        if "T" in text or " " in text:
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text)
    raise ValueError(f"Unsupported date value: {value!r}")


def chronological_key(paid_on: Optional[date]) -> tuple:
    """Sort key placing undated records after dated ones"""
    return (paid_on is None, paid_on or date.min)
