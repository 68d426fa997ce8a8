from __future__ import annotations

from datetime import date, datetime
from typing import Any


def parse_timestamp(value: Any) -> date | datetime | None:
    """Parse a stored date or timestamp. A bare ``YYYY-MM-DD`` stays a date."""
    if value in (None, ""):
        return None
    if isinstance(value, (datetime, date)):
        return value
    text = str(value).strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
