# utils.py
from datetime import datetime
from typing import Optional

import pytz

EPOCH = datetime(1970, 1, 1, tzinfo=pytz.UTC)


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO-8601 string (or epoch millis) into an aware UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=pytz.UTC)
        except (OverflowError, OSError, ValueError):
            return None
    try:
        parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return pytz.UTC.localize(parsed)
    return parsed.astimezone(pytz.UTC)


def to_local(moment: datetime, tz_name: str) -> datetime:
    return moment.astimezone(pytz.timezone(tz_name))
