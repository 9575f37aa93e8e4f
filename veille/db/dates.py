"""Publication date parsing."""

import re
from datetime import datetime

import pendulum

RELATIVE_RE = re.compile(
    r"^(?P<count>\d+)\s*(?P<unit>second|sec|minute|min|hour|hr|day|week|month|year)s?\s+ago$",
    re.IGNORECASE,
)
# A bare clock time carries no date.
TIME_ONLY_RE = re.compile(r"^\d{1,2}:\d{2}(:\d{2})?\s*([ap]\.?m\.?)?$", re.IGNORECASE)

UNITS = {
    "second": "seconds",
    "sec": "seconds",
    "minute": "minutes",
    "min": "minutes",
    "hour": "hours",
    "hr": "hours",
    "day": "days",
    "week": "weeks",
    "month": "months",
    "year": "years",
}


def parse_published(value: str, now: datetime) -> datetime:
    """
    Parse a SerpAPI date into a timestamp.

    Handles absolute dates and English relative ones ("3 hours ago").
    Anything unparsable yields ``now``.
    """
    text = (value or "").strip()
    if not text:
        return now

    anchor = pendulum.instance(now)
    if text.lower() == "yesterday":
        return anchor.subtract(days=1)

    match = RELATIVE_RE.match(text)
    if match:
        unit = UNITS[match.group("unit").lower()]
        return anchor.subtract(**{unit: int(match.group("count"))})

    if TIME_ONLY_RE.match(text):
        return now

    try:
        parsed = pendulum.parse(text, strict=False)
    except (ValueError, OverflowError, TypeError):
        return now
    if not isinstance(parsed, datetime):
        return now
    return parsed
