"""Publication date parsing and display formatting."""

from __future__ import annotations

import datetime
from typing import Optional
from zoneinfo import ZoneInfo

DEFAULT_LOCALE = "pt-BR"

# Abbreviated month names, January first.
MONTH_ABBREVIATIONS = {
    "pt-BR": ["jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez"],
    "en-US": ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
}


def parse_timestamp(value: str) -> datetime.datetime:
    """Parse a CMS timestamp such as ``2021-03-25T19:25:28+0000``.

    Raises:
        ValueError: If *value* is not an ISO-8601 timestamp.
    """
    try:
        return datetime.datetime.strptime(value, "%Y-%m-%dT%H:%M:%S%z")
    except ValueError:
        parsed = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=datetime.timezone.utc)
        return parsed


def format_publication_date(
    value: Optional[str],
    locale: str = DEFAULT_LOCALE,
    timezone: str = "UTC",
) -> str:
    """Format a timestamp as ``dd <abbreviated month> yyyy`` in *locale*.

    The timestamp is shifted into *timezone* before the calendar day is taken.
    An absent timestamp formats as an empty string.

    Examples:
        >>> format_publication_date("2021-03-25T19:25:28+0000")
        '25 mar 2021'
    """
    if not value:
        return ""
    try:
        months = MONTH_ABBREVIATIONS[locale]
    except KeyError:
        raise ValueError(f"Unsupported locale: {locale}") from None

    zone = datetime.timezone.utc if timezone == "UTC" else ZoneInfo(timezone)
    moment = parse_timestamp(value).astimezone(zone)
    return f"{moment.day:02d} {months[moment.month - 1]} {moment.year:04d}"
