"""Conversions between ISO wedding dates and six-digit URL date tokens."""

import re
from datetime import date

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_DATE_TOKEN = re.compile(r"^\d{6}$")


def format_date_token(iso_date: str | None) -> str | None:
    """Convert "2026-12-21" to "261221".

    Returns:
        The token, or None if the input is not an ISO date.
    """
    if not iso_date:
        return None
    match = _ISO_DATE.match(iso_date.strip())
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        date(year, month, day)
    except ValueError:
        return None
    return f"{year % 100:02d}{month:02d}{day:02d}"


def parse_date_token(token: str | None) -> str | None:
    """Convert "261221" to "2026-12-21".

    Tokens always refer to the 2000s. Impossible dates such as "260231"
    are rejected.

    Returns:
        The ISO date, or None if the token is malformed.
    """
    if not token:
        return None
    raw = token.strip()
    if not _DATE_TOKEN.match(raw):
        return None
    try:
        parsed = date(2000 + int(raw[:2]), int(raw[2:4]), int(raw[4:6]))
    except ValueError:
        return None
    return parsed.isoformat()
