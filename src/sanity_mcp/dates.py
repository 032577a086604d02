"""Resolve ISO-8601 or natural-language date strings to UTC timestamps."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import UTC, datetime

import dateparser

logger = logging.getLogger(__name__)

DateParser = Callable[[str], str | None]

# dateparser understands clock times but not these words.
_TIME_WORDS = {
    re.compile(r"\bnoon\b", re.IGNORECASE): "12:00",
    re.compile(r"\bmidnight\b", re.IGNORECASE): "00:00",
}

_DATEPARSER_SETTINGS = {
    "PREFER_DATES_FROM": "future",
    "TIMEZONE": "UTC",
    "RETURN_AS_TIMEZONE_AWARE": True,
    "TO_TIMEZONE": "UTC",
}


def to_iso(value: datetime) -> str:
    """Format as ``2025-04-04T18:36:00.000Z``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(value: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_date_string(value: str | None, *, now: datetime | None = None) -> str | None:
    """Return an ISO-8601 UTC string, or None when the input cannot be resolved.

    ISO input is taken as-is; anything else goes through dateparser relative
    to ``now``.
    """
    if not value or not value.strip():
        return None

    iso = parse_iso(value)
    if iso is not None:
        return to_iso(iso)

    text = value
    for pattern, replacement in _TIME_WORDS.items():
        text = pattern.sub(replacement, text)

    settings = dict(_DATEPARSER_SETTINGS)
    settings["RELATIVE_BASE"] = (now or datetime.now(UTC)).replace(tzinfo=None)
    parsed = dateparser.parse(text, settings=settings)
    if parsed is None:
        logger.debug("Could not resolve date string %r", value)
        return None
    return to_iso(parsed)
