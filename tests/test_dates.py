"""Tests for date resolution."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from sanity_mcp.dates import parse_date_string, parse_iso, to_iso

pytestmark = pytest.mark.unit

NOW = datetime(2025, 4, 4, 10, 0, tzinfo=UTC)


def test_to_iso_uses_z_suffix_and_milliseconds():
    assert to_iso(datetime(2025, 4, 4, 18, 36, tzinfo=UTC)) == "2025-04-04T18:36:00.000Z"


def test_to_iso_treats_naive_as_utc():
    assert to_iso(datetime(2025, 4, 4, 18, 36)) == "2025-04-04T18:36:00.000Z"


def test_parse_iso_rejects_text():
    assert parse_iso("next week") is None


def test_iso_input_is_normalised():
    assert parse_date_string("2025-05-01T09:30:00+02:00") == "2025-05-01T07:30:00.000Z"


@pytest.mark.parametrize("value", [None, "", "   "])
def test_empty_input_returns_none(value):
    assert parse_date_string(value) is None


def test_unparseable_returns_none():
    assert parse_date_string("when pigs fly", now=NOW) is None


def test_tomorrow_at_noon():
    assert parse_date_string("tomorrow at noon", now=NOW) == "2025-04-05T12:00:00.000Z"


def test_relative_days():
    result = parse_date_string("in 3 days", now=NOW)
    assert result is not None
    assert result.startswith("2025-04-07")
