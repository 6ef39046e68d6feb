"""Tests for reference-time resolution."""
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from planner_server.clock import get_timezone, resolve_now


def test_naive_value_is_read_in_requested_zone() -> None:
    now = resolve_now("2025-03-12T10:30:00", "America/New_York")
    assert now == datetime(2025, 3, 12, 10, 30, tzinfo=ZoneInfo("America/New_York"))


def test_offset_value_is_converted_to_requested_zone() -> None:
    """An instant with an offset keeps its meaning but takes the planner's local date."""
    now = resolve_now("2025-03-13T02:00:00Z", "America/New_York")
    assert now.date().isoformat() == "2025-03-12"
    assert now.hour == 22


def test_empty_value_means_current_time() -> None:
    before = datetime.now(timezone.utc)
    now = resolve_now("", "UTC")
    assert now.tzinfo is not None
    assert now >= before


def test_datetime_passes_through() -> None:
    value = datetime(2025, 3, 12, 10, 30, tzinfo=timezone.utc)
    assert resolve_now(value, "UTC") == value


def test_invalid_reference_time_raises() -> None:
    with pytest.raises(ValueError, match="Invalid reference time"):
        resolve_now("yesterday-ish", "UTC")


def test_unknown_zone_raises() -> None:
    with pytest.raises(ValueError, match="Unknown time zone"):
        get_timezone("Mars/Olympus_Mons")
