from datetime import datetime, timedelta, timezone

from src.utils.dates import format_last_sync, format_long_date, format_posted, parse_timestamp

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def test_parse_timestamp_variants():
    assert parse_timestamp("2026-03-10T12:00:00Z") == NOW
    assert parse_timestamp("2026-03-10T14:00:00+02:00") == NOW
    assert parse_timestamp("2026-03-10T12:00:00") == NOW
    assert parse_timestamp("garbage") is None
    assert parse_timestamp("") is None
    assert parse_timestamp(None) is None


def test_format_posted():
    assert format_posted((NOW - timedelta(hours=3)).isoformat(), NOW) == "Today"
    assert format_posted((NOW - timedelta(days=1, hours=2)).isoformat(), NOW) == "Yesterday"
    assert format_posted((NOW - timedelta(days=4)).isoformat(), NOW) == "4 days ago"
    assert format_posted("2026-01-02", NOW) == "2026-01-02"
    assert format_posted("nope", NOW) == "Unknown date"


def test_format_long_date():
    assert format_long_date("2024-01-05T10:00:00Z") == "January 5, 2024"


def test_format_last_sync():
    assert format_last_sync(None, NOW) == "Never"
    assert format_last_sync((NOW - timedelta(minutes=12)).isoformat(), NOW) == "12 mins ago"
    assert format_last_sync((NOW - timedelta(hours=5)).isoformat(), NOW) == "5 hours ago"
    assert format_last_sync("2026-02-01T00:00:00Z", NOW) == "2026-02-01"
