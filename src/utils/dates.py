from __future__ import annotations

from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 date or date-time string into an aware UTC datetime.

    Naive values are taken as UTC. Anything that does not parse returns None.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_posted(value: str | None, now: datetime | None = None) -> str:
    posted = parse_timestamp(value)
    if posted is None:
        return "Unknown date"
    now = now or utcnow()
    days = abs(now - posted) // timedelta(days=1)
    if days == 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    return posted.date().isoformat()


def format_long_date(value: str | None) -> str:
    posted = parse_timestamp(value)
    if posted is None:
        return "Unknown date"
    return f"{posted:%B} {posted.day}, {posted.year}"


def format_last_sync(value: str | None, now: datetime | None = None) -> str:
    synced = parse_timestamp(value)
    if synced is None:
        return "Never"
    now = now or utcnow()
    elapsed = now - synced
    minutes = int(elapsed.total_seconds() // 60)
    hours = int(elapsed.total_seconds() // 3600)
    if minutes < 60:
        return f"{max(minutes, 0)} mins ago"
    if hours < 24:
        return f"{hours} hours ago"
    return synced.date().isoformat()
