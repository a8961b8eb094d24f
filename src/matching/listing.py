from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Sequence

from src.models.job import JobPosting
from src.utils.dates import utcnow

SORT_KEYS = ("matchScore", "date")
TABS = ("all", "matched", "new")
NEW_WINDOW = timedelta(days=7)


@dataclass(frozen=True)
class QueryState:
    search: str = ""
    sort: str = "matchScore"
    tab: str = "all"

    def __post_init__(self):
        if self.sort not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {self.sort!r}")
        if self.tab not in TABS:
            raise ValueError(f"Unknown tab: {self.tab!r}")


class TabCounts(NamedTuple):
    all: int
    matched: int
    new: int


def matches_search(posting: JobPosting, search: str) -> bool:
    needle = search.lower()
    if not needle:
        return True
    return (
        needle in posting.title.lower()
        or needle in posting.company.lower()
        or any(needle in tech.lower() for tech in posting.stack)
    )


def _aware(now: datetime | None) -> datetime:
    # Naive clocks are read as UTC, like naive posting dates
    if now is None:
        return utcnow()
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def is_new(posting: JobPosting, now: datetime) -> bool:
    # Unparseable dates are never new
    posted = posting.posted_at
    return posted is not None and _aware(now) - posted < NEW_WINDOW


def matches_tab(posting: JobPosting, tab: str, now: datetime) -> bool:
    if tab == "matched":
        return posting.is_match
    if tab == "new":
        return is_new(posting, now)
    return True


def filter_postings(
    postings: Sequence[JobPosting],
    query: QueryState,
    now: datetime | None = None,
) -> list[JobPosting]:
    now = _aware(now)
    selected = [
        p for p in postings
        if matches_search(p, query.search) and matches_tab(p, query.tab, now)
    ]
    return sort_postings(selected, query.sort)


def sort_postings(postings: Sequence[JobPosting], sort: str) -> list[JobPosting]:
    # sorted() with reverse=True is still stable, so ties keep input order
    if sort == "date":
        return sorted(postings, key=_date_key, reverse=True)
    return sorted(postings, key=lambda p: p.match_score, reverse=True)


def _date_key(posting: JobPosting) -> tuple[bool, float]:
    # (False, 0.0) ranks below every parseable date when reversed
    posted = posting.posted_at
    if posted is None:
        return False, 0.0
    return True, posted.timestamp()


def tab_counts(postings: Sequence[JobPosting], now: datetime | None = None) -> TabCounts:
    now = _aware(now)
    return TabCounts(
        all=len(postings),
        matched=sum(1 for p in postings if p.is_match),
        new=sum(1 for p in postings if is_new(p, now)),
    )
