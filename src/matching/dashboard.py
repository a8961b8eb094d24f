from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from src.models.job import JobPosting
from src.models.source import JobSource
from src.utils.dates import parse_timestamp


@dataclass(frozen=True)
class DashboardStats:
    total_jobs: int
    matched_jobs: int
    enabled_sources: int
    total_sources: int
    last_sync: datetime | None

    @property
    def match_rate(self) -> int:
        if not self.total_jobs:
            return 0
        return round(100 * self.matched_jobs / self.total_jobs)


def dashboard_stats(postings: Sequence[JobPosting], sources: Sequence[JobSource]) -> DashboardStats:
    syncs = [t for t in (parse_timestamp(s.last_sync) for s in sources) if t is not None]
    return DashboardStats(
        total_jobs=len(postings),
        matched_jobs=sum(1 for p in postings if p.is_match),
        enabled_sources=sum(1 for s in sources if s.enabled),
        total_sources=len(sources),
        last_sync=max(syncs) if syncs else None,
    )
