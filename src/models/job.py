from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from src.utils.dates import parse_timestamp


@dataclass
class JobPosting:
    id: str
    title: str
    company: str
    url: str
    source: str
    location: str = ""
    job_type: str = ""  # "Full-time", "Part-time", "Contract", ...
    salary: str | None = None
    description: str = ""
    requirements: list[str] = field(default_factory=list)
    stack: list[str] = field(default_factory=list)
    experience: str = ""
    posted_date: str = ""  # raw timestamp as sent by the API
    is_match: bool = False
    match_score: int = 0
    ai_summary: str | None = None

    @property
    def posted_at(self) -> datetime | None:
        return parse_timestamp(self.posted_date)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "type": self.job_type,
            "description": self.description,
            "requirements": list(self.requirements),
            "stack": list(self.stack),
            "experience": self.experience,
            "postedDate": self.posted_date,
            "source": self.source,
            "url": self.url,
            "isMatch": self.is_match,
            "matchScore": self.match_score,
        }
        if self.salary:
            data["salary"] = self.salary
        if self.ai_summary:
            data["aiSummary"] = self.ai_summary
        return data

    @classmethod
    def from_dict(cls, data: dict) -> JobPosting:
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            company=data.get("company") or "",
            url=data.get("url") or "",
            source=data.get("source") or "",
            location=data.get("location") or "",
            job_type=data.get("type") or "",
            salary=data.get("salary") or None,
            description=data.get("description") or "",
            requirements=[str(r) for r in data.get("requirements") or []],
            stack=[str(s) for s in data.get("stack") or []],
            experience=data.get("experience") or "",
            posted_date=data.get("postedDate") or "",
            is_match=bool(data.get("isMatch", False)),
            match_score=_clamp_score(data.get("matchScore")),
            ai_summary=data.get("aiSummary") or None,
        )


def _clamp_score(value) -> int:
    try:
        score = int(value)
    except (TypeError, ValueError):
        return 0
    return max(0, min(score, 100))
