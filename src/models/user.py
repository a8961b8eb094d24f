from __future__ import annotations

from dataclasses import dataclass, field

from src.models.criteria import FilterCriteria


@dataclass
class UserAccount:
    id: str
    email: str
    full_name: str | None = None
    filters: FilterCriteria = field(default_factory=FilterCriteria)
    resume: str | None = None

    @property
    def needs_resume(self) -> bool:
        return not (self.resume or "").strip()

    @classmethod
    def from_dict(cls, data: dict) -> UserAccount:
        return cls(
            id=str(data.get("id", "")),
            email=data.get("email") or "",
            full_name=data.get("full_name"),
            filters=FilterCriteria.from_dict(data.get("filters")),
            resume=data.get("resume"),
        )
