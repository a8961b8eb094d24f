from __future__ import annotations

from dataclasses import dataclass, field, replace

EXPERIENCE_LEVELS = ["Junior", "Mid-level", "Senior", "Lead", "Principal"]
JOB_TYPES = ["Full-time", "Part-time", "Contract", "Freelance", "Internship"]

# attribute name -> key used by the API
_WIRE_KEYS = {
    "stack": "stack",
    "experience": "experience",
    "keywords": "keywords",
    "exclude_keywords": "excludeKeywords",
    "location": "location",
    "job_type": "jobType",
}


@dataclass(frozen=True)
class FilterCriteria:
    """The user's saved matching filters.

    Every mutator returns a new instance so callers can compare old and new
    values to track unsaved changes.
    """

    stack: list[str] = field(default_factory=list)
    experience: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    exclude_keywords: list[str] = field(default_factory=list)
    location: list[str] = field(default_factory=list)
    job_type: list[str] = field(default_factory=list)

    def add(self, name: str, value: str) -> FilterCriteria:
        items = self._items(name)
        v = value.strip()
        # Exact, case-sensitive match: "react" and "React" are both kept
        if not v or v in items:
            return self
        return replace(self, **{name: [*items, v]})

    def remove(self, name: str, index: int) -> FilterCriteria:
        items = self._items(name)
        if not 0 <= index < len(items):
            return self
        return replace(self, **{name: items[:index] + items[index + 1:]})

    def toggle(self, name: str, value: str) -> FilterCriteria:
        items = self._items(name)
        if value in items:
            return replace(self, **{name: [i for i in items if i != value]})
        return replace(self, **{name: [*items, value]})

    def merge(self, partial: dict[str, list[str]]) -> FilterCriteria:
        updates = {}
        for name, values in partial.items():
            self._items(name)
            updates[name] = list(values)
        return replace(self, **updates)

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in _WIRE_KEYS)

    def _items(self, name: str) -> list[str]:
        if name not in _WIRE_KEYS:
            raise ValueError(f"Unknown filter field: {name!r}")
        return getattr(self, name)

    def to_dict(self) -> dict[str, list[str]]:
        return {wire: list(getattr(self, name)) for name, wire in _WIRE_KEYS.items()}

    @classmethod
    def from_dict(cls, data: dict | None) -> FilterCriteria:
        data = data or {}
        return cls(**{
            name: [str(v) for v in data.get(wire) or []]
            for name, wire in _WIRE_KEYS.items()
        })
