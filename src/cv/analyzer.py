from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

SKILLS_PATH = Path(__file__).resolve().parent.parent.parent / "data" / "skills_seed.json"

KNOWN_CITIES = [
    "San Francisco", "New York", "Los Angeles", "Seattle", "Austin", "Boston", "Chicago",
    "Toronto", "Vancouver", "London", "Dublin", "Berlin", "Munich", "Paris", "Amsterdam",
    "Madrid", "Barcelona", "Lisbon", "Stockholm", "Zurich", "Warsaw", "Sydney", "Singapore",
]

# Checked from most to least senior; the first level found wins.
TITLE_LEVELS = [
    ("Principal", r"principal"),
    ("Lead", r"lead|staff|head of"),
    ("Senior", r"senior|sr\."),
    ("Mid-level", r"mid[- ]level|intermediate"),
    ("Junior", r"junior|jr\.|graduate|entry[- ]level|intern"),
]

_skills_cache: list[str] | None = None


@dataclass
class ResumeAnalysis:
    skills: list[str] = field(default_factory=list)
    experience: str = ""
    locations: list[str] = field(default_factory=list)
    years_experience: float | None = None

    def to_criteria_update(self) -> dict[str, list[str]]:
        """Partial filter update for FilterCriteria.merge."""
        update = {"stack": list(self.skills), "location": list(self.locations)}
        if self.experience:
            update["experience"] = [self.experience]
        return update


def _load_skills() -> list[str]:
    global _skills_cache
    if _skills_cache is None:
        with open(SKILLS_PATH, encoding="utf-8") as f:
            categories = json.load(f)
        _skills_cache = [s for skills in categories.values() for s in skills]
    return _skills_cache


def _term_pattern(term: str) -> re.Pattern:
    # Lookarounds instead of \b so terms like "C#", ".NET" and "CI/CD" still match.
    # Acronyms and two-letter terms ("REST", "Go") are case-sensitive to skip plain English.
    flags = 0 if term.isupper() or len(term) <= 2 else re.IGNORECASE
    return re.compile(r"(?<![\w.+#])" + re.escape(term) + r"(?![\w+#])", flags)


def _first_positions(text: str, terms: list[str]) -> list[str]:
    found: list[tuple[int, str]] = []
    for term in terms:
        match = _term_pattern(term).search(text)
        if match:
            found.append((match.start(), term))
    found.sort(key=lambda x: x[0])
    return [term for _, term in found]


def extract_skills(text: str) -> list[str]:
    return _first_positions(text, _load_skills())


def extract_locations(text: str) -> list[str]:
    locations = []
    if re.search(r"\bremote\b", text, re.IGNORECASE):
        locations.append("Remote")
    locations.extend(_first_positions(text, KNOWN_CITIES))
    return locations


def extract_years_experience(text: str, now: datetime | None = None) -> float | None:
    patterns = [
        r"(\d+)\+?\s*(?:years?|yrs?)\s*(?:of\s+)?(?:experience|exp)",
        r"(?:experience|exp)\s*(?:of\s+)?(\d+)\+?\s*(?:years?|yrs?)",
    ]
    max_years = 0.0
    for pat in patterns:
        for match in re.finditer(pat, text, re.IGNORECASE):
            years = float(match.group(1))
            if years <= 50:
                max_years = max(max_years, years)

    current_year = (now or datetime.now()).year
    for match in re.finditer(r"((?:19|20)\d{2})\s*[-–—]\s*((?:19|20)\d{2}|present|current|now)",
                             text, re.IGNORECASE):
        end = match.group(2)
        span = (int(end) if end[0].isdigit() else current_year) - int(match.group(1))
        if 0 < span <= 50:
            max_years = max(max_years, float(span))

    return max_years if max_years > 0 else None


def infer_experience_level(text: str, years: float | None) -> str:
    lowered = text.lower()
    for level, pattern in TITLE_LEVELS:
        if re.search(r"\b(?:" + pattern + r")(?!\w)", lowered):
            return level
    if years is None:
        return ""
    if years < 2:
        return "Junior"
    if years < 5:
        return "Mid-level"
    if years < 8:
        return "Senior"
    return "Lead"


def analyze_resume(text: str, now: datetime | None = None) -> ResumeAnalysis:
    if not text.strip():
        return ResumeAnalysis()
    years = extract_years_experience(text, now)
    analysis = ResumeAnalysis(
        skills=extract_skills(text),
        experience=infer_experience_level(text, years),
        locations=extract_locations(text),
        years_experience=years,
    )
    logger.info(
        "Resume analysis: %d skills, level %r, %d locations",
        len(analysis.skills), analysis.experience, len(analysis.locations),
    )
    return analysis
