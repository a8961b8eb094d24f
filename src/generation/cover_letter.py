from __future__ import annotations

from src.models.job import JobPosting

FALLBACK_POINTS = [
    "Building scalable web applications",
    "Collaborating with cross-functional teams",
    "Implementing best practices and code quality standards",
]

TEMPLATE = """Dear Hiring Manager at {company},

I am writing to express my strong interest in the {title} position. With my extensive experience in {stack}, I am confident that I would be a valuable addition to your team.

Throughout my career, I have developed a deep expertise in modern web development technologies and best practices. My background aligns perfectly with your requirements, particularly in:

{points}

I am particularly excited about this opportunity because {company} is known for its innovative approach to technology. The {location} location and {job_type} arrangement align well with my preferences.

I would welcome the opportunity to discuss how my skills and experience can contribute to your team's success. Thank you for considering my application.

Best regards"""


def generate_cover_letter(posting: JobPosting) -> str:
    """Draft a motivation letter for a posting from a fixed template."""
    points = [
        posting.requirements[i] if i < len(posting.requirements) and posting.requirements[i] else fallback
        for i, fallback in enumerate(FALLBACK_POINTS)
    ]
    return TEMPLATE.format(
        company=posting.company,
        title=posting.title,
        stack=", ".join(posting.stack[:3]),
        points="\n".join(f"• {p}" for p in points),
        location=posting.location,
        job_type=posting.job_type.lower(),
    )
