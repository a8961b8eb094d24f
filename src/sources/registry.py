from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Sequence

from src.models.source import SOURCE_TYPES, JobSource
from src.utils.dates import utcnow

logger = logging.getLogger(__name__)


def add_source(
    sources: Sequence[JobSource],
    name: str,
    type: str,
    url: str,
    enabled: bool = True,
    now: datetime | None = None,
) -> list[JobSource]:
    name, url = name.strip(), url.strip()
    if not name or not url:
        raise ValueError("A source needs both a name and a URL.")
    if type not in SOURCE_TYPES:
        raise ValueError(f"Unsupported source type: {type}. Use RSS, API, or Email.")

    now = now or utcnow()
    source_id = str(int(now.timestamp() * 1000))
    existing = {s.id for s in sources}
    while source_id in existing:
        source_id = str(int(source_id) + 1)

    logger.info("Adding %s source %r", type, name)
    return [*sources, JobSource(id=source_id, name=name, type=type, url=url, enabled=enabled)]


def toggle_source(sources: Sequence[JobSource], source_id: str) -> list[JobSource]:
    return [replace(s, enabled=not s.enabled) if s.id == source_id else s for s in sources]


def delete_source(sources: Sequence[JobSource], source_id: str) -> list[JobSource]:
    return [s for s in sources if s.id != source_id]


def sync_source(
    sources: Sequence[JobSource],
    source_id: str,
    now: datetime | None = None,
) -> list[JobSource]:
    stamp = (now or utcnow()).isoformat()
    synced = []
    for s in sources:
        if s.id == source_id and s.enabled:
            logger.info("Marking source %r as synced", s.name)
            s = replace(s, last_sync=stamp)
        synced.append(s)
    return synced
