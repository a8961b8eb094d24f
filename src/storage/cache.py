from __future__ import annotations

import json
import logging
import sqlite3
import time
from pathlib import Path

from src.models.job import JobPosting

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600


class PostingCache:
    """SQLite copy of the last fetched job offers, used when the API is unreachable."""

    def __init__(self, db_path: Path | str, ttl: int = DEFAULT_TTL_SECONDS):
        self.db_path = Path(db_path)
        self.ttl = ttl
        self._ensure_table()

    def _conn(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(str(self.db_path))

    def _ensure_table(self) -> None:
        with self._conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS postings (
                    position INTEGER NOT NULL,
                    id TEXT PRIMARY KEY,
                    data TEXT NOT NULL,
                    cached_at REAL NOT NULL
                )
            """)

    def store(self, postings: list[JobPosting]) -> None:
        """Replace the cached collection, keeping the API's order."""
        now = time.time()
        with self._conn() as conn:
            conn.execute("DELETE FROM postings")
            conn.executemany(
                "INSERT OR REPLACE INTO postings (position, id, data, cached_at) VALUES (?, ?, ?, ?)",
                [(i, p.id, json.dumps(p.to_dict()), now) for i, p in enumerate(postings)],
            )
        logger.debug("Cached %d postings", len(postings))

    def load(self) -> list[JobPosting] | None:
        cutoff = time.time() - self.ttl
        with self._conn() as conn:
            rows = conn.execute(
                "SELECT data FROM postings WHERE cached_at > ? ORDER BY position",
                (cutoff,),
            ).fetchall()
        if not rows:
            return None
        return [JobPosting.from_dict(json.loads(row[0])) for row in rows]

    def clear(self) -> None:
        with self._conn() as conn:
            conn.execute("DELETE FROM postings")

    def clear_expired(self) -> int:
        cutoff = time.time() - self.ttl
        with self._conn() as conn:
            cursor = conn.execute("DELETE FROM postings WHERE cached_at < ?", (cutoff,))
            return cursor.rowcount
