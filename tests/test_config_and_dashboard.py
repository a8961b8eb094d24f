from datetime import datetime, timezone
from pathlib import Path

import pytest

from src.config import DEFAULT_API_BASE, load_settings
from src.matching.dashboard import dashboard_stats
from src.models.job import JobPosting
from src.models.source import JobSource


def test_settings_defaults():
    settings = load_settings(env={})
    assert settings.api_base == DEFAULT_API_BASE
    assert settings.http_timeout == 30.0
    assert settings.cache_path == Path("data") / "job_cache.db"
    assert settings.log_level == "INFO"


def test_settings_from_env():
    settings = load_settings(env={
        "EVIDI_API_BASE": "https://api.example.com/",
        "EVIDI_HTTP_TIMEOUT": "5",
        "EVIDI_DATA_DIR": "/tmp/evidi",
        "EVIDI_LOG_LEVEL": "debug",
    })
    assert settings.api_base == "https://api.example.com"
    assert settings.http_timeout == 5.0
    assert settings.settings_path == Path("/tmp/evidi") / "account_settings.json"
    assert settings.log_level == "DEBUG"


def test_settings_invalid_number():
    with pytest.raises(ValueError, match="EVIDI_CACHE_TTL"):
        load_settings(env={"EVIDI_CACHE_TTL": "an hour"})


def test_settings_reads_dotenv(tmp_path, monkeypatch):
    monkeypatch.delenv("EVIDI_AUTH_BASE", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("EVIDI_AUTH_BASE=https://auth.example.com\n", encoding="utf-8")
    settings = load_settings(dotenv_path=env_file)
    monkeypatch.delenv("EVIDI_AUTH_BASE", raising=False)
    assert settings.auth_base == "https://auth.example.com"


def test_dashboard_stats():
    jobs = [
        JobPosting(id="1", title="A", company="X", url="", source="s", is_match=True),
        JobPosting(id="2", title="B", company="X", url="", source="s"),
        JobPosting(id="3", title="C", company="X", url="", source="s", is_match=True),
        JobPosting(id="4", title="D", company="X", url="", source="s"),
    ]
    sources = [
        JobSource(id="a", name="A", type="RSS", url="u", last_sync="2026-01-01T00:00:00Z"),
        JobSource(id="b", name="B", type="API", url="u", enabled=False, last_sync="2026-02-01T00:00:00Z"),
        JobSource(id="c", name="C", type="Email", url="u"),
    ]
    stats = dashboard_stats(jobs, sources)
    assert stats.total_jobs == 4
    assert stats.matched_jobs == 2
    assert stats.match_rate == 50
    assert stats.enabled_sources == 2
    assert stats.total_sources == 3
    assert stats.last_sync == datetime(2026, 2, 1, tzinfo=timezone.utc)


def test_dashboard_stats_empty():
    stats = dashboard_stats([], [])
    assert stats.match_rate == 0
    assert stats.last_sync is None
