import time

from src.models.job import JobPosting
from src.storage.cache import PostingCache


def _make_job(job_id: str, **kwargs) -> JobPosting:
    return JobPosting(id=job_id, title=f"Job {job_id}", company="TestCo",
                      url="https://example.com", source="test", **kwargs)


def test_store_and_load_keeps_order(tmp_path):
    cache = PostingCache(tmp_path / "cache.db")
    jobs = [_make_job("b", stack=["Go"], match_score=70), _make_job("a", is_match=True)]
    cache.store(jobs)
    loaded = cache.load()
    assert [j.id for j in loaded] == ["b", "a"]
    assert loaded[0].stack == ["Go"]
    assert loaded[1].is_match


def test_store_replaces_previous(tmp_path):
    cache = PostingCache(tmp_path / "cache.db")
    cache.store([_make_job("old")])
    cache.store([_make_job("new")])
    assert [j.id for j in cache.load()] == ["new"]


def test_empty_cache(tmp_path):
    assert PostingCache(tmp_path / "cache.db").load() is None


def test_expired_entries(tmp_path):
    cache = PostingCache(tmp_path / "cache.db", ttl=0)
    cache.store([_make_job("x")])
    time.sleep(0.01)
    assert cache.load() is None
    assert cache.clear_expired() == 1


def test_clear(tmp_path):
    cache = PostingCache(tmp_path / "cache.db")
    cache.store([_make_job("x")])
    cache.clear()
    assert cache.load() is None
