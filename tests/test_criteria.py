import pytest

from src.models.criteria import FilterCriteria


def test_add_trims_and_appends():
    criteria = FilterCriteria().add("stack", "  React ").add("stack", "Go")
    assert criteria.stack == ["React", "Go"]


def test_add_ignores_blank():
    criteria = FilterCriteria()
    assert criteria.add("keywords", "   ") is criteria


def test_add_duplicate_is_case_sensitive():
    criteria = FilterCriteria(stack=["React"])
    assert criteria.add("stack", "React").stack == ["React"]
    assert criteria.add("stack", "react").stack == ["React", "react"]


def test_add_returns_new_instance():
    original = FilterCriteria()
    updated = original.add("location", "Remote")
    assert original.location == []
    assert updated.location == ["Remote"]
    assert original != updated


def test_remove_by_index():
    criteria = FilterCriteria(exclude_keywords=["unpaid", "intern", "unpaid-ish"])
    assert criteria.remove("exclude_keywords", 1).exclude_keywords == ["unpaid", "unpaid-ish"]
    assert criteria.remove("exclude_keywords", 9) is criteria


def test_toggle_adds_then_removes():
    criteria = FilterCriteria().toggle("job_type", "Contract")
    assert criteria.job_type == ["Contract"]
    assert criteria.toggle("job_type", "Contract").job_type == []


def test_merge_replaces_lists():
    criteria = FilterCriteria(stack=["Java"], keywords=["agile"])
    merged = criteria.merge({"stack": ["Python", "AWS"], "experience": ["Senior"]})
    assert merged.stack == ["Python", "AWS"]
    assert merged.experience == ["Senior"]
    assert merged.keywords == ["agile"]


def test_unknown_field():
    with pytest.raises(ValueError, match="Unknown filter field"):
        FilterCriteria().add("salary", "100k")


def test_wire_round_trip_uses_api_keys():
    criteria = FilterCriteria(exclude_keywords=["unpaid"], job_type=["Full-time"])
    data = criteria.to_dict()
    assert data["excludeKeywords"] == ["unpaid"]
    assert data["jobType"] == ["Full-time"]
    assert FilterCriteria.from_dict(data) == criteria


def test_from_dict_handles_missing():
    assert FilterCriteria.from_dict(None).is_empty()
    assert FilterCriteria.from_dict({"stack": ["Go"]}).stack == ["Go"]
