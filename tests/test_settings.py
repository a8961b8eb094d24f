import json

import pytest

from src.settings.account import (
    AccountDeletionDisabled,
    AccountSettings,
    PasswordChangeError,
    delete_account,
    validate_password_change,
)
from src.storage.settings_store import SettingsStore


@pytest.fixture
def tmp_store(tmp_path):
    return SettingsStore(storage_path=tmp_path / "account_settings.json")


def test_password_mismatch():
    with pytest.raises(PasswordChangeError, match="Passwords do not match"):
        validate_password_change("secret1", "secret2")


def test_password_too_short():
    with pytest.raises(PasswordChangeError, match="at least 6 characters"):
        validate_password_change("abc", "abc")


def test_password_ok():
    validate_password_change("abcdef", "abcdef")


def test_delete_account_disabled_in_demo():
    with pytest.raises(AccountDeletionDisabled):
        delete_account()


def test_default_when_missing(tmp_store):
    assert not tmp_store.exists()
    assert tmp_store.load() == AccountSettings()


def test_save_and_load(tmp_store):
    settings = AccountSettings(username="Jane", email="jane@example.com", weekly_digest=False, timezone="Europe/London")
    tmp_store.save(settings)
    assert tmp_store.exists()
    assert tmp_store.load() == settings


def test_delete(tmp_store):
    tmp_store.save(AccountSettings(username="Jane"))
    assert tmp_store.delete()
    assert not tmp_store.exists()
    assert not tmp_store.delete()


def test_export_and_import(tmp_store, tmp_path):
    tmp_store.save(AccountSettings(language="fr"))
    exported = tmp_store.export()
    assert json.loads(exported)["language"] == "fr"

    other = SettingsStore(tmp_path / "other.json")
    assert other.import_json(exported)
    assert other.load().language == "fr"


def test_import_invalid(tmp_store):
    assert not tmp_store.import_json("not json")
    assert not tmp_store.import_json(json.dumps({"unrelated": 1}))
    assert not tmp_store.import_json(json.dumps([1, 2]))


def test_corrupt_file_falls_back(tmp_store):
    tmp_store.storage_path.write_text("{broken", encoding="utf-8")
    assert tmp_store.load() == AccountSettings()
