from __future__ import annotations

import json
import logging
from pathlib import Path

from src.settings.account import AccountSettings

logger = logging.getLogger(__name__)


class SettingsStore:
    """Keeps account settings in a local JSON file."""

    def __init__(self, storage_path: Path | str):
        self.storage_path = Path(storage_path)

    def exists(self) -> bool:
        return self.storage_path.exists()

    def save(self, settings: AccountSettings) -> None:
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        self.storage_path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
        logger.info("Saved account settings to %s", self.storage_path)

    def load(self) -> AccountSettings:
        if not self.storage_path.exists():
            return AccountSettings()
        try:
            data = json.loads(self.storage_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable settings file %s", self.storage_path)
            return AccountSettings()
        return AccountSettings.from_dict(data)

    def delete(self) -> bool:
        if self.storage_path.exists():
            self.storage_path.unlink()
            return True
        return False

    def export(self) -> str | None:
        if not self.storage_path.exists():
            return None
        return self.storage_path.read_text(encoding="utf-8")

    def import_json(self, json_str: str) -> bool:
        try:
            data = json.loads(json_str)
        except (json.JSONDecodeError, TypeError):
            return False
        if not isinstance(data, dict) or not set(data) & set(AccountSettings.__dataclass_fields__):
            return False
        self.save(AccountSettings.from_dict(data))
        return True
