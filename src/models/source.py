from __future__ import annotations

from dataclasses import dataclass

SOURCE_TYPES = ("RSS", "API", "Email")


@dataclass(frozen=True)
class JobSource:
    id: str
    name: str
    type: str
    url: str
    enabled: bool = True
    last_sync: str | None = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "url": self.url,
            "enabled": self.enabled,
        }
        if self.last_sync:
            data["lastSync"] = self.last_sync
        return data

    @classmethod
    def from_dict(cls, data: dict) -> JobSource:
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            type=data.get("type") or "API",
            url=data.get("url") or "",
            enabled=bool(data.get("enabled", True)),
            last_sync=data.get("lastSync") or None,
        )
