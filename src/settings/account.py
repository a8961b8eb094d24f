from __future__ import annotations

from dataclasses import asdict, dataclass

MIN_PASSWORD_LENGTH = 6
LANGUAGES = {"en": "English", "es": "Spanish", "fr": "French", "de": "German"}
TIMEZONES = ["UTC", "America/New_York", "America/Los_Angeles", "Europe/London", "Europe/Paris"]


class PasswordChangeError(ValueError):
    pass


class AccountDeletionDisabled(Exception):
    pass


@dataclass
class AccountSettings:
    username: str = ""
    email: str = ""
    email_notifications: bool = True
    push_notifications: bool = False
    weekly_digest: bool = True
    language: str = "en"
    timezone: str = "UTC"

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> AccountSettings:
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


def validate_password_change(new_password: str, confirm_password: str) -> None:
    if new_password != confirm_password:
        raise PasswordChangeError("Passwords do not match")
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise PasswordChangeError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


def delete_account() -> None:
    # The API has no deletion endpoint, so the app always runs in demo mode
    raise AccountDeletionDisabled("Account deletion is disabled in demo mode")
