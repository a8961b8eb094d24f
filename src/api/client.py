"""Client for the remote Evidi job/user REST API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from urllib.parse import quote

import httpx

from src.config import Settings
from src.models.criteria import FilterCriteria
from src.models.job import JobPosting
from src.models.source import JobSource
from src.models.user import UserAccount
from src.utils.http_client import ApiError, AuthenticationError, JsonHttpClient

logger = logging.getLogger(__name__)


@dataclass
class SessionData:
    """Everything the app loads right after login."""

    jobs: list[JobPosting] = field(default_factory=list)
    sources: list[JobSource] = field(default_factory=list)
    filters: FilterCriteria = field(default_factory=FilterCriteria)
    user: UserAccount | None = None
    jobs_loaded: bool = False
    errors: list[str] = field(default_factory=list)

    @property
    def needs_resume(self) -> bool:
        return self.user is not None and self.user.needs_resume


def _user_path(email: str, suffix: str = "") -> str:
    return f"/api/users/{quote(email, safe='')}{suffix}"


class EvidiClient:
    def __init__(self, settings: Settings, transport: httpx.BaseTransport | None = None):
        self._api = JsonHttpClient(settings.api_base, settings.http_timeout, transport)
        self._auth = JsonHttpClient(settings.auth_base, settings.http_timeout, transport)

    def login(self, email: str, password: str) -> str:
        """Check credentials and return the account email the server confirmed."""
        try:
            user = self._auth.post("/login", {"email": email, "password": password})
        except ApiError as e:
            if e.status_code is not None and 400 <= e.status_code < 500:
                raise AuthenticationError("Invalid email or password", e.status_code) from e
            raise
        if not isinstance(user, dict) or not user.get("email"):
            raise AuthenticationError("Invalid email or password")
        logger.info("Logged in as %s", user["email"])
        return user["email"]

    def list_job_offers(self) -> list[JobPosting]:
        data = self._api.get("/api/job-offers") or []
        try:
            return [JobPosting.from_dict(item) for item in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise ApiError(f"Malformed job offer in response: {e}") from e

    def list_job_sources(self) -> list[JobSource]:
        data = self._api.get("/api/job-sources") or []
        try:
            return [JobSource.from_dict(item) for item in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise ApiError(f"Malformed job source in response: {e}") from e

    def get_filters(self, email: str) -> FilterCriteria:
        data = self._api.get(_user_path(email, "/filters")) or {}
        try:
            return FilterCriteria.from_dict(data.get("filters"))
        except (TypeError, AttributeError) as e:
            raise ApiError(f"Malformed filters in response: {e}") from e

    def get_user(self, email: str) -> UserAccount:
        data = self._api.get(_user_path(email)) or {}
        try:
            return UserAccount.from_dict(data)
        except (TypeError, AttributeError) as e:
            raise ApiError(f"Malformed user record in response: {e}") from e

    def save_filters(self, email: str, criteria: FilterCriteria) -> None:
        self._api.put(_user_path(email, "/filters"), {"filters": criteria.to_dict()})
        logger.info("Saved filters for %s", email)

    def save_resume(self, email: str, resume: str) -> None:
        if not resume.strip():
            raise ValueError("Resume text is empty.")
        self._api.put(_user_path(email, "/resume"), {"resume": resume})
        logger.info("Saved resume for %s (%d chars)", email, len(resume))

    def load_session(self, email: str) -> SessionData:
        """Fetch jobs, sources, filters and the user record.

        A failing part is logged and left at its default, so the app still
        opens with whatever did load.
        """
        session = SessionData()
        try:
            session.jobs = self.list_job_offers()
            session.jobs_loaded = True
        except ApiError as e:
            session.errors.append(f"job offers: {e}")
        try:
            session.sources = self.list_job_sources()
        except ApiError as e:
            session.errors.append(f"job sources: {e}")
        try:
            session.filters = self.get_filters(email)
        except ApiError as e:
            session.errors.append(f"filters: {e}")
        try:
            session.user = self.get_user(email)
        except ApiError as e:
            session.errors.append(f"user: {e}")

        for err in session.errors:
            logger.warning("Error loading user data: %s", err)
        return session

    def close(self) -> None:
        self._api.close()
        self._auth.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
