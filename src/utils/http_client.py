from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = "Evidi/1.0 (job search assistant)"


class ApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(ApiError):
    pass


class JsonHttpClient:
    """httpx wrapper that speaks JSON and turns every failure into ApiError."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            transport=transport,
        )

    def request(self, method: str, path: str, json: dict | None = None):
        try:
            resp = self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise ApiError(f"Could not reach the server: {e}") from e

        if resp.is_error:
            logger.warning("%s %s returned HTTP %s", method, path, resp.status_code)
            raise ApiError(
                f"{method} {path} failed with HTTP {resp.status_code}",
                status_code=resp.status_code,
            )
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError(f"{method} {path} returned invalid JSON", resp.status_code) from e

    def get(self, path: str):
        return self.request("GET", path)

    def put(self, path: str, json: dict):
        return self.request("PUT", path, json=json)

    def post(self, path: str, json: dict):
        return self.request("POST", path, json=json)

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
