"""
Thin HTTP client for the Job Tracker API.

A ``requests.Session`` carries the session cookie between calls, the same
way a browser does with ``credentials: "include"``.
"""
import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class JobTrackerClient:
    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: int = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}/api{path}"
        response = self.session.request(method, url, json=json, timeout=self.timeout)
        if not response.ok:
            try:
                message = response.json().get("message")
            except ValueError:
                message = None
            message = message or f"HTTP error {response.status_code}"
            logger.warning("%s %s failed: %s", method, path, message)
            raise ApiError(response.status_code, message)
        return response.json()

    # Auth
    def register(self, username: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/register", {"username": username, "password": password})["user"]

    def login(self, username: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/login", {"username": username, "password": password})["user"]

    def logout(self) -> None:
        self._request("POST", "/auth/logout")

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/auth/me")["user"]

    # Jobs
    def get_jobs(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/jobs")

    def add_job(self, job: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/jobs", job)

    def update_job(self, job_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", f"/jobs/{job_id}", updates)

    def delete_jobs(self, ids: List[str]) -> int:
        return self._request("DELETE", "/jobs", {"ids": list(ids)})["deletedCount"]
