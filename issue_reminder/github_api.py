"""GitHub REST client with rate-limit pacing and Link-header pagination."""

import os
import time
import logging
import subprocess
from typing import Iterator, Optional

import requests

from .config import DEFAULT_PER_PAGE, ConfigurationError

logger = logging.getLogger(__name__)

RATE_LIMIT_BUFFER = 10
REQUEST_TIMEOUT = 30


class NetworkError(Exception):
    pass


class GitHubClient:
    """Handles all communication with the GitHub REST API."""

    BASE_URL = "https://api.github.com"

    def __init__(self, token: Optional[str] = None, session: Optional[requests.Session] = None):
        self.token = (
            token
            or os.environ.get("GITHUB_TOKEN")
            or os.environ.get("GH_TOKEN")
            or self._get_gh_cli_token()
        )
        if not self.token:
            raise ConfigurationError(
                "No GitHub token found. Pass --token, set GITHUB_TOKEN or log in with the gh CLI."
            )
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"token {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        })
        self._requests_remaining = None
        self._reset_time = None

    @staticmethod
    def _get_gh_cli_token() -> Optional[str]:
        try:
            result = subprocess.run(
                ["gh", "auth", "token"],
                capture_output=True, text=True, timeout=10
            )
            if result.returncode == 0:
                return result.stdout.strip() or None
        except (FileNotFoundError, subprocess.TimeoutExpired):
            pass
        return None

    def _update_rate_limit(self, response: requests.Response):
        remaining = response.headers.get("X-RateLimit-Remaining")
        reset = response.headers.get("X-RateLimit-Reset")
        if remaining is not None:
            self._requests_remaining = int(remaining)
        if reset is not None:
            self._reset_time = int(reset)

    def _wait_for_rate_limit(self):
        if self._requests_remaining is not None and self._requests_remaining < RATE_LIMIT_BUFFER:
            if self._reset_time:
                wait_seconds = max(0, self._reset_time - int(time.time())) + 5
                logger.warning(
                    "Rate limit low (%d remaining). Waiting %d seconds.",
                    self._requests_remaining, wait_seconds
                )
                time.sleep(wait_seconds)

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        self._wait_for_rate_limit()
        url = f"{self.BASE_URL}{endpoint}" if endpoint.startswith("/") else endpoint
        try:
            response = self.session.request(method, url, timeout=REQUEST_TIMEOUT, **kwargs)
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e

        self._update_rate_limit(response)
        if response.status_code >= 400:
            raise NetworkError(
                f"GitHub API error {response.status_code} for {method} {url}: {response.text[:500]}"
            )
        return response

    def iter_paginated(self, endpoint: str, params: Optional[dict] = None) -> Iterator[dict]:
        """Yield every item of a paginated list endpoint, following Link headers."""
        params = dict(params or {})
        params.setdefault("per_page", DEFAULT_PER_PAGE)
        url = endpoint

        while url:
            response = self._request("GET", url, params=params)
            items = response.json()
            if not isinstance(items, list):
                raise NetworkError(f"Expected a list from {url}, got {type(items).__name__}")
            yield from items

            # The next link already carries the query string.
            url = response.links.get("next", {}).get("url")
            params = None

    def get_paginated(self, endpoint: str, params: Optional[dict] = None) -> list:
        return list(self.iter_paginated(endpoint, params=params))

    def get_org_members(self, org: str) -> list:
        return self.get_paginated(f"/orgs/{org}/members")

    def get_open_issues(self, owner: str, repo: str, since: str) -> list:
        return self.get_paginated(
            f"/repos/{owner}/{repo}/issues",
            params={"state": "open", "since": since},
        )

    def get_comments(self, comments_url: str, since: str) -> list:
        return self.get_paginated(comments_url, params={"since": since})
