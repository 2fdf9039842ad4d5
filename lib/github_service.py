"""
GitHub Service

Thin client over the GitHub REST API used by the lottery:
- find the open pull request for a branch
- read the reviewers already requested on it
- request new reviewers
"""
from contextlib import contextmanager
from typing import Iterator, List, Optional

import httpx

from lib.data_types import GitHubServiceError, Pull
from lib.env_constants import (
    GITHUB_API_VERSION,
    GITHUB_REQUEST_TIMEOUT,
    get_api_url,
)


class GitHubService:
    def __init__(
        self,
        token: str,
        repository: str,
        api_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Args:
            token: Token used as bearer credential
            repository: "owner/name" of the repository
            api_url: Base URL of the REST API.
                If None, uses GITHUB_API_URL or https://api.github.com
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.repository = repository
        self._client = httpx.Client(
            base_url=api_url or get_api_url(),
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            },
            timeout=GITHUB_REQUEST_TIMEOUT,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise GitHubServiceError(
                f"{method} {path} failed with status "
                f"{exc.response.status_code}: {exc.response.text}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise GitHubServiceError(f"{method} {path} failed: {exc}") from exc
        return response

    def find_pr_by_ref(self, ref: str) -> Optional[Pull]:
        """Return the open pull request whose head branch is `ref`, if any."""
        # "head" filters server side, so busy repositories need no paging.
        owner = self.repository.split("/")[0]
        response = self._request(
            "GET",
            f"/repos/{self.repository}/pulls",
            params={"state": "open", "head": f"{owner}:{ref}", "per_page": 100},
        )
        for pull in response.json():
            if (pull.get("head") or {}).get("ref") == ref:
                return Pull(
                    number=pull["number"],
                    author=(pull.get("user") or {}).get("login"),
                    head_ref=ref,
                )
        return None

    def get_existing_reviewers(self, pr_number: int) -> List[str]:
        """Usernames already requested as reviewers (teams are ignored)."""
        response = self._request(
            "GET",
            f"/repos/{self.repository}/pulls/{pr_number}/requested_reviewers",
        )
        return [user["login"] for user in response.json().get("users", [])]

    def set_reviewers(self, pr_number: int, reviewers: List[str]) -> dict:
        response = self._request(
            "POST",
            f"/repos/{self.repository}/pulls/{pr_number}/requested_reviewers",
            json={"reviewers": reviewers},
        )
        return response.json()


@contextmanager
def get_github_service(
    token: str, repository: str, api_url: Optional[str] = None
) -> Iterator[GitHubService]:
    """Open a GitHubService and close its HTTP session afterwards"""
    service = GitHubService(token, repository, api_url)
    try:
        yield service
    finally:
        service.close()
