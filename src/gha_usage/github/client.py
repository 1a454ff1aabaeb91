"""GitHub REST client for Actions usage and roster reporting."""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterator, Optional
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .errors import GitHubAPIError, NetworkError, NotFoundError, RateLimitedError, UnauthorizedError
from .models import Collaborator, Contributor, Job, Organization, Repository, WorkflowRun
from .utils import is_rate_limited, paginate, parse_rate_limit_headers

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_API_VERSION = "2022-11-28"
# Default request timeout in seconds
DEFAULT_TIMEOUT = 30.0


class BaseGitHubClient:
    """Base class for GitHub API clients with common functionality."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = "gha-usage"
    ) -> None:
        """Initialize the GitHub client.

        Args:
            token: GitHub token, sent as a bearer credential
            base_url: Base URL for the GitHub API
            api_version: Value of the X-GitHub-Api-Version header
            timeout: Per-request timeout in seconds
            user_agent: User agent string for API requests
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        self.base_url = base_url.rstrip('/')
        self.api_version = api_version
        self.timeout = timeout
        self.user_agent = user_agent
        self.logger = logging.getLogger(self.__class__.__name__)
        self._session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create and configure a requests session."""
        session = requests.Session()

        headers = {
            'Accept': 'application/vnd.github+json',
            'User-Agent': self.user_agent,
            'X-GitHub-Api-Version': self.api_version,
        }
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        session.headers.update(headers)

        # No retries: a failed request surfaces to the caller
        adapter = HTTPAdapter(max_retries=0)
        session.mount('https://', adapter)
        session.mount('http://', adapter)
        return session

    def _url(self, path: str) -> str:
        return urljoin(f"{self.base_url}/", path.lstrip('/'))

    def get(self, path: str, **kwargs: Any) -> requests.Response:
        """Make a GET request and raise a GitHubAPIError subclass on failure."""
        url = self._url(path)
        kwargs.setdefault('timeout', self.timeout)
        self.logger.debug("GET %s params=%s", url, kwargs.get('params'))
        try:
            response = self._session.get(url, **kwargs)
        except (requests.ConnectionError, requests.Timeout) as e:
            raise NetworkError(f"Request to {url} failed: {e}", url=url) from e
        self._raise_for_status(response)
        return response

    def _raise_for_status(self, response: requests.Response) -> None:
        if response.ok:
            return

        url = response.url
        status = response.status_code
        try:
            body = response.json()
        except ValueError:
            body = None
        detail = (body.get('message') if isinstance(body, dict) else None) or response.reason
        message = f"GitHub API returned {status} for {url}: {detail}"

        if is_rate_limited(response):
            rate_limit = parse_rate_limit_headers(response)
            raise RateLimitedError(message, status_code=status, url=url, reset=rate_limit['reset'] or None)
        if status == 401:
            raise UnauthorizedError(message, status_code=status, url=url)
        if status == 404:
            raise NotFoundError(message, status_code=status, url=url)
        raise GitHubAPIError(message, status_code=status, url=url)

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> 'BaseGitHubClient':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class GitHubClient(BaseGitHubClient):
    """GitHub API client with the high-level calls the usage reports need."""

    def get_organization(self, org: str) -> Organization:
        """Get organization metadata."""
        response = self.get(f"orgs/{org}")
        return Organization.from_dict(response.json())

    def iter_organization_repositories(self, org: str, sort: str = "full_name") -> Iterator[Repository]:
        """Iterate over every repository in an organization."""
        for data in paginate(self, f"orgs/{org}/repos", params={'sort': sort}):
            yield Repository.from_dict(data)

    def iter_organization_admins(self, org: str) -> Iterator[str]:
        """Iterate over the logins of organization members with the admin role."""
        for data in paginate(self, f"orgs/{org}/members", params={'role': 'admin'}):
            yield data.get('login', '')

    def _workflow_run_params(self, status: Optional[str], created: Optional[str]) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if status:
            params['status'] = status
        if created:
            params['created'] = created
        return params

    def count_workflow_runs(
        self,
        owner: str,
        repo: str,
        status: Optional[str] = None,
        created: Optional[str] = None
    ) -> int:
        """Return the total number of workflow runs matching the filters."""
        params = self._workflow_run_params(status, created)
        params['per_page'] = 1
        response = self.get(f"repos/{owner}/{repo}/actions/runs", params=params)
        return int((response.json() or {}).get('total_count') or 0)

    def iter_workflow_runs(
        self,
        owner: str,
        repo: str,
        status: Optional[str] = None,
        created: Optional[str] = None
    ) -> Iterator[WorkflowRun]:
        """Iterate over workflow runs for a repository."""
        params = self._workflow_run_params(status, created)
        for data in paginate(self, f"repos/{owner}/{repo}/actions/runs", params=params, items_key='workflow_runs'):
            yield WorkflowRun.from_dict(data)

    def iter_run_jobs(self, owner: str, repo: str, run_id: int) -> Iterator[Job]:
        """Iterate over the jobs of a workflow run."""
        path = f"repos/{owner}/{repo}/actions/runs/{run_id}/jobs"
        for data in paginate(self, path, items_key='jobs'):
            yield Job.from_dict(data)

    def iter_repository_admins(self, owner: str, repo: str) -> Iterator[Collaborator]:
        """Iterate over collaborators with admin permission on a repository."""
        path = f"repos/{owner}/{repo}/collaborators"
        for data in paginate(self, path, params={'permission': 'admin'}):
            yield Collaborator.from_dict(data)

    def iter_contributors(self, owner: str, repo: str, include_anon: bool = True) -> Iterator[Contributor]:
        """Iterate over repository contributors, optionally including anonymous ones."""
        params = {'anon': 1} if include_anon else {}
        for data in paginate(self, f"repos/{owner}/{repo}/contributors", params=params):
            yield Contributor.from_dict(data)
