"""Minimal GitHub REST client used by the usage reports.

Example usage:
    ```python
    from gha_usage.github import GitHubClient

    with GitHubClient(token="your_github_token") as client:
        for run in client.iter_workflow_runs("org-name", "repo", status="success"):
            print(run.name)
    ```
"""
from .client import BaseGitHubClient, GitHubClient
from .errors import (
    GitHubAPIError,
    NetworkError,
    NotFoundError,
    RateLimitedError,
    UnauthorizedError,
)
from .models import (
    Collaborator,
    Contributor,
    Job,
    Organization,
    RateLimit,
    Repository,
    WorkflowRun,
)
from .utils import (
    build_created_filter,
    is_rate_limited,
    paginate,
    parse_rate_limit_headers,
)

__all__ = [
    'GitHubClient',
    'BaseGitHubClient',
    'GitHubAPIError',
    'NetworkError',
    'NotFoundError',
    'RateLimitedError',
    'UnauthorizedError',
    'Collaborator',
    'Contributor',
    'Job',
    'Organization',
    'RateLimit',
    'Repository',
    'WorkflowRun',
    'build_created_filter',
    'is_rate_limited',
    'paginate',
    'parse_rate_limit_headers',
]
