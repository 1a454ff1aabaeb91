"""
Exceptions raised by the GitHub client.
"""
from datetime import datetime, timezone
from typing import Optional


class GitHubAPIError(Exception):
    """A GitHub API request failed."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class UnauthorizedError(GitHubAPIError):
    """The token is missing, expired or rejected (HTTP 401)."""


class NotFoundError(GitHubAPIError):
    """The resource does not exist or the token cannot see it (HTTP 404)."""


class RateLimitedError(GitHubAPIError):
    """The rate limit is exhausted (HTTP 403 with no remaining quota, or 429)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        reset: Optional[int] = None,
    ) -> None:
        super().__init__(message, status_code=status_code, url=url)
        self.reset = reset

    @property
    def reset_at(self) -> Optional[datetime]:
        """When the quota resets, if the server said so."""
        if not self.reset:
            return None
        return datetime.fromtimestamp(self.reset, timezone.utc)


class NetworkError(GitHubAPIError):
    """The request never got a response (connection failure or timeout)."""
