"""
Runtime configuration read from the environment.

The CLI loads a local .env file into the environment before this is built.
"""
import os
from typing import Optional

from .github.client import DEFAULT_API_VERSION, DEFAULT_BASE_URL, DEFAULT_TIMEOUT, GitHubClient

DEFAULT_PRIMARY_ORG = "bcgov"
DEFAULT_SECONDARY_ORG = "bcgov-c"
DEFAULT_LOG_FILE = os.path.join("logs", "gha_usage.log")


def primary_org() -> str:
    return os.getenv("GHA_PRIMARY_ORG", DEFAULT_PRIMARY_ORG)


def secondary_org() -> str:
    return os.getenv("GHA_SECONDARY_ORG", DEFAULT_SECONDARY_ORG)


def log_file() -> Optional[str]:
    """Log file path; an empty GHA_LOG_FILE turns file logging off."""
    return os.getenv("GHA_LOG_FILE", DEFAULT_LOG_FILE) or None


class UsageConfig:
    """Configuration for the Actions usage reports."""

    def __init__(self, token: Optional[str] = None):
        self.GITHUB_TOKEN = token or os.getenv("GITHUB_TOKEN")
        if not self.GITHUB_TOKEN:
            raise ValueError("GITHUB_TOKEN environment variable is required")

        self.GITHUB_API = os.getenv("GITHUB_API", DEFAULT_BASE_URL)
        self.API_VERSION = os.getenv("GITHUB_API_VERSION", DEFAULT_API_VERSION)
        self.PRIMARY_ORG = primary_org()
        # Reporting on the secondary org needs a token with full private repo scope
        self.SECONDARY_ORG = secondary_org()
        try:
            self.REQUEST_TIMEOUT = float(os.getenv("GHA_REQUEST_TIMEOUT", str(DEFAULT_TIMEOUT)))
        except ValueError:
            raise ValueError("GHA_REQUEST_TIMEOUT must be a number of seconds") from None

    def make_client(self) -> GitHubClient:
        return GitHubClient(
            token=self.GITHUB_TOKEN,
            base_url=self.GITHUB_API,
            api_version=self.API_VERSION,
            timeout=self.REQUEST_TIMEOUT,
        )
