"""
Data models for GitHub API responses.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, TypedDict

ANON_SUFFIX = " (anon)"


class RateLimit(TypedDict):
    """GitHub API rate limit information."""
    limit: int
    remaining: int
    reset: int
    used: int


@dataclass(frozen=True)
class Organization:
    """Organization information from GitHub API."""
    login: str
    name: Optional[str] = None
    created_at: Optional[str] = None
    public_repos: int = 0
    total_private_repos: int = 0

    @property
    def display_name(self) -> str:
        return self.name or self.login

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Organization':
        """Create an Organization instance from a dictionary."""
        return cls(
            login=data.get('login', ''),
            name=data.get('name'),
            created_at=data.get('created_at'),
            public_repos=data.get('public_repos') or 0,
            total_private_repos=data.get('total_private_repos') or 0,
        )


@dataclass(frozen=True)
class Repository:
    """Repository information from GitHub API."""
    name: str
    full_name: Optional[str] = None
    description: Optional[str] = None
    updated_at: Optional[str] = None
    owner_login: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Repository':
        """Create a Repository instance from a dictionary."""
        owner = data.get('owner') or {}
        return cls(
            name=data.get('name', ''),
            full_name=data.get('full_name'),
            description=data.get('description'),
            updated_at=data.get('updated_at'),
            owner_login=owner.get('login'),
        )


@dataclass(frozen=True)
class WorkflowRun:
    """A single GitHub Actions workflow run."""
    id: int
    name: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    status: Optional[str] = None
    conclusion: Optional[str] = None
    run_attempt: int = 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WorkflowRun':
        """Create a WorkflowRun instance from a dictionary."""
        return cls(
            id=data.get('id', 0),
            name=data.get('name'),
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
            status=data.get('status'),
            conclusion=data.get('conclusion'),
            run_attempt=data.get('run_attempt') or 1,
        )


@dataclass(frozen=True)
class Job:
    """A job belonging to a workflow run."""
    id: int
    run_id: Optional[int] = None
    name: Optional[str] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Job':
        """Create a Job instance from a dictionary."""
        return cls(
            id=data.get('id', 0),
            run_id=data.get('run_id'),
            name=data.get('name'),
            started_at=data.get('started_at'),
            completed_at=data.get('completed_at'),
        )


@dataclass(frozen=True)
class Collaborator:
    """Repository collaborator."""
    login: str
    html_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Collaborator':
        return cls(login=data.get('login', ''), html_url=data.get('html_url'))


@dataclass(frozen=True)
class Contributor:
    """Repository contributor information.

    Anonymous contributors (commits from an email with no GitHub account)
    come back without a login and carry only a free-text ``name``.
    """
    login: Optional[str] = None
    name: Optional[str] = None
    contributions: int = 0

    @property
    def is_anonymous(self) -> bool:
        return not self.login

    @property
    def display_name(self) -> str:
        """Login for account holders, ``"<name> (anon)"`` otherwise."""
        if not self.is_anonymous:
            return self.login
        return f"{self.name or '<blank>'}{ANON_SUFFIX}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Contributor':
        """Create a Contributor instance from a dictionary."""
        return cls(
            login=data.get('login'),
            name=data.get('name'),
            contributions=data.get('contributions', 0),
        )
