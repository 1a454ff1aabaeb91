from __future__ import annotations

import socket
from typing import Any, Dict, List, Optional, Tuple

import pytest

from gha_usage.github import (
    Collaborator,
    Contributor,
    Job,
    Organization,
    Repository,
    WorkflowRun,
)


@pytest.fixture(autouse=True)
def _test_env(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "test-token")
    monkeypatch.setenv("GHA_LOG_FILE", "")
    monkeypatch.delenv("GITHUB_API", raising=False)
    monkeypatch.delenv("GHA_PRIMARY_ORG", raising=False)
    monkeypatch.delenv("GHA_SECONDARY_ORG", raising=False)
    monkeypatch.delenv("GHA_REQUEST_TIMEOUT", raising=False)


@pytest.fixture(autouse=True)
def _disable_network(monkeypatch):
    def guard(*a, **k):
        raise RuntimeError("Network disabled in tests.")

    monkeypatch.setattr(socket, "create_connection", guard)
    monkeypatch.setattr(socket.socket, "connect", guard, raising=False)


class FakeGitHubClient:
    """In-memory stand-in for GitHubClient serving canned API records."""

    def __init__(
        self,
        orgs: Optional[Dict[str, Dict[str, Any]]] = None,
        repos: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        org_admins: Optional[Dict[str, List[str]]] = None,
        runs: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        run_counts: Optional[Dict[Tuple[str, Optional[str], Optional[str]], int]] = None,
        jobs: Optional[Dict[int, List[Dict[str, Any]]]] = None,
        collaborators: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        contributors: Optional[Dict[str, List[Dict[str, Any]]]] = None,
    ) -> None:
        self.orgs = orgs or {}
        self.repos = repos or {}
        self.org_admins = org_admins or {}
        self.runs = runs or {}
        self.run_counts = run_counts or {}
        self.jobs = jobs or {}
        self.collaborators = collaborators or {}
        self.contributors = contributors or {}
        self.calls: List[Tuple[Any, ...]] = []
        self.closed = False

    def get_organization(self, org):
        self.calls.append(("get_organization", org))
        return Organization.from_dict(self.orgs[org])

    def iter_organization_repositories(self, org, sort="full_name"):
        self.calls.append(("iter_organization_repositories", org))
        for data in self.repos.get(org, []):
            yield Repository.from_dict(data)

    def iter_organization_admins(self, org):
        self.calls.append(("iter_organization_admins", org))
        yield from self.org_admins.get(org, [])

    def count_workflow_runs(self, owner, repo, status=None, created=None):
        self.calls.append(("count_workflow_runs", owner, repo, status, created))
        return self.run_counts.get((repo, status, created), 0)

    def iter_workflow_runs(self, owner, repo, status=None, created=None):
        self.calls.append(("iter_workflow_runs", owner, repo, status, created))
        for data in self.runs.get(repo, []):
            yield WorkflowRun.from_dict(data)

    def iter_run_jobs(self, owner, repo, run_id):
        self.calls.append(("iter_run_jobs", owner, repo, run_id))
        for data in self.jobs.get(run_id, []):
            yield Job.from_dict(data)

    def iter_repository_admins(self, owner, repo):
        self.calls.append(("iter_repository_admins", owner, repo))
        for data in self.collaborators.get(repo, []):
            yield Collaborator.from_dict(data)

    def iter_contributors(self, owner, repo, include_anon=True):
        self.calls.append(("iter_contributors", owner, repo, include_anon))
        for data in self.contributors.get(repo, []):
            yield Contributor.from_dict(data)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


@pytest.fixture
def demo_client() -> FakeGitHubClient:
    """Repository "demo": two successful runs, five successful runs overall."""
    return FakeGitHubClient(
        runs={
            "demo": [
                {"id": 1, "name": "build", "status": "completed", "conclusion": "success",
                 "created_at": "2023-06-01T00:00:00Z", "updated_at": "2023-06-01T00:01:10Z"},
                {"id": 2, "name": "deploy", "status": "completed", "conclusion": "success",
                 "created_at": "2023-06-01T01:00:00Z", "updated_at": "2023-06-01T01:00:35Z"},
            ],
        },
        run_counts={("demo", "success", None): 5},
        jobs={
            1: [
                {"id": 11, "run_id": 1, "started_at": "2023-06-01T00:00:05Z", "completed_at": "2023-06-01T00:00:45Z"},
                {"id": 12, "run_id": 1, "started_at": "2023-06-01T00:00:45Z", "completed_at": "2023-06-01T00:01:05Z"},
            ],
            2: [
                {"id": 21, "run_id": 2, "started_at": "2023-06-01T01:00:02Z", "completed_at": "2023-06-01T01:00:32Z"},
            ],
        },
    )


@pytest.fixture
def roster_client() -> FakeGitHubClient:
    return FakeGitHubClient(
        org_admins={"bcgov-c": ["boss"]},
        repos={
            "bcgov-c": [
                {"name": "alpha", "full_name": "bcgov-c/alpha", "description": "Tool, for X",
                 "updated_at": "2023-06-01T00:00:00Z", "owner": {"login": "bcgov-c"}},
                {"name": "beta", "full_name": "bcgov-c/beta", "description": None,
                 "updated_at": "2023-06-02T00:00:00Z", "owner": {"login": "bcgov-c"}},
            ],
        },
        collaborators={
            "alpha": [
                {"login": "boss", "html_url": "https://github.com/boss"},
                {"login": "alice", "html_url": "https://github.com/alice"},
            ],
            "beta": [
                {"login": "boss", "html_url": "https://github.com/boss"},
            ],
        },
        contributors={
            "alpha": [
                {"login": "alice", "contributions": 40},
                {"name": "Jane Doe", "type": "Anonymous", "contributions": 3},
                {"name": "Jane Doe", "type": "Anonymous", "contributions": 1},
                {"name": "Smith, J", "type": "Anonymous", "contributions": 2},
            ],
            "beta": [
                {"name": "Jane Doe", "type": "Anonymous", "contributions": 5},
            ],
        },
    )


@pytest.fixture
def make_client():
    return FakeGitHubClient
