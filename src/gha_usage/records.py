"""
Per-invocation report records.
"""
from dataclasses import dataclass, astuple
from typing import Optional, Tuple

from .timing import ms_to_minutes

ROSTER_HEADER = ("repo-name", "description", "last-updated", "owner", "admin", "admin-url", "contributors")
BLANK_DESCRIPTION = "<blank>"


@dataclass(frozen=True)
class RepositorySummary:
    """Aggregated Actions usage for one repository."""
    repo: str
    run_count: int
    job_time_ms: int
    run_time_ms: int
    total_success_count: int
    range_start: str = "creation"
    range_end: str = "today"

    @property
    def job_minutes(self) -> float:
        return ms_to_minutes(self.job_time_ms)

    @property
    def run_minutes(self) -> float:
        return ms_to_minutes(self.run_time_ms)


@dataclass(frozen=True)
class RosterRow:
    """One row of the repo/admin/contributor roster.

    A row describes a repository, an admin, or a contributor, never more
    than one; the columns that don't apply stay blank. Build rows with
    :meth:`repo_row`, :meth:`admin_row` and :meth:`contributor_row`.
    """
    repo_name: str = ""
    description: str = ""
    last_updated: str = ""
    owner: str = ""
    admin: str = ""
    admin_url: str = ""
    contributor: str = ""

    @classmethod
    def repo_row(
        cls,
        name: str,
        description: Optional[str],
        last_updated: Optional[str],
        owner: Optional[str]
    ) -> 'RosterRow':
        return cls(
            repo_name=name,
            description=description or BLANK_DESCRIPTION,
            last_updated=last_updated or "",
            owner=owner or "",
        )

    @classmethod
    def admin_row(cls, login: str, url: Optional[str]) -> 'RosterRow':
        return cls(admin=login, admin_url=url or "")

    @classmethod
    def contributor_row(cls, name: str) -> 'RosterRow':
        return cls(contributor=name)

    def fields(self) -> Tuple[str, ...]:
        return astuple(self)
