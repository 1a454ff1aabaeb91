"""
Actions usage, organization and roster reports.

Every report issues its requests one after another and prints as it goes:
headers come before rows, and per-run detail lines come before the summary
block.
"""
import json
import logging
from pathlib import Path
from typing import List, Optional, Set, Union

from .github import GitHubClient, build_created_filter
from .output import RowWriter
from .records import ROSTER_HEADER, RepositorySummary, RosterRow
from .timing import duration_ms, format_minutes, ms_to_minutes, total_duration_ms

logger = logging.getLogger(__name__)

USAGE_HEADER = ("repo-name", "workflow-runs")


def collect_job_time(client: GitHubClient, owner: str, repo: str, run_id: int) -> int:
    """Sum the durations (ms) of every job in a workflow run.

    Job durations track billed runner time more closely than the run's own
    timestamps, at the cost of one extra request per run.
    """
    jobs = client.iter_run_jobs(owner, repo, run_id)
    return total_duration_ms((job.started_at, job.completed_at) for job in jobs)


def report_repo_details(
    client: GitHubClient,
    owner: str,
    repo: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    show_run_details: bool = False,
    writer: Optional[RowWriter] = None
) -> RepositorySummary:
    """Print successful workflow run counts and durations for a repository.

    Args:
        client: GitHub client
        owner: Organization (or user) owning the repository
        repo: Repository name
        start_date: Start of the creation date range (YYYY-MM-DD)
        end_date: End of the creation date range (YYYY-MM-DD)
        show_run_details: Print one line per run before the summary
        writer: Output destination, stdout by default

    Returns:
        The aggregated RepositorySummary
    """
    writer = writer or RowWriter()
    created = build_created_filter(start_date, end_date)
    logger.info(f"Collecting workflow runs for {owner}/{repo} (created={created or 'any'})")

    total_success_count = client.count_workflow_runs(owner, repo, status='success')

    run_count = 0
    job_time_ms = 0
    run_time_ms = 0
    for run in client.iter_workflow_runs(owner, repo, status='success', created=created):
        run_count += 1
        job_time = collect_job_time(client, owner, repo, run.id)
        job_time_ms += job_time

        if show_run_details:
            writer.row(run.name, format_minutes(ms_to_minutes(job_time)), run.created_at)

        run_time_ms += duration_ms(run.created_at, run.updated_at)

    if created:
        summary = RepositorySummary(repo, run_count, job_time_ms, run_time_ms, total_success_count,
                                    range_start=start_date, range_end=end_date)
    else:
        summary = RepositorySummary(repo, run_count, job_time_ms, run_time_ms, total_success_count)

    span = f"{summary.range_start} - {summary.range_end}"
    writer.line('---')
    writer.line(f"{repo} - Successful run count from {span}: {summary.run_count}")
    writer.line(f"{repo} - Job time (min) from {span}: {format_minutes(summary.job_minutes)}")
    writer.line(f"{repo} - Successful workflow run count: {summary.total_success_count}")
    writer.line(f"{repo} - Workflow run time (min): {format_minutes(summary.run_minutes)}")
    return summary


def load_repo_list(path: Union[str, Path]) -> List[str]:
    """Read a JSON array of repository names from ``path``."""
    path = Path(path)
    with path.open('r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(data, list) or not all(isinstance(name, str) for name in data):
        raise ValueError(f"{path} must contain a JSON array of repository names")
    return data


def report_batch(
    client: GitHubClient,
    owner: str,
    repos: List[str],
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    writer: Optional[RowWriter] = None
) -> List[RepositorySummary]:
    """Run report_repo_details for each repository in order."""
    writer = writer or RowWriter()
    logger.info(f"Batch reporting {len(repos)} repositories")
    return [report_repo_details(client, owner, repo, start_date, end_date, writer=writer) for repo in repos]


def report_org_usage(
    client: GitHubClient,
    org: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    writer: Optional[RowWriter] = None
) -> int:
    """Print a ``repo-name, workflow-runs`` row for every repo with runs.

    Only run counts are fetched (one request per repository); job-level
    timing across a whole organization costs too many requests.

    Returns:
        Number of repositories printed
    """
    writer = writer or RowWriter()
    created = build_created_filter(start_date, end_date)

    writer.row(*USAGE_HEADER)
    printed = 0
    for repo in client.iter_organization_repositories(org):
        count = client.count_workflow_runs(org, repo.name, created=created)
        logger.debug(f"{org}/{repo.name}: {count} workflow runs")
        if count > 0:
            writer.row(repo.name, count)
            printed += 1
    return printed


def fetch_org_admins(client: GitHubClient, org: str) -> Set[str]:
    return set(client.iter_organization_admins(org))


def report_users(client: GitHubClient, org: str, writer: Optional[RowWriter] = None) -> None:
    """Print repository, admin and contributor rows for an organization.

    Repository admins who are already organization admins are left out.
    Anonymous contributors are listed once per repository under their
    ``"<name> (anon)"`` label.
    """
    writer = writer or RowWriter()
    org_admins = fetch_org_admins(client, org)
    logger.info(f"{org} has {len(org_admins)} organization admins")

    writer.row(*ROSTER_HEADER)
    for repo in client.iter_organization_repositories(org):
        writer.row(*RosterRow.repo_row(repo.name, repo.description, repo.updated_at, repo.owner_login).fields())

        for admin in client.iter_repository_admins(org, repo.name):
            if admin.login in org_admins:
                continue
            writer.row(*RosterRow.admin_row(admin.login, admin.html_url).fields())

        seen_anon: Set[str] = set()
        for contributor in client.iter_contributors(org, repo.name, include_anon=True):
            name = contributor.display_name.replace(',', ' ')
            if contributor.is_anonymous:
                if name in seen_anon:
                    continue
                seen_anon.add(name)
            writer.row(*RosterRow.contributor_row(name).fields())


def report_org_info(client: GitHubClient, org: str, writer: Optional[RowWriter] = None) -> None:
    writer = writer or RowWriter()
    info = client.get_organization(org)
    writer.line(info.display_name)
    writer.line(f"Created at: {info.created_at}")
    writer.line(f"Public Repo Count: {info.public_repos}")
    writer.line(f"Private Repo Count: {info.total_private_repos}")
