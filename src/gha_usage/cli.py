#!/usr/bin/env python3
"""
Report GitHub Actions usage, organization info and repository rosters.

Reports are written to stdout; logs go to stderr and logs/gha_usage.log.
"""
import argparse
import logging
import os
import sys
import traceback
from typing import List, Optional

from dotenv import load_dotenv

from .config import UsageConfig, log_file, primary_org, secondary_org
from .github import GitHubAPIError
from .reports import (
    load_repo_list,
    report_batch,
    report_org_info,
    report_org_usage,
    report_repo_details,
    report_users,
)

# Load environment variables from .env
load_dotenv()


# -----------------------------
# Logging
# -----------------------------

def setup_logging(verbosity: int = 0, quiet: bool = False, log_path: Optional[str] = None):
    level = logging.WARNING
    if quiet:
        level = logging.ERROR
    elif verbosity > 1:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_path:
        try:
            os.makedirs(os.path.dirname(log_path) or '.', exist_ok=True)
            handlers.append(logging.FileHandler(log_path))
        except OSError as e:
            print(f"Warning: cannot write log file {log_path}: {e}", file=sys.stderr)
    logging.basicConfig(
        level=level,
        format='%(asctime)s | %(levelname)-8s | %(message)s',
        handlers=handlers,
    )


# -----------------------------
# Usage / argument parsing
# -----------------------------

class UsageError(Exception):
    """The command line did not match any report."""


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def usage_text() -> str:
    org, orgc = primary_org(), secondary_org()
    lines = [
        "usage:",
        f"\t -o -- Display Organization info for {org}",
        "\t -a -- Display all repo workflow usage as csv",
        "\t -a 2023-05-15 2023-08-14 -- Display all repo workflow usage between specified dates as csv",
        "\t -d <repo name> -- Display workflow details for specified repo",
        "\t -d <repo name> 2023-05-15 2023-08-14 -- Display workflow details for specified repo between specified dates",
        "\t -dd -- Same as '-d' but will also display workflow run details",
        "\t -f <file name> -- Same as '-d' but will process a series of repos from a json file",
        f"\t -c -- Display Organization info for {orgc}",
        f"\t -u -- Display repo & user info for {orgc} as csv",
        "",
    ]
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog='gha-usage', add_help=False)
    commands = parser.add_mutually_exclusive_group()
    commands.add_argument('-o', dest='org_info', action='store_true')
    commands.add_argument('-a', dest='all_usage', nargs='*', metavar='DATE')
    commands.add_argument('-d', dest='details', nargs='+', metavar='ARG')
    commands.add_argument('-dd', dest='run_details', nargs='+', metavar='ARG')
    commands.add_argument('-f', dest='batch', nargs='+', metavar='ARG')
    commands.add_argument('-c', dest='secondary_info', action='store_true')
    commands.add_argument('-u', dest='users', action='store_true')
    parser.add_argument('--token', type=str, help='Personal access token (overrides env)')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='Increase log verbosity')
    parser.add_argument('-q', '--quiet', action='store_true', help='Only log errors')
    return parser


def _split_dates(values: List[str], leading: int) -> Optional[List[Optional[str]]]:
    """Split ``[lead..., start, end]``; None when there are too many values."""
    if len(values) > leading + 2:
        return None
    rest = values[leading:] + [None, None]
    return values[:leading] + rest[:2]


def parse_command(argv: List[str]):
    """Parse argv into (command, positional values, namespace), or raise UsageError."""
    args = build_parser().parse_args(argv)

    if args.org_info:
        return 'org_info', [], args
    if args.secondary_info:
        return 'secondary_info', [], args
    if args.users:
        return 'users', [], args

    for command, leading in (('all_usage', 0), ('details', 1), ('run_details', 1), ('batch', 1)):
        values = getattr(args, command)
        if values is None:
            continue
        split = _split_dates(values, leading)
        if split is None:
            raise UsageError(f"too many arguments for {command}")
        return command, split, args

    raise UsageError("no report selected")


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(usage_text())
        return 0

    try:
        command, values, args = parse_command(argv)
    except UsageError:
        print(usage_text())
        return 0

    setup_logging(args.verbose, args.quiet, log_file())
    if values and bool(values[-2]) != bool(values[-1]):
        logging.warning("Both a start and an end date are needed for a date range; reporting all runs")

    try:
        config = UsageConfig(token=args.token)
    except ValueError as e:
        logging.error(f"Error: {e}")
        logging.error("Please set GITHUB_TOKEN in your environment or .env")
        return 1

    with config.make_client() as client:
        try:
            if command == 'org_info':
                report_org_info(client, config.PRIMARY_ORG)
            elif command == 'secondary_info':
                report_org_info(client, config.SECONDARY_ORG)
            elif command == 'users':
                report_users(client, config.SECONDARY_ORG)
            elif command == 'all_usage':
                report_org_usage(client, config.PRIMARY_ORG, *values)
            elif command in ('details', 'run_details'):
                repo, start, end = values
                report_repo_details(client, config.PRIMARY_ORG, repo, start, end,
                                    show_run_details=(command == 'run_details'))
            elif command == 'batch':
                path, start, end = values
                report_batch(client, config.PRIMARY_ORG, load_repo_list(path), start, end)
        except GitHubAPIError as e:
            logging.error(f"GitHub API error: {e}")
            if logging.getLogger().getEffectiveLevel() <= logging.DEBUG:
                traceback.print_exc()
            return 1
        except (OSError, ValueError) as e:
            logging.error(f"Error: {e}")
            return 1

    return 0


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logging.info("Report interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    run()
