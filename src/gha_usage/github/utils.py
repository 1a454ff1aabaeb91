"""Utility functions for GitHub API interactions."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional

from requests import Response

from .models import RateLimit

if TYPE_CHECKING:
    from .client import BaseGitHubClient

logger = logging.getLogger(__name__)

# GitHub max per_page is 100
MAX_PER_PAGE = 100


def paginate(
    client: BaseGitHubClient,
    path: str,
    params: Optional[Dict[str, Any]] = None,
    items_key: Optional[str] = None,
    per_page: int = MAX_PER_PAGE,
) -> Iterator[Dict[str, Any]]:
    """Lazily iterate over every item of a paginated GitHub endpoint.

    Pages are requested one at a time as the caller consumes items, so the
    caller can print results while later pages are still unfetched.

    Args:
        client: client used to issue the GET requests
        path: API path relative to the client's base URL
        params: Query parameters
        items_key: Key holding the item list for endpoints that wrap their
            results in an object (``workflow_runs``, ``jobs``). ``None`` for
            endpoints that return a bare list.
        per_page: Number of items per page (max 100)

    Yields:
        Items from all pages, in server order
    """
    params = dict(params or {})
    params['per_page'] = min(per_page, MAX_PER_PAGE)
    page = 1

    while True:
        response = client.get(path, params={**params, 'page': page})
        # Empty repositories answer 204 with no body
        if response.status_code == 204 or not response.content:
            return

        payload = response.json()
        page_items = (payload or {}).get(items_key) if items_key else payload
        if not page_items:
            return

        logger.debug("Fetched page %d of %s (%d items)", page, path, len(page_items))
        yield from page_items

        # Check if we've reached the last page
        link_header = response.headers.get('Link', '')
        if 'rel="next"' not in link_header:
            return

        page += 1


def parse_rate_limit_headers(response: Response) -> RateLimit:
    """Parse rate limit headers from a GitHub API response.

    Args:
        response: requests.Response object

    Returns:
        RateLimit dictionary; missing headers read as 0
    """
    def _header(name: str) -> int:
        try:
            return int(response.headers.get(name, 0))
        except (TypeError, ValueError):
            return 0

    return {
        'limit': _header('X-RateLimit-Limit'),
        'remaining': _header('X-RateLimit-Remaining'),
        'reset': _header('X-RateLimit-Reset'),
        'used': _header('X-RateLimit-Used'),
    }


def is_rate_limited(response: Response) -> bool:
    """Check whether a response was rejected because the quota is exhausted."""
    if response.status_code == 429:
        return True
    if response.status_code != 403:
        return False
    return response.headers.get('X-RateLimit-Remaining') == '0'


def build_created_filter(start_date: Optional[str], end_date: Optional[str]) -> Optional[str]:
    """Return the ``created`` search qualifier for a date range.

    Only a complete range produces a filter; a lone start or end date is
    ignored.
    """
    if start_date and end_date:
        return f"{start_date}..{end_date}"
    return None
