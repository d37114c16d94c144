"""Pagination over Cloud Controller collections.

v2 list endpoints answer with an envelope::

    {"total_results": 3, "total_pages": 2, "prev_url": null,
     "next_url": "/v2/organizations?page=2", "resources": [...]}

``next_url`` is relative to the API endpoint and is null on the last page.
v3 endpoints carry a ``pagination`` object instead; only the counters are
used from it because the console pages v3 audit events one page at a time.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import httpx

from cf_admin_client.errors.exceptions import PaginationLimitError

logger = logging.getLogger(__name__)

PageFetcher = Callable[[str], Awaitable[httpx.Response]]


@dataclass
class Envelope:
    """One page of a v2 collection."""

    resources: list[Any]
    next_url: str | None = None
    total_results: int | None = None
    total_pages: int | None = None

    @classmethod
    def from_response(cls, response: httpx.Response) -> "Envelope":
        data = response.json()
        return cls(
            resources=list(data.get("resources") or []),
            next_url=data.get("next_url") or None,
            total_results=data.get("total_results"),
            total_pages=data.get("total_pages"),
        )


async def walk_pages(
    first_page: httpx.Response,
    fetch_page: PageFetcher,
    *,
    max_pages: int,
) -> list[Any]:
    """Collect the resources of every page, starting from an already fetched one.

    Args:
        first_page: Response holding the first page.
        fetch_page: Coroutine function that GETs a ``next_url`` and returns its response.
        max_pages: Maximum number of pages, the first one included.

    Returns:
        Resources of all pages, concatenated in the order the server returned them.

    Raises:
        PaginationLimitError: If the server still reports a next page after ``max_pages`` pages.
    """
    envelope = Envelope.from_response(first_page)
    resources = list(envelope.resources)
    pages = 1

    while envelope.next_url is not None:
        if pages >= max_pages:
            raise PaginationLimitError(
                f"Collection exceeds {max_pages} pages, refusing to follow {envelope.next_url}",
                path=envelope.next_url,
                max_pages=max_pages,
            )
        logger.debug(f"Following next_url {envelope.next_url} (page {pages + 1})")
        envelope = Envelope.from_response(await fetch_page(envelope.next_url))
        resources.extend(envelope.resources)
        pages += 1

    return resources


@dataclass
class Pagination:
    """Counters of a v3 paginated response."""

    total_results: int
    total_pages: int
    page: int

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None, page: int) -> "Pagination":
        data = data or {}
        return cls(
            total_results=int(data.get("total_results") or 0),
            total_pages=int(data.get("total_pages") or 0),
            page=page,
        )

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
