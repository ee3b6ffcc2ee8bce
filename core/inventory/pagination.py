"""
core/inventory/pagination.py - Paginated accumulator

Drains a cursor based listing API into one complete list. The listing is
all-or-nothing: a failing page raises ProviderQueryError and nothing that was
accumulated so far is returned.

Example:
    def fetch_page(cursor):
        kwargs = {"NextToken": cursor} if cursor else {}
        response = ec2.describe_volumes(**kwargs)
        token = response.get("NextToken")
        return Page(response.get("Volumes", []), token, not token)

    volumes = collect_pages(fetch_page, service="ec2", operation="describe_volumes")
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from core.exceptions import ProviderQueryError, provider_errors

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a listing

    Attributes:
        items: items of this page
        next_cursor: cursor for the following page (ignored on the last page)
        is_last: True when no further page exists
    """

    items: Sequence[T]
    next_cursor: Any = None
    is_last: bool = True


def collect_pages(
    fetch_page: Callable[[Any], Page[T]],
    service: str = "unknown",
    operation: str = "unknown",
) -> list[T]:
    """Fetch every page of a listing, starting from an empty cursor

    Args:
        fetch_page: called with the current cursor (None for the first page)
        service: AWS service name, used in errors
        operation: API operation name, used in errors

    Returns:
        All items in listing order

    Raises:
        ProviderQueryError: a page request failed or the cursor stopped advancing
    """
    items: list[T] = []
    cursor: Any = None
    pages = 0

    while True:
        with provider_errors(service, operation):
            page = fetch_page(cursor)
        pages += 1
        items.extend(page.items)

        if page.is_last:
            break

        if page.next_cursor is None or page.next_cursor == cursor:
            raise ProviderQueryError(
                service,
                operation,
                error_message=f"pagination cursor did not advance after page {pages}",
            )
        cursor = page.next_cursor

    logger.debug("%s.%s: %d items in %d pages", service, operation, len(items), pages)
    return items
