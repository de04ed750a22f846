"""Sequential pagination over list endpoints.

`fetch_all` requests the first page with an enlarged `per_page`, then keeps
asking for `page + 1` while the last page advertises a `next` link. Pages are
fetched one at a time and concatenated in fetch order.

The following page number is inferred by increment; the server's `next` link
is not followed. This assumes contiguous integer page numbers.
"""

import logging
from collections.abc import Callable, Mapping
from typing import TypeVar

from tenkft_client.errors.exceptions import APIError, IncompletePaginationError
from tenkft_client.models.base import Collection

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=Collection)


def fetch_all(
    fetch_page: Callable[[dict[str, str]], C],
    opts: Mapping[str, str] | None = None,
    per_page: int | None = None,
) -> C:
    """Fetch every page of a collection.

    Args:
        fetch_page: Fetches one page given the query options.
        opts: Query options for every page. Not modified.
        per_page: Page size override applied to every request.

    Returns:
        One collection holding all items, with the paging of the last page.

    Raises:
        APIError: The first page failed.
        IncompletePaginationError: A later page failed. Its `collection`
            holds everything fetched before the failure.
    """
    page_opts = dict(opts or {})
    if per_page is not None:
        page_opts["per_page"] = str(per_page)

    first = fetch_page(dict(page_opts))
    collection = type(first)(data=list(first.data), paging=first.paging)

    while collection.paging.has_next():
        next_page = collection.paging.next_page()
        page_opts["page"] = str(next_page)

        try:
            page = fetch_page(dict(page_opts))
        except APIError as e:
            logger.warning(f"Stopping pagination at page {next_page} after {len(collection)} items: {e}")
            raise IncompletePaginationError(
                f"Failed to fetch page {next_page}: {e}",
                collection=collection,
                page=next_page,
                status_code=e.status_code,
                response=e.response,
            ) from e

        collection.extend(page)

    return collection
