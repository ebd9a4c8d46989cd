"""Fetcher interface and the generic paginated fetch loop."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from worklog_sync.client.errors import FetchError
from worklog_sync.client.options import (
    DEFAULT_PAGE_PARAM,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PAGE_SIZE_PARAM,
    FetchOptions,
)
from worklog_sync.worklog import Entries

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Source of worklog entries."""

    def fetch_entries(self, opts: FetchOptions) -> Entries:
        """Fetch every entry of the user within the window.

        Raises:
            FetchError: If any request or decoding step failed. No partial
                result is returned.
        """
        ...


@dataclass(frozen=True)
class PaginatedFetchResponse:
    """Paging metadata reported by the source for one page.

    total_entries is None when the source does not report a total; the
    walk then stops on the first empty page.
    """

    entries_per_page: int
    total_entries: int | None = None


PaginatedFetchFunc = Callable[[str], tuple[Any, PaginatedFetchResponse]]
PaginatedParseFunc = Callable[[Any, FetchOptions], Entries]


@dataclass(frozen=True)
class PaginatedFetchOptions:
    """Everything the paginated loop needs to walk a source."""

    fetch_opts: FetchOptions
    url: str
    fetch_func: PaginatedFetchFunc
    parse_func: PaginatedParseFunc
    page_size: int = DEFAULT_PAGE_SIZE
    page_size_param: str = DEFAULT_PAGE_SIZE_PARAM
    page_param: str = DEFAULT_PAGE_PARAM


@dataclass
class _PaginationState:
    page: int
    page_size: int
    fetched: int = 0

    def is_done(self, response: PaginatedFetchResponse) -> bool:
        if response.entries_per_page == 0:
            return True
        return response.total_entries is not None and self.fetched >= response.total_entries


def page_url(url: str, page: int, opts: PaginatedFetchOptions) -> str:
    """Build the URL of a page, keeping the query parameters of url."""
    return str(
        httpx.URL(url).copy_merge_params(
            {opts.page_param: page, opts.page_size_param: opts.page_size}
        )
    )


def fetch_all_pages(opts: PaginatedFetchOptions) -> Entries:
    """Walk every page of a paginated source.

    Args:
        opts: URL, paging parameters and the provider's fetch/parse pair.

    Returns:
        All normalized entries, in fetch order.

    Raises:
        FetchError: If fetching or parsing any page failed.
    """
    state = _PaginationState(page=1, page_size=opts.page_size)
    entries: Entries = []

    while True:
        url = page_url(opts.url, state.page, opts)
        logger.debug(f"Fetching page {state.page}: {url}")

        try:
            raw_page, response = opts.fetch_func(url)
            parsed = opts.parse_func(raw_page, opts.fetch_opts)
        except FetchError:
            raise
        except Exception as e:
            logger.error(f"Failed to fetch page {state.page}: {e}")
            raise FetchError(e) from e

        entries.extend(parsed)
        state.fetched += response.entries_per_page

        if state.is_done(response):
            break
        state.page += 1

    logger.info(f"Fetched {len(entries)} entries in {state.page} page(s)")
    return entries
