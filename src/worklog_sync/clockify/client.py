"""Clockify API client, used as a worklog source."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx

from worklog_sync.client.fetcher import PaginatedFetchOptions, PaginatedFetchResponse, fetch_all_pages
from worklog_sync.client.http import HTTPClient, token_headers
from worklog_sync.client.options import DEFAULT_REQUEST_TIMEOUT, FetchOptions
from worklog_sync.client.tasks import apply_tasks
from worklog_sync.clockify.models import ClockifyTimeEntry
from worklog_sync.worklog import Entries, Entry, IDNameField

logger = logging.getLogger(__name__)

# Clockify rejects pages larger than this for the time entry endpoint.
PAGE_SIZE = 50
PAGE_SIZE_PARAM = "page-size"


def _utc(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class ClockifyClient:
    """Client for Clockify API."""

    BASE_URL = "https://api.clockify.me/api"
    PATH_TIME_ENTRIES = "/v1/workspaces/{workspace}/user/{user}/time-entries"

    def __init__(
        self,
        api_key: str,
        workspace: str,
        base_url: str | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize Clockify client.

        Args:
            api_key: Clockify API key.
            workspace: ID of the workspace to read entries from.
            base_url: API base URL. Defaults to the public Clockify API.
            timeout: Seconds before a single request gives up.
            transport: Custom httpx transport.
        """
        self.workspace = workspace
        self.http = HTTPClient(
            base_url=base_url or self.BASE_URL,
            headers=token_headers(api_key, token_name="", header="X-Api-Key"),
            timeout=timeout,
            transport=transport,
        )

    def fetch_entries(self, opts: FetchOptions) -> Entries:
        """Fetch the user's time entries within the window.

        Args:
            opts: User, window and task extraction options.

        Returns:
            Normalized entries.

        Raises:
            FetchError: If any page could not be fetched or parsed.
        """
        path = self.PATH_TIME_ENTRIES.format(workspace=self.workspace, user=opts.user)
        url = httpx.URL(
            path,
            params={"start": _utc(opts.start), "end": _utc(opts.end), "hydrated": "true"},
        )

        return fetch_all_pages(
            PaginatedFetchOptions(
                fetch_opts=opts,
                url=str(url),
                fetch_func=self._fetch_page,
                parse_func=self._parse_page,
                page_size=PAGE_SIZE,
                page_size_param=PAGE_SIZE_PARAM,
            )
        )

    def _fetch_page(self, url: str) -> tuple[Any, PaginatedFetchResponse]:
        data = self.http.call("GET", url) or []
        # Clockify does not report a total, the walk ends on an empty page.
        return data, PaginatedFetchResponse(entries_per_page=len(data))

    def _parse_page(self, data: Any, opts: FetchOptions) -> Entries:
        entries: Entries = []
        for item in data:
            time_entry = ClockifyTimeEntry.model_validate(item)
            if time_entry.end_time is None:
                logger.debug(f"Skipping running timer entry: {time_entry.id}")
                continue

            entry = self._to_entry(time_entry)
            if opts.task_extraction.enabled:
                tags = [IDNameField(id=tag.id, name=tag.name) for tag in time_entry.tags or []]
                entries.extend(apply_tasks(entry, tags, opts.task_extraction))
            else:
                entries.append(entry)
        return entries

    @staticmethod
    def _to_entry(time_entry: ClockifyTimeEntry) -> Entry:
        project = time_entry.project
        task = time_entry.task
        duration = time_entry.duration
        description = time_entry.description or ""

        return Entry(
            client=IDNameField(
                id=(project.client_id or "") if project else "",
                name=(project.client_name or "") if project else "",
            ),
            project=IDNameField(id=project.id, name=project.name) if project else IDNameField(),
            task=IDNameField(id=task.id, name=task.name) if task else IDNameField(),
            summary=description,
            notes=description,
            start=time_entry.start_time,
            billable_duration=duration if time_entry.billable else timedelta(0),
            unbillable_duration=timedelta(0) if time_entry.billable else duration,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self.http.close()

    def __enter__(self) -> "ClockifyClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
