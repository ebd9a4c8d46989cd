"""Tempo Timesheets (Jira server) client, usable as source and target."""

import logging
from datetime import timedelta
from typing import Any

import httpx
from pydantic import TypeAdapter

from worklog_sync.client.errors import FetchError
from worklog_sync.client.http import HTTPClient
from worklog_sync.client.options import DEFAULT_REQUEST_TIMEOUT, FetchOptions, UploadOptions
from worklog_sync.client.uploader import BaseUploader
from worklog_sync.tempo.models import FetchEntry, SearchParams, UploadEntry
from worklog_sync.worklog import Entries, Entry, IDNameField, upload_durations

logger = logging.getLogger(__name__)

PATH_WORKLOG_SEARCH = "/rest/tempo-timesheets/4/worklogs/search"
PATH_WORKLOG_CREATE = "/rest/tempo-timesheets/4/worklogs"

_fetch_entries_adapter = TypeAdapter(list[FetchEntry])


class TempoClient(BaseUploader):
    """Client for the Tempo Timesheets REST API."""

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize Tempo client.

        Args:
            base_url: Jira server URL Tempo is installed on.
            username: Jira username.
            password: Jira password or personal access token.
            timeout: Seconds before a single request gives up.
            transport: Custom httpx transport.
        """
        self.http = HTTPClient(
            base_url=base_url,
            auth=(username, password),
            timeout=timeout,
            transport=transport,
        )

    def fetch_entries(self, opts: FetchOptions) -> Entries:
        """Search the worklogs of a worker within the window.

        Args:
            opts: Worker key and window.

        Returns:
            Normalized entries.

        Raises:
            FetchError: If the search failed or returned unexpected data.
        """
        params = SearchParams(
            from_date=opts.start.strftime("%Y-%m-%d"),
            to_date=opts.end.strftime("%Y-%m-%d"),
            worker=opts.user,
        )

        try:
            data = self.http.call(
                "POST",
                PATH_WORKLOG_SEARCH,
                json=params.model_dump(by_alias=True),
            )
            fetched = _fetch_entries_adapter.validate_python(data or [])
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to search Tempo worklogs: {e}")
            raise FetchError(e) from e

        entries = [self._to_entry(item) for item in fetched]
        logger.info(f"Found {len(entries)} Tempo worklogs")
        return entries

    @staticmethod
    def _to_entry(item: FetchEntry) -> Entry:
        issue = item.issue
        unbillable = max(item.time_spent_seconds - item.billable_seconds, 0)

        return Entry(
            client=IDNameField(id=issue.account_key, name=issue.account_key),
            project=IDNameField(id=str(issue.project_id), name=issue.project_key),
            task=IDNameField(id=str(issue.id), name=issue.key),
            summary=issue.summary,
            notes=item.comment,
            start=item.start_date,
            billable_duration=timedelta(seconds=item.billable_seconds),
            unbillable_duration=timedelta(seconds=unbillable),
        )

    def upload_entry(self, entry: Entry, opts: UploadOptions) -> None:
        """Create one worklog.

        Args:
            entry: Entry to upload.
            opts: Upload options.

        Raises:
            httpx.HTTPError: If Tempo rejected the worklog.
        """
        billable_seconds, time_spent_seconds = upload_durations(entry, opts)

        upload_entry = UploadEntry(
            comment=entry.notes,
            origin_task_id=entry.task.id,
            started=entry.start.astimezone().strftime("%Y-%m-%d"),
            billable_seconds=billable_seconds,
            time_spent_seconds=time_spent_seconds,
            worker=opts.user,
        )

        self.http.call("POST", PATH_WORKLOG_CREATE, json=upload_entry.model_dump(by_alias=True))
        logger.debug(f"Created Tempo worklog for {entry.task.name} on {upload_entry.started}")

    def close(self) -> None:
        """Close the HTTP client."""
        self.http.close()

    def __enter__(self) -> "TempoClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
