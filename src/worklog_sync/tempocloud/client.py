"""Tempo Cloud client, used as an upload target."""

import logging
from typing import Any

import httpx

from worklog_sync.client.http import HTTPClient, token_headers
from worklog_sync.client.options import DEFAULT_REQUEST_TIMEOUT, UploadOptions
from worklog_sync.client.uploader import BaseUploader
from worklog_sync.tempocloud.models import JiraIssue, UploadEntry
from worklog_sync.worklog import Entry, upload_durations

logger = logging.getLogger(__name__)

PATH_WORKLOG_CREATE = "/4/worklogs"
PATH_JIRA_ISSUE = "/rest/api/3/issue/{key}"


class TempoCloudClient(BaseUploader):
    """Uploads worklogs to Tempo Cloud.

    Tempo Cloud identifies issues by their numeric Jira ID, so every
    upload first resolves the entry's task key through the Jira API.
    """

    TEMPO_BASE_URL = "https://api.tempo.io"

    def __init__(
        self,
        tempo_token: str,
        jira_url: str,
        jira_username: str,
        jira_api_token: str,
        tempo_url: str | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize Tempo Cloud client.

        Args:
            tempo_token: Tempo API token.
            jira_url: Jira Cloud site URL.
            jira_username: Jira account email.
            jira_api_token: Jira API token.
            tempo_url: Tempo API URL. Defaults to the public Tempo API.
            timeout: Seconds before a single request gives up.
            transport: Custom httpx transport, shared by both APIs.
        """
        self.tempo = HTTPClient(
            base_url=tempo_url or self.TEMPO_BASE_URL,
            headers=token_headers(tempo_token),
            timeout=timeout,
            transport=transport,
        )
        self.jira = HTTPClient(
            base_url=jira_url,
            auth=(jira_username, jira_api_token),
            timeout=timeout,
            transport=transport,
        )

    def get_issue(self, key: str) -> JiraIssue:
        """Look up a Jira issue by its key.

        Raises:
            httpx.HTTPError: If the issue could not be fetched.
        """
        data = self.jira.call("GET", PATH_JIRA_ISSUE.format(key=key))
        return JiraIssue.model_validate(data)

    def upload_entry(self, entry: Entry, opts: UploadOptions) -> None:
        """Resolve the entry's issue and create one worklog.

        Args:
            entry: Entry to upload; its task name is the Jira issue key.
            opts: Upload options.

        Raises:
            httpx.HTTPError: If Jira or Tempo rejected a request.
        """
        issue = self.get_issue(entry.task.name)
        billable_seconds, time_spent_seconds = upload_durations(entry, opts)
        start = entry.start.astimezone()

        upload_entry = UploadEntry(
            description=entry.summary,
            issue_id=issue.id,
            start_date=start.strftime("%Y-%m-%d"),
            start_time=start.strftime("%H:%M:%S"),
            billable_seconds=billable_seconds,
            time_spent_seconds=time_spent_seconds,
            author_account_id=opts.user,
        )

        self.tempo.call("POST", PATH_WORKLOG_CREATE, json=upload_entry.model_dump(by_alias=True))
        logger.debug(f"Created Tempo Cloud worklog for {issue.key} on {upload_entry.start_date}")

    def close(self) -> None:
        """Close both HTTP clients."""
        self.tempo.close()
        self.jira.close()

    def __enter__(self) -> "TempoCloudClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
