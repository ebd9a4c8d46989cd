"""Tempo Timesheets (Jira server) integration."""

from worklog_sync.tempo.client import TempoClient
from worklog_sync.tempo.models import FetchEntry, Issue, SearchParams, UploadEntry

__all__ = ["TempoClient", "FetchEntry", "Issue", "SearchParams", "UploadEntry"]
