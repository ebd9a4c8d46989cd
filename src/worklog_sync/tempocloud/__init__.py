"""Tempo Cloud integration."""

from worklog_sync.tempocloud.client import TempoCloudClient
from worklog_sync.tempocloud.models import JiraIssue, UploadEntry

__all__ = ["TempoCloudClient", "JiraIssue", "UploadEntry"]
