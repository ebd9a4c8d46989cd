"""Canonical worklog model shared by every provider."""

from worklog_sync.worklog.duration import round_to_minute, upload_durations
from worklog_sync.worklog.entries import NO_TASK, group_by_task, split_by_completeness
from worklog_sync.worklog.models import Entries, Entry, IDNameField

__all__ = [
    "Entries",
    "Entry",
    "IDNameField",
    "NO_TASK",
    "group_by_task",
    "round_to_minute",
    "split_by_completeness",
    "upload_durations",
]
