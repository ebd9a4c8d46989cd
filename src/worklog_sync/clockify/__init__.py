"""Clockify API integration."""

from worklog_sync.clockify.client import ClockifyClient
from worklog_sync.clockify.models import (
    ClockifyProject,
    ClockifyTag,
    ClockifyTask,
    ClockifyTimeEntry,
)

__all__ = [
    "ClockifyClient",
    "ClockifyProject",
    "ClockifyTask",
    "ClockifyTimeEntry",
    "ClockifyTag",
]
