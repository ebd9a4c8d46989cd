"""Pydantic models for Clockify API responses."""

import re
from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field

_DURATION_PATTERN = re.compile(
    r"^P(?:(?P<days>\d+)D)?"
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+(?:\.\d+)?)S)?)?$"
)


def parse_iso8601_duration(duration_str: str | None) -> timedelta:
    """Parse ISO 8601 duration string.

    Args:
        duration_str: Duration in ISO 8601 format (e.g., 'PT4H', 'PT30M', 'PT1H30M')

    Returns:
        Parsed duration, zero if the string is empty or malformed.
    """
    if not duration_str:
        return timedelta(0)

    match = _DURATION_PATTERN.match(duration_str)
    if not match:
        return timedelta(0)

    parts = match.groupdict()
    return timedelta(
        days=int(parts["days"] or 0),
        hours=int(parts["hours"] or 0),
        minutes=int(parts["minutes"] or 0),
        seconds=float(parts["seconds"] or 0),
    )


def parse_timestamp(value: str) -> datetime:
    """Parse a Clockify UTC timestamp like 2021-10-02T08:00:00Z."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class ClockifyProject(BaseModel):
    """Clockify project, as embedded in hydrated time entries."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    client_id: str | None = Field(default=None, alias="clientId")
    client_name: str | None = Field(default=None, alias="clientName")


class ClockifyTag(BaseModel):
    """Clockify tag model."""

    id: str
    name: str


class ClockifyTask(BaseModel):
    """Clockify task model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    project_id: str | None = Field(default=None, alias="projectId")


class ClockifyTimeInterval(BaseModel):
    """Start, end and duration of a time entry."""

    start: str
    end: str | None = None
    duration: str | None = None


class ClockifyTimeEntry(BaseModel):
    """Hydrated Clockify time entry model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    description: str | None = None
    billable: bool = False
    project: ClockifyProject | None = None
    task: ClockifyTask | None = None
    tags: list[ClockifyTag] | None = None
    time_interval: ClockifyTimeInterval = Field(alias="timeInterval")

    @property
    def start_time(self) -> datetime:
        """Get start time of entry."""
        return parse_timestamp(self.time_interval.start)

    @property
    def end_time(self) -> datetime | None:
        """Get end time of entry, None while the timer is running."""
        if not self.time_interval.end:
            return None
        return parse_timestamp(self.time_interval.end)

    @property
    def duration(self) -> timedelta:
        """Get duration from the ISO 8601 duration string."""
        return parse_iso8601_duration(self.time_interval.duration)
