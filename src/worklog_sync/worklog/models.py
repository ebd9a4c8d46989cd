"""Pydantic models for the canonical worklog entry."""

import re
from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, field_validator


class IDNameField(BaseModel):
    """A provider key paired with its human readable label."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = ""

    def is_complete(self) -> bool:
        """Check whether both the ID and the name are set."""
        return bool(self.id and self.name)


class Entry(BaseModel):
    """One unit of tracked time, normalized from any provider."""

    client: IDNameField = IDNameField()
    project: IDNameField = IDNameField()
    task: IDNameField = IDNameField()
    summary: str = ""
    notes: str = ""
    start: datetime
    billable_duration: timedelta = timedelta(0)
    unbillable_duration: timedelta = timedelta(0)

    @field_validator("billable_duration", "unbillable_duration")
    @classmethod
    def _non_negative(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("duration must not be negative")
        return value

    @property
    def total_duration(self) -> timedelta:
        """Get the total time spent, billable and unbillable together."""
        return self.billable_duration + self.unbillable_duration

    def is_complete(self) -> bool:
        """Check if the entry carries everything a target needs.

        Returns:
            True if client, project and task are set and time was spent.
        """
        return (
            self.client.is_complete()
            and self.project.is_complete()
            and self.task.is_complete()
            and self.total_duration > timedelta(0)
        )

    def tasks_from_summary(self, pattern: re.Pattern[str]) -> list[IDNameField]:
        """Collect every task reference found in the summary.

        Args:
            pattern: Compiled pattern matching a task reference.

        Returns:
            Task references in the order they appear.
        """
        return _matches(pattern, self.summary)

    def tasks_from_tags(
        self,
        tags: list[IDNameField],
        pattern: re.Pattern[str],
    ) -> list[IDNameField]:
        """Collect task references from the names of the given tags.

        Args:
            tags: Tags attached to the entry by the source provider.
            pattern: Compiled pattern matching a task reference.

        Returns:
            Task references in tag order.
        """
        tasks: list[IDNameField] = []
        for tag in tags:
            tasks.extend(_matches(pattern, tag.name))
        return tasks

    def tasks_from_project(self, pattern: re.Pattern[str]) -> list[IDNameField]:
        """Collect task references found in the project name."""
        return _matches(pattern, self.project.name)

    def split_duration(self, parts: int) -> list["Entry"]:
        """Split the entry into evenly sized copies.

        The last copy receives the remainder, so the summed durations of
        the copies always equal the durations of this entry.

        Args:
            parts: Number of copies to produce.

        Returns:
            List of entry copies.

        Raises:
            ValueError: If parts is less than one.
        """
        if parts < 1:
            raise ValueError("parts must be at least 1")

        billable = self.billable_duration // parts
        unbillable = self.unbillable_duration // parts

        copies = []
        for idx in range(parts):
            if idx == parts - 1:
                billable = self.billable_duration - billable * (parts - 1)
                unbillable = self.unbillable_duration - unbillable * (parts - 1)
            copies.append(
                self.model_copy(
                    update={
                        "billable_duration": billable,
                        "unbillable_duration": unbillable,
                    }
                )
            )
        return copies


Entries = list[Entry]


def _matches(pattern: re.Pattern[str], text: str) -> list[IDNameField]:
    return [
        IDNameField(id=match.group(0), name=match.group(0))
        for match in pattern.finditer(text)
        if match.group(0)
    ]
