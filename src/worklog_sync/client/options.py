"""Options shared by fetchers and uploaders."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from worklog_sync.client.errors import ConfigurationError
from worklog_sync.client.progress import NullProgressTracker, ProgressTracker

# Page size supported by every paginated source we talk to.
DEFAULT_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE_PARAM = "per_page"
DEFAULT_PAGE_PARAM = "page"

# Seconds before a single HTTP call gives up.
DEFAULT_REQUEST_TIMEOUT = 30.0


class MultipleTaskMode(str, Enum):
    """How to treat an entry that references more than one task."""

    # Split the entry across all tasks found, dividing its time evenly.
    SPLIT = "split"
    # Keep only the first task, preferring summary, then tags, then project.
    FIRST_ONLY = "first-only"

    @classmethod
    def parse(cls, value: "str | MultipleTaskMode") -> "MultipleTaskMode":
        """Parse a mode name coming from the CLI or the config file.

        Args:
            value: Mode name, e.g. "split" or "first-only".

        Returns:
            The matching mode.

        Raises:
            ConfigurationError: If the name is not a known mode.
        """
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(mode.value for mode in cls)
            raise ConfigurationError(
                f"unknown multiple task mode {value!r}, choose one of: {choices}"
            ) from None


def compile_pattern(value: str | None, option: str) -> re.Pattern[str] | None:
    """Compile an optional task pattern.

    Args:
        value: Regular expression, or None/empty when not configured.
        option: Option name used in the error message.

    Returns:
        Compiled pattern or None.

    Raises:
        ConfigurationError: If the expression does not compile.
    """
    if not value:
        return None
    try:
        return re.compile(value)
    except re.error as e:
        raise ConfigurationError(f"invalid {option} {value!r}: {e}") from e


@dataclass(frozen=True)
class TaskExtractionOptions:
    """Patterns used to derive tasks from free-form entry fields."""

    summary_pattern: re.Pattern[str] | None = None
    tags_pattern: re.Pattern[str] | None = None
    project_pattern: re.Pattern[str] | None = None
    multiple_task_mode: MultipleTaskMode = MultipleTaskMode.FIRST_ONLY

    @property
    def enabled(self) -> bool:
        """Check whether any pattern is configured."""
        return any((self.summary_pattern, self.tags_pattern, self.project_pattern))


@dataclass(frozen=True)
class FetchOptions:
    """Options of a single fetch; the window is inclusive on both ends."""

    user: str
    start: datetime
    end: datetime
    task_extraction: TaskExtractionOptions = field(default_factory=TaskExtractionOptions)


@dataclass(frozen=True)
class UploadOptions:
    """Options of a single upload, shared read-only by every worker."""

    user: str
    treat_duration_as_billed: bool = False
    round_to_closest_minute: bool = False
    tracker: ProgressTracker = field(default_factory=NullProgressTracker)
