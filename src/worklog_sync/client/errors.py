"""Exceptions raised by fetchers, uploaders and their configuration."""

from worklog_sync.worklog import Entry


class WorklogSyncError(Exception):
    """Base class of every error raised by the synchronizer."""


class ConfigurationError(WorklogSyncError):
    """Invalid or unsupported option combination, raised before any request."""


class FetchError(WorklogSyncError):
    """Fetching entries from the source failed as a whole."""

    def __init__(self, reason: object) -> None:
        super().__init__(f"failed to fetch entries: {reason}")


class UploadError(WorklogSyncError):
    """Uploading a single entry failed."""

    def __init__(self, entry: Entry, reason: object, cancelled: bool = False) -> None:
        """Initialize upload error.

        Args:
            entry: The entry that was not uploaded.
            reason: Underlying exception or message.
            cancelled: True if the entry was never attempted because the
                upload was cancelled.
        """
        super().__init__(f"failed to upload entries: {entry.task.name or '-'}: {reason}")
        self.entry = entry
        self.cancelled = cancelled
