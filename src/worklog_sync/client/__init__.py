"""Provider-independent fetch and upload machinery."""

from worklog_sync.client.errors import ConfigurationError, FetchError, UploadError, WorklogSyncError
from worklog_sync.client.fetcher import (
    Fetcher,
    PaginatedFetchOptions,
    PaginatedFetchResponse,
    fetch_all_pages,
)
from worklog_sync.client.options import (
    FetchOptions,
    MultipleTaskMode,
    TaskExtractionOptions,
    UploadOptions,
)
from worklog_sync.client.progress import NullProgressTracker, ProgressTracker, RichProgressTracker
from worklog_sync.client.tasks import apply_tasks, extract_tasks
from worklog_sync.client.uploader import (
    BaseUploader,
    Uploader,
    UploadResult,
    collect_results,
    upload_entries,
)

__all__ = [
    "BaseUploader",
    "ConfigurationError",
    "FetchError",
    "FetchOptions",
    "Fetcher",
    "MultipleTaskMode",
    "NullProgressTracker",
    "PaginatedFetchOptions",
    "PaginatedFetchResponse",
    "ProgressTracker",
    "RichProgressTracker",
    "TaskExtractionOptions",
    "UploadError",
    "UploadOptions",
    "UploadResult",
    "Uploader",
    "WorklogSyncError",
    "apply_tasks",
    "collect_results",
    "extract_tasks",
    "fetch_all_pages",
    "upload_entries",
]
