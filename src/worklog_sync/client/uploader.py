"""Uploader interface and the concurrent, group-ordered upload engine."""

import logging
import queue
import threading
from collections.abc import Callable
from typing import Protocol

from worklog_sync.client.errors import UploadError
from worklog_sync.client.options import UploadOptions
from worklog_sync.worklog import Entries, Entry, group_by_task

logger = logging.getLogger(__name__)

# Result of one entry: None on success.
UploadResult = UploadError | None
UploadOneFunc = Callable[[Entry, UploadOptions], None]


class Uploader(Protocol):
    """Target of worklog entries."""

    def upload_entries(
        self,
        entries: Entries,
        opts: UploadOptions,
        cancel: threading.Event | None = None,
    ) -> "queue.Queue[UploadResult]":
        """Start uploading entries and return the queue results arrive on.

        Exactly len(entries) results are published on the queue.
        """
        ...


def _upload_tracked(entry: Entry, upload_one: UploadOneFunc, opts: UploadOptions) -> UploadResult:
    # Tracker failures are display problems only and never change the result.
    handle = None
    try:
        handle = opts.tracker.start_tracking(entry)
    except Exception as e:
        logger.warning(f"Progress tracking failed for {entry.task.name}: {e}")

    error: UploadError | None = None
    try:
        upload_one(entry, opts)
    except Exception as e:
        logger.error(f"Failed to upload entry {entry.task.name} {entry.start}: {e}")
        error = e if isinstance(e, UploadError) else UploadError(entry, e)

    try:
        opts.tracker.stop_tracking(handle, error)
    except Exception as e:
        logger.warning(f"Progress tracking failed for {entry.task.name}: {e}")

    return error


def _upload_group(
    entries: Entries,
    upload_one: UploadOneFunc,
    opts: UploadOptions,
    results: "queue.Queue[UploadResult]",
    cancel: threading.Event | None,
) -> None:
    for entry in entries:
        if cancel is not None and cancel.is_set():
            results.put(UploadError(entry, "upload cancelled", cancelled=True))
            continue

        results.put(_upload_tracked(entry, upload_one, opts))


def upload_entries(
    entries: Entries,
    upload_one: UploadOneFunc,
    opts: UploadOptions,
    cancel: threading.Event | None = None,
) -> "queue.Queue[UploadResult]":
    """Upload entries concurrently, one worker thread per task group.

    Entries of the same task are uploaded one after the other by the same
    worker; groups run in parallel and finish in any order. Once cancel
    is set, workers stop issuing requests and publish a cancelled
    UploadError for every remaining entry.

    Args:
        entries: Entries to upload.
        upload_one: Provider function uploading a single entry; raises on
            failure.
        opts: Upload options, shared read-only by every worker.
        cancel: Optional event cancelling the upload between entries.

    Returns:
        Queue receiving exactly one result per entry.
    """
    results: "queue.Queue[UploadResult]" = queue.Queue()
    groups = group_by_task(entries)

    logger.debug(f"Uploading {len(entries)} entries in {len(groups)} group(s)")

    for task_name, group in groups.items():
        worker = threading.Thread(
            target=_upload_group,
            args=(group, upload_one, opts, results, cancel),
            name=f"upload-{task_name or 'no-task'}",
            daemon=True,
        )
        worker.start()

    return results


def collect_results(
    results: "queue.Queue[UploadResult]",
    total: int,
    timeout: float | None = None,
) -> list[UploadResult]:
    """Drain exactly total results from an upload queue.

    Args:
        results: Queue returned by upload_entries.
        total: Number of entries submitted.
        timeout: Seconds to wait for each result, None waits forever.

    Returns:
        Results in completion order.

    Raises:
        queue.Empty: If a result did not arrive within timeout.
    """
    return [results.get(timeout=timeout) for _ in range(total)]


class BaseUploader:
    """Uploader running a provider's single-entry upload concurrently.

    Subclasses implement upload_entry for their wire format.
    """

    def upload_entry(self, entry: Entry, opts: UploadOptions) -> None:
        raise NotImplementedError

    def upload_entries(
        self,
        entries: Entries,
        opts: UploadOptions,
        cancel: threading.Event | None = None,
    ) -> "queue.Queue[UploadResult]":
        return upload_entries(entries, self.upload_entry, opts, cancel)
