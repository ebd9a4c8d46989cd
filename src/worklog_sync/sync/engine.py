"""Sync engine moving worklogs from the source to the target provider."""

import logging
import queue
import threading
from datetime import date, datetime, timedelta

from worklog_sync.client import (
    FetchError,
    FetchOptions,
    Fetcher,
    Uploader,
    UploadOptions,
    UploadResult,
    collect_results,
)
from worklog_sync.config import Config
from worklog_sync.worklog import split_by_completeness, upload_durations

logger = logging.getLogger(__name__)

# Window start used when nothing was synced yet.
DEFAULT_LOOKBACK = timedelta(days=30)


class SyncResult:
    """Results from a sync operation."""

    def __init__(self) -> None:
        """Initialize sync result."""
        self.entries_synced = 0
        self.entries_skipped = 0
        self.entries_failed = 0
        self.errors: list[str] = []

    def add_success(self) -> None:
        """Record a successful upload."""
        self.entries_synced += 1

    def add_skip(self) -> None:
        """Record a skipped entry."""
        self.entries_skipped += 1

    def add_failure(self, error: str) -> None:
        """Record a failed upload."""
        self.entries_failed += 1
        self.errors.append(error)

    def __str__(self) -> str:
        """String representation of results."""
        return (
            f"Synced: {self.entries_synced}, "
            f"Skipped: {self.entries_skipped}, "
            f"Failed: {self.entries_failed}"
        )


class SyncEngine:
    """Main synchronization engine."""

    def __init__(self, config: Config, fetcher: Fetcher, uploader: Uploader) -> None:
        """Initialize sync engine.

        Args:
            config: Application configuration.
            fetcher: Source provider.
            uploader: Target provider.
        """
        self.config = config
        self.fetcher = fetcher
        self.uploader = uploader

    def resolve_window(
        self,
        start: date | None = None,
        end: date | None = None,
    ) -> tuple[datetime, datetime]:
        """Resolve the inclusive fetch window.

        Args:
            start: First day; defaults to the last sync date or 30 days ago.
            end: Last day; defaults to today.

        Returns:
            Tuple of (start of first day, end of last day).
        """
        if start is None:
            last_sync = self.config.storage.get_last_sync_date()
            start = (last_sync or datetime.now() - DEFAULT_LOOKBACK).date()

        if end is None:
            end = date.today()

        return (
            datetime.combine(start, datetime.min.time()),
            datetime.combine(end, datetime.max.time().replace(microsecond=0)),
        )

    def _drain(
        self,
        results: "queue.Queue[UploadResult]",
        total: int,
        cancel: threading.Event,
    ) -> list[UploadResult]:
        """Collect every upload result, cancelling the upload on Ctrl-C.

        An interrupt only sets cancel; workers finish the request in flight
        and publish a cancelled result for each remaining entry, so draining
        continues until all total results arrived.
        """
        collected: list[UploadResult] = []
        while len(collected) < total:
            try:
                collected.extend(collect_results(results, 1))
            except KeyboardInterrupt:
                if not cancel.is_set():
                    logger.warning("Sync interrupted, waiting for uploads in flight")
                cancel.set()
        return collected

    def sync(
        self,
        fetch_opts: FetchOptions,
        upload_opts: UploadOptions,
        dry_run: bool = False,
        cancel: threading.Event | None = None,
    ) -> SyncResult:
        """Fetch entries from the source and upload them to the target.

        Args:
            fetch_opts: User, window and task extraction options of the source.
            upload_opts: User and duration options of the target.
            dry_run: If True, only log what would be uploaded.
            cancel: Event cancelling the upload between entries.

        Returns:
            Sync results.
        """
        result = SyncResult()

        logger.info(f"Syncing worklogs from {fetch_opts.start} to {fetch_opts.end}")

        try:
            entries = self.fetcher.fetch_entries(fetch_opts)
        except FetchError as e:
            logger.error(f"Sync failed: {e}")
            result.add_failure(str(e))
            return result

        complete, incomplete = split_by_completeness(entries)
        logger.info(f"Found {len(entries)} entries, {len(incomplete)} incomplete")

        for entry in incomplete:
            logger.warning(
                f"Skipping incomplete entry: {entry.start} {entry.project.name or '-'} "
                f"{entry.task.name or '-'} {entry.summary}"
            )
            result.add_skip()

        if dry_run:
            for entry in complete:
                billable_seconds, time_spent_seconds = upload_durations(entry, upload_opts)
                logger.info(
                    f"[DRY RUN] Would upload: {entry.task.name} on {entry.start:%Y-%m-%d} -> "
                    f"{time_spent_seconds}s spent, {billable_seconds}s billable"
                )
                result.add_success()
            return result

        if cancel is None:
            cancel = threading.Event()

        results = self.uploader.upload_entries(complete, upload_opts, cancel)
        for error in self._drain(results, len(complete), cancel):
            if error is None:
                result.add_success()
            else:
                result.add_failure(str(error))

        if result.entries_failed == 0:
            self.config.storage.set_last_sync_date(datetime.now())

        logger.info(f"Sync complete: {result}")
        return result
