"""Per-entry progress reporting used by uploaders."""

import threading
from typing import Any, Protocol

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TaskID, TextColumn, TimeElapsedColumn

from worklog_sync.worklog import Entry


class ProgressTracker(Protocol):
    """Receives a start and a stop signal for every uploaded entry."""

    def start_tracking(self, entry: Entry) -> Any:
        """Start tracking an entry and return a handle for stop_tracking."""
        ...

    def stop_tracking(self, handle: Any, error: Exception | None) -> None:
        """Stop tracking, error is None when the upload succeeded."""
        ...


class NullProgressTracker:
    """Tracker that reports nothing."""

    def start_tracking(self, entry: Entry) -> None:
        return None

    def stop_tracking(self, handle: Any, error: Exception | None) -> None:
        return None


def _describe(entry: Entry) -> str:
    task = entry.task.name or "(no task)"
    start = entry.start.strftime("%Y-%m-%d %H:%M")
    return f"{task} {start} {entry.summary}".strip()


class RichProgressTracker:
    """Renders one spinner line per entry with rich.

    Worker threads call start_tracking/stop_tracking concurrently; rich's
    Progress is thread safe, the lock only guards the handle bookkeeping.
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize progress tracker.

        Args:
            console: Console to render on. Defaults to a new stderr console.
        """
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            TimeElapsedColumn(),
            console=console or Console(stderr=True),
        )
        self._lock = threading.Lock()
        self._descriptions: dict[TaskID, str] = {}

    def start_tracking(self, entry: Entry) -> TaskID:
        description = _describe(entry)
        task_id = self.progress.add_task(description, total=1)
        with self._lock:
            self._descriptions[task_id] = description
        return task_id

    def stop_tracking(self, handle: TaskID, error: Exception | None) -> None:
        with self._lock:
            description = self._descriptions.pop(handle, "")

        if error is None:
            status = f"[green]✓[/green] {description}"
        else:
            status = f"[red]✗[/red] {description}: {error}"

        self.progress.update(handle, description=status, completed=1)

    def __enter__(self) -> "RichProgressTracker":
        """Context manager entry, starts rendering."""
        self.progress.start()
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit, stops rendering."""
        self.progress.stop()
