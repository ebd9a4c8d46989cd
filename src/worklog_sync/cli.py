"""Command-line interface for worklog synchronizer."""

import logging
import sys
import threading
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from worklog_sync import __version__
from worklog_sync.client import (
    ConfigurationError,
    FetchOptions,
    MultipleTaskMode,
    RichProgressTracker,
)
from worklog_sync.client.registry import FETCHERS, UPLOADERS, get_fetcher, get_uploader
from worklog_sync.config import Config
from worklog_sync.sync import SyncEngine
from worklog_sync.utils import get_logger, setup_logging

app = typer.Typer(help="Synchronize worklogs between time-tracking providers")
console = Console()
logger = get_logger(__name__)

# Settings and secrets prompted for by `configure`, per provider.
PROVIDER_SETTINGS: dict[str, list[str]] = {
    "clockify": ["url", "workspace"],
    "tempo": ["url", "username"],
    "tempo-cloud": ["url", "jira-url", "jira-username"],
}
PROVIDER_SECRETS: dict[str, list[str]] = {
    "clockify": ["clockify-api-key"],
    "tempo": ["tempo-password"],
    "tempo-cloud": ["tempo-cloud-token", "jira-api-token"],
}


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        console.print("[red]Invalid date format. Use YYYY-MM-DD[/red]")
        raise typer.Exit(code=1)


@app.command()
def sync(
    source: Optional[str] = typer.Option(
        None, "--source", help=f"Source provider ({', '.join(FETCHERS)})."
    ),
    target: Optional[str] = typer.Option(
        None, "--target", help=f"Target provider ({', '.join(UPLOADERS)})."
    ),
    source_user: Optional[str] = typer.Option(
        None, "--source-user", help="User whose entries are fetched from the source."
    ),
    target_user: Optional[str] = typer.Option(
        None, "--target-user", help="User the entries are logged for on the target."
    ),
    start: Optional[str] = typer.Option(
        None,
        "--start",
        help="First day to sync (YYYY-MM-DD). Defaults to last sync date or 30 days ago.",
    ),
    end: Optional[str] = typer.Option(
        None, "--end", help="Last day to sync (YYYY-MM-DD). Defaults to today."
    ),
    tags_as_tasks_regex: Optional[str] = typer.Option(
        None, "--tags-as-tasks-regex", help="Regex extracting tasks from tags."
    ),
    task_in_summary_regex: Optional[str] = typer.Option(
        None, "--task-in-summary-regex", help="Regex extracting tasks from the summary."
    ),
    task_in_project_regex: Optional[str] = typer.Option(
        None, "--task-in-project-regex", help="Regex extracting tasks from the project name."
    ),
    multiple_task_mode: Optional[str] = typer.Option(
        None,
        "--multiple-task-mode",
        help=f"Handling of entries with several tasks ({', '.join(m.value for m in MultipleTaskMode)}).",
    ),
    treat_duration_as_billed: Optional[bool] = typer.Option(
        None,
        "--treat-duration-as-billed/--no-treat-duration-as-billed",
        help="Upload the whole duration as billable.",
    ),
    round_to_closest_minute: Optional[bool] = typer.Option(
        None,
        "--round-to-closest-minute/--no-round-to-closest-minute",
        help="Round durations to the closest minute.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be synced without actually uploading entries.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Configuration directory. Defaults to ~/.worklog-sync/",
    ),
) -> None:
    """Synchronize worklogs from the source to the target provider."""
    setup_logging(
        log_level=logging.DEBUG if verbose else logging.INFO,
        config_dir=config_dir,
    )

    logger.info(f"Worklog Synchronizer v{__version__}")

    start_date = _parse_date(start)
    end_date = _parse_date(end)

    config = Config(
        config_dir,
        overrides={
            "source": source,
            "target": target,
            "source-user": source_user,
            "target-user": target_user,
            "tags-as-tasks-regex": tags_as_tasks_regex,
            "task-in-summary-regex": task_in_summary_regex,
            "task-in-project-regex": task_in_project_regex,
            "multiple-task-mode": multiple_task_mode,
            "treat-duration-as-billed": treat_duration_as_billed,
            "round-to-closest-minute": round_to_closest_minute,
        },
    )

    tracker = RichProgressTracker()
    try:
        fetcher = get_fetcher(config)
        uploader = get_uploader(config)
        engine = SyncEngine(config=config, fetcher=fetcher, uploader=uploader)

        window_start, window_end = engine.resolve_window(start_date, end_date)
        fetch_opts = FetchOptions(
            user=config.require("source-user"),
            start=window_start,
            end=window_end,
            task_extraction=config.task_extraction_options(),
        )
        upload_opts = config.upload_options(tracker)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(code=1)

    mode_str = "[bold cyan]DRY RUN[/bold cyan]" if dry_run else "[bold green]SYNC[/bold green]"
    console.print(f"Starting {mode_str} from {config.get('source')} to {config.get('target')}...")

    cancel = threading.Event()
    try:
        with tracker:
            result = engine.sync(fetch_opts, upload_opts, dry_run=dry_run, cancel=cancel)
    except KeyboardInterrupt:
        console.print("[yellow]Sync cancelled before any entry was uploaded[/yellow]")
        raise typer.Exit(code=1)

    if cancel.is_set():
        console.print("[yellow]Sync cancelled, remaining entries were not uploaded[/yellow]")

    table = Table(title="Sync Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="magenta")
    table.add_row("Synced", str(result.entries_synced))
    table.add_row("Skipped", str(result.entries_skipped))
    table.add_row("Failed", str(result.entries_failed))

    console.print(table)

    if result.errors:
        console.print("\n[red]Errors:[/red]")
        for error in result.errors:
            console.print(f"  - {error}")

    exit_code = 0 if result.entries_failed == 0 else 1
    raise typer.Exit(code=exit_code)


@app.command()
def configure(
    provider: str = typer.Argument(
        ..., help=f"Provider to configure ({', '.join(PROVIDER_SETTINGS)})."
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Configuration directory. Defaults to ~/.worklog-sync/",
    ),
) -> None:
    """Store the settings and secrets of a provider."""
    setup_logging(config_dir=config_dir)

    if provider not in PROVIDER_SETTINGS:
        console.print(f"[red]Unknown provider {provider!r}[/red]")
        raise typer.Exit(code=1)

    config = Config(config_dir)
    settings = config.provider(provider)

    console.print(f"[yellow]{provider} configuration[/yellow]")
    for key in PROVIDER_SETTINGS[provider]:
        value = Prompt.ask(f"{key}", default=settings.get(key) or None)
        if value:
            settings[key] = value.strip()
    config.set(provider, settings)

    for name in PROVIDER_SECRETS[provider]:
        secret = Prompt.ask(f"{name}", password=True)
        config.storage.set_token(name, secret.strip())

    console.print(f"[green]✓ {provider} configuration saved[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"Worklog Synchronizer v{__version__}")


def main() -> None:
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        console.print(f"[red]Unexpected error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
