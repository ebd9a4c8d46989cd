"""Pytest configuration and fixtures."""

import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from worklog_sync.config import Config
from worklog_sync.utils import StorageManager
from worklog_sync.worklog import Entry, IDNameField


@pytest.fixture
def temp_config_dir() -> Path:
    """Create a temporary configuration directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def storage_manager(temp_config_dir: Path) -> StorageManager:
    """Create a storage manager with temporary directory."""
    return StorageManager(temp_config_dir)


@pytest.fixture
def config(temp_config_dir: Path) -> Config:
    """Create a config instance with temporary directory."""
    return Config(temp_config_dir)


@pytest.fixture
def start() -> datetime:
    """Start time shared by sample entries."""
    return datetime(2021, 10, 2, 9, 0, 0)


def make_entry(
    task: str = "CPT-2014",
    start: datetime | None = None,
    billable: int = 3600,
    unbillable: int = 0,
    summary: str = "Meet with The Winter Soldier",
    notes: str = "I met with The Winter Soldier",
) -> Entry:
    """Build a complete entry logged against the given task key."""
    return Entry(
        client=IDNameField(id="My Awesome Company", name="My Awesome Company"),
        project=IDNameField(id="456", name="MARVEL"),
        task=IDNameField(id=task, name=task) if task else IDNameField(),
        summary=summary,
        notes=notes,
        start=start or datetime(2021, 10, 2, 9, 0, 0),
        billable_duration=timedelta(seconds=billable),
        unbillable_duration=timedelta(seconds=unbillable),
    )


@pytest.fixture
def sample_entry(start: datetime) -> Entry:
    """Create a sample complete entry."""
    return make_entry(start=start)


@pytest.fixture
def sample_entries(start: datetime) -> list[Entry]:
    """Three entries, two of them logged against the same task."""
    return [
        make_entry("CPT-2014", start, billable=3600),
        make_entry("CPT-2015", start, billable=1800, unbillable=1800),
        make_entry("CPT-2014", start + timedelta(hours=2), unbillable=3600),
    ]
