"""Tests for task extraction."""

import re

import pytest

from worklog_sync.client import (
    ConfigurationError,
    MultipleTaskMode,
    TaskExtractionOptions,
    apply_tasks,
    extract_tasks,
)
from worklog_sync.client.options import compile_pattern
from worklog_sync.worklog import IDNameField

from conftest import make_entry

TASK = r"[A-Z]+-\d+"


def _task(key: str) -> IDNameField:
    return IDNameField(id=key, name=key)


@pytest.fixture
def entry():
    """Entry referencing tasks in summary, tags and project."""
    return make_entry(summary="CPT-1 fix login").model_copy(
        update={"project": IDNameField(id="p1", name="CPT-3 Maintenance")}
    )


@pytest.fixture
def tags() -> list[IDNameField]:
    """Tags attached to the entry."""
    return [IDNameField(id="t1", name="meeting"), IDNameField(id="t2", name="CPT-2")]


def _options(mode: MultipleTaskMode, **patterns: str) -> TaskExtractionOptions:
    return TaskExtractionOptions(
        summary_pattern=re.compile(patterns["summary"]) if "summary" in patterns else None,
        tags_pattern=re.compile(patterns["tags"]) if "tags" in patterns else None,
        project_pattern=re.compile(patterns["project"]) if "project" in patterns else None,
        multiple_task_mode=mode,
    )


class TestExtractTasks:
    """Test extract_tasks."""

    def test_no_patterns(self, entry, tags) -> None:
        """Test nothing is extracted without patterns."""
        opts = TaskExtractionOptions()

        assert opts.enabled is False
        assert extract_tasks(entry, tags, opts) == []

    def test_first_only_prefers_summary(self, entry, tags) -> None:
        """Test summary matches win over tags and project."""
        opts = _options(MultipleTaskMode.FIRST_ONLY, summary=TASK, tags=TASK, project=TASK)

        assert extract_tasks(entry, tags, opts) == [_task("CPT-1")]

    def test_first_only_falls_back_to_tags(self, entry, tags) -> None:
        """Test tags are used when the summary has no task."""
        entry = entry.model_copy(update={"summary": "fix login"})
        opts = _options(MultipleTaskMode.FIRST_ONLY, summary=TASK, tags=TASK, project=TASK)

        assert extract_tasks(entry, tags, opts) == [_task("CPT-2")]

    def test_first_only_falls_back_to_project(self, entry) -> None:
        """Test the project is used when nothing else matched."""
        entry = entry.model_copy(update={"summary": "fix login"})
        opts = _options(MultipleTaskMode.FIRST_ONLY, summary=TASK, tags=TASK, project=TASK)

        assert extract_tasks(entry, [], opts) == [_task("CPT-3")]

    def test_first_only_truncates_summary(self, entry, tags) -> None:
        """Test several summary matches are cut to the first."""
        entry = entry.model_copy(update={"summary": "CPT-7 and CPT-8"})
        opts = _options(MultipleTaskMode.FIRST_ONLY, summary=TASK)

        assert extract_tasks(entry, tags, opts) == [_task("CPT-7")]

    def test_split_concatenates_in_priority_order(self, entry, tags) -> None:
        """Test split mode keeps summary, tag and project tasks in order."""
        opts = _options(MultipleTaskMode.SPLIT, summary=TASK, tags=TASK, project=TASK)

        assert extract_tasks(entry, tags, opts) == [
            _task("CPT-1"),
            _task("CPT-2"),
            _task("CPT-3"),
        ]

    def test_split_skips_unconfigured_sources(self, entry, tags) -> None:
        """Test only configured sources contribute."""
        opts = _options(MultipleTaskMode.SPLIT, project=TASK)

        assert extract_tasks(entry, tags, opts) == [_task("CPT-3")]


class TestApplyTasks:
    """Test apply_tasks."""

    def test_entry_unchanged_without_tasks(self, entry) -> None:
        """Test the entry passes through when no task was found."""
        opts = _options(MultipleTaskMode.SPLIT, tags=TASK)

        assert apply_tasks(entry, [], opts) == [entry]

    def test_split_divides_time(self, entry, tags) -> None:
        """Test each task receives an even share of the entry's time."""
        opts = _options(MultipleTaskMode.SPLIT, summary=TASK, tags=TASK)

        parts = apply_tasks(entry, tags, opts)

        assert [p.task.name for p in parts] == ["CPT-1", "CPT-2"]
        assert all(p.total_duration.total_seconds() == 1800 for p in parts)


class TestOptionParsing:
    """Test option validation."""

    def test_parse_mode(self) -> None:
        """Test known modes parse."""
        assert MultipleTaskMode.parse("split") is MultipleTaskMode.SPLIT
        assert MultipleTaskMode.parse("first-only") is MultipleTaskMode.FIRST_ONLY

    def test_parse_unknown_mode(self) -> None:
        """Test unknown modes are rejected."""
        with pytest.raises(ConfigurationError):
            MultipleTaskMode.parse("all")

    def test_compile_invalid_pattern(self) -> None:
        """Test invalid patterns are rejected."""
        with pytest.raises(ConfigurationError):
            compile_pattern("([A-Z]", "tags-as-tasks-regex")

    def test_compile_empty_pattern(self) -> None:
        """Test an empty pattern means not configured."""
        assert compile_pattern("", "tags-as-tasks-regex") is None
