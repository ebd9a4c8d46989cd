"""Task extraction from free-form entry fields."""

from worklog_sync.client.options import MultipleTaskMode, TaskExtractionOptions
from worklog_sync.worklog import Entry, IDNameField


def extract_tasks(
    entry: Entry,
    tags: list[IDNameField],
    opts: TaskExtractionOptions,
) -> list[IDNameField]:
    """Derive task references for an entry.

    Sources are consulted in priority order: summary, tags, project. In
    split mode every configured source contributes; in first-only mode a
    lower priority source is only consulted while nothing was found, and
    the result is cut to the first task.

    Args:
        entry: Entry to inspect.
        tags: Tags the source provider attached to the entry.
        opts: Extraction patterns and mode.

    Returns:
        Task references, empty if no pattern matched or none is configured.
    """
    split = opts.multiple_task_mode == MultipleTaskMode.SPLIT
    tasks: list[IDNameField] = []

    if opts.summary_pattern is not None:
        tasks.extend(entry.tasks_from_summary(opts.summary_pattern))

    if opts.tags_pattern is not None and (split or not tasks):
        tasks.extend(entry.tasks_from_tags(tags, opts.tags_pattern))

    if opts.project_pattern is not None and (split or not tasks):
        tasks.extend(entry.tasks_from_project(opts.project_pattern))

    if opts.multiple_task_mode == MultipleTaskMode.FIRST_ONLY and len(tasks) > 1:
        tasks = tasks[:1]

    return tasks


def apply_tasks(entry: Entry, tags: list[IDNameField], opts: TaskExtractionOptions) -> list[Entry]:
    """Attach extracted tasks to an entry.

    Args:
        entry: Normalized entry as parsed from the source.
        tags: Tags the source provider attached to the entry.
        opts: Extraction patterns and mode.

    Returns:
        The entry unchanged when no task was found, otherwise one copy per
        task with the time split evenly between them.
    """
    tasks = extract_tasks(entry, tags, opts)
    if not tasks:
        return [entry]

    return [
        part.model_copy(update={"task": task})
        for part, task in zip(entry.split_duration(len(tasks)), tasks)
    ]
