"""Helpers operating on sequences of worklog entries."""

from worklog_sync.worklog.models import Entries

# Group key of entries without a resolved task.
NO_TASK = ""


def group_by_task(entries: Entries) -> dict[str, Entries]:
    """Partition entries by the name of their task.

    Every entry lands in exactly one group and the relative order of the
    entries inside a group is the order of the input. Entries without a
    task are collected under NO_TASK.

    Args:
        entries: Entries to partition.

    Returns:
        Mapping of task name to the entries logged against it.
    """
    groups: dict[str, Entries] = {}
    for entry in entries:
        groups.setdefault(entry.task.name or NO_TASK, []).append(entry)
    return groups


def split_by_completeness(entries: Entries) -> tuple[Entries, Entries]:
    """Separate entries a target can accept from the ones it cannot.

    Args:
        entries: Entries to check.

    Returns:
        Tuple of (complete, incomplete) entries, both in input order.
    """
    complete: Entries = []
    incomplete: Entries = []
    for entry in entries:
        if entry.is_complete():
            complete.append(entry)
        else:
            incomplete.append(entry)
    return complete, incomplete
