"""Billable and total duration policy applied right before upload."""

import math
from datetime import timedelta
from typing import TYPE_CHECKING

from worklog_sync.worklog.models import Entry

if TYPE_CHECKING:
    from worklog_sync.client.options import UploadOptions


def _round_half_up(value: float) -> int:
    # Durations are never negative, so flooring after adding a half is
    # rounding half away from zero.
    return math.floor(value + 0.5)


def round_to_minute(duration: timedelta) -> timedelta:
    """Round a duration to the closest whole minute, half up.

    Args:
        duration: Non-negative duration.

    Returns:
        Duration aligned to a whole minute (30 seconds rounds up).
    """
    minutes = _round_half_up(duration.total_seconds() / 60)
    return timedelta(minutes=minutes)


def upload_durations(entry: Entry, opts: "UploadOptions") -> tuple[int, int]:
    """Compute the seconds to transmit for an entry.

    The unbillable part is folded into the billable part first (when
    requested), then both parts are rounded independently and the total
    is recomputed from the rounded parts.

    Args:
        entry: Entry being uploaded.
        opts: Upload options holding the billing and rounding flags.

    Returns:
        Tuple of (billable_seconds, time_spent_seconds).
    """
    billable = entry.billable_duration
    unbillable = entry.unbillable_duration

    if opts.treat_duration_as_billed:
        billable = billable + unbillable
        unbillable = timedelta(0)

    if opts.round_to_closest_minute:
        billable = round_to_minute(billable)
        unbillable = round_to_minute(unbillable)

    total = billable + unbillable
    return _round_half_up(billable.total_seconds()), _round_half_up(total.total_seconds())
