"""
Deadline Aggregator

Extracts dated milestones from the active options and computes the days
remaining until each one.
"""

from datetime import date
from typing import Iterable, List, Optional

from .constants import DEADLINE_FIELDS, DEADLINE_MAX_DAYS, DEADLINE_MIN_DAYS
from .contracts import DeadlineItem, UniversityOption
from .ranker import active_options


def days_until(deadline: date, today: date) -> int:
    """Whole days from today to the deadline (negative when overdue)."""
    return (deadline - today).days


def in_window(days_left: int) -> bool:
    """Slightly overdue items stay for 30 days; nothing beyond a year."""
    return DEADLINE_MIN_DAYS < days_left < DEADLINE_MAX_DAYS


def upcoming_deadlines(
    options: Iterable[UniversityOption],
    today: Optional[date] = None,
) -> List[DeadlineItem]:
    """
    Collect application, visa, housing and semester-start dates.

    Args:
        options: Full option collection (discarded ones are skipped)
        today: Reference date; defaults to the current local date

    Returns:
        DeadlineItem list sorted soonest (or most overdue) first
    """
    today = today or date.today()
    items: List[DeadlineItem] = []

    for option in active_options(options):
        for milestone, label in DEADLINE_FIELDS:
            deadline = getattr(option, milestone)
            if not deadline:
                continue
            days_left = days_until(deadline, today)
            if in_window(days_left):
                items.append(DeadlineItem(
                    option=option,
                    milestone=milestone,
                    type=label,
                    date=deadline,
                    days_left=days_left,
                ))

    return sorted(items, key=lambda item: item.days_left)
