"""
Dashboard Summary

Headline numbers for the overview page, derived from the same ranking,
deadline and badge primitives.
"""

from datetime import date
from typing import Iterable, Optional

from .badges import badges_for_all
from .constants import BUREAUCRACY_SCORE, Status, TOP_RANKED_SUMMARY, URGENT_DEADLINE_DAYS
from .contracts import ChecklistProgress, DashboardSummary, UniversityOption, Weights
from .cost_calculators import monthly_total
from .deadlines import upcoming_deadlines
from .normalizer import round_currency
from .ranker import active_options, rank_options


def checklist_progress(option: UniversityOption) -> ChecklistProgress:
    total = len(option.checklist)
    done = sum(1 for item in option.checklist if item.completed)
    percent = round_currency(done / total * 100) if total else 0
    return ChecklistProgress(option_id=option.id, done=done, total=total, percent=percent)


def summarize(
    options: Iterable[UniversityOption],
    weights: Weights,
    today: Optional[date] = None,
    bureaucracy_score: float = BUREAUCRACY_SCORE,
) -> DashboardSummary:
    """
    Build the dashboard summary.

    The monthly average covers every option, discarded ones included.
    """
    options = list(options)
    if not options:
        return DashboardSummary()

    average_monthly = round_currency(sum(monthly_total(u) for u in options) / len(options))
    deadlines = upcoming_deadlines(options, today)

    return DashboardSummary(
        total_options=len(options),
        active_options=len(active_options(options)),
        average_monthly_total=average_monthly,
        average_six_month_total=average_monthly * 6,
        favorites=sum(1 for u in options if u.is_favorite),
        candidates=sum(1 for u in options if u.status in (Status.CANDIDATE, Status.APPROVED)),
        urgent_deadlines=sum(1 for d in deadlines if d.days_left <= URGENT_DEADLINE_DAYS),
        top_ranked=rank_options(options, weights, bureaucracy_score)[:TOP_RANKED_SUMMARY],
        upcoming_deadlines=deadlines,
        checklist_progress=[checklist_progress(u) for u in options],
        badges=badges_for_all(options, weights, bureaucracy_score),
    )
