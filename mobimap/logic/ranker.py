"""
Ranker

Ranks the active options by their weighted final score.
"""

from typing import Iterable, List

from .aggregator import build_context, compute_breakdown
from .constants import BUREAUCRACY_SCORE, Status
from .contracts import RankedOption, UniversityOption, Weights


def active_options(options: Iterable[UniversityOption]) -> List[UniversityOption]:
    """Options whose status is not the terminal 'discarded' state."""
    return [u for u in options if u.status != Status.DISCARDED]


def rank_options(
    options: Iterable[UniversityOption],
    weights: Weights,
    bureaucracy_score: float = BUREAUCRACY_SCORE,
) -> List[RankedOption]:
    """
    Rank active options by final score (descending).

    Cost and rent are normalized against the active options only.
    Ties keep input order (sorted() is stable).

    Args:
        options: Full option collection
        weights: Category weights

    Returns:
        RankedOption list with 1-based rank
    """
    cohort = active_options(options)
    if not cohort:
        return []

    ctx = build_context(cohort, bureaucracy_score)
    scored = [
        (u, compute_breakdown(u, cohort, weights, context=ctx))
        for u in cohort
    ]
    scored = sorted(scored, key=lambda pair: pair[1].final_score, reverse=True)

    return [
        RankedOption(rank=index + 1, option=u, breakdown=breakdown)
        for index, (u, breakdown) in enumerate(scored)
    ]
