"""
Badge Evaluator

Derives superlative tags by comparing one option against the active cohort.
Comparisons are exact equality on computed values, so ties all qualify.
"""

from typing import Dict, Iterable, List

from .aggregator import build_context, compute_breakdown, criterion_mean
from .constants import Badge, BUREAUCRACY_SCORE, CAREER_BADGE_FIELDS
from .contracts import UniversityOption, Weights
from .cost_calculators import monthly_total
from .ranker import active_options

MIN_BADGE_COHORT = 2


def career_score(option: UniversityOption) -> float:
    return criterion_mean(option, CAREER_BADGE_FIELDS)


def badges_for(
    option: UniversityOption,
    active_cohort: Iterable[UniversityOption],
    weights: Weights,
    bureaucracy_score: float = BUREAUCRACY_SCORE,
) -> List[Badge]:
    """
    Evaluate every badge rule for one option.

    Args:
        option: Option to tag
        active_cohort: Comparison cohort; discarded options are dropped
        weights: Weights for the best-overall rule

    Returns:
        Earned badges in fixed order (empty for a discarded option or a
        cohort smaller than 2)
    """
    if not option.is_active:
        return []
    cohort = active_options(active_cohort)
    if len(cohort) < MIN_BADGE_COHORT:
        return []

    badges: List[Badge] = []

    if monthly_total(option) == min(monthly_total(u) for u in cohort):
        badges.append(Badge.CHEAPEST)

    if option.stem_reputation == max(u.stem_reputation for u in cohort):
        badges.append(Badge.BEST_STEM)

    if career_score(option) == max(career_score(u) for u in cohort):
        badges.append(Badge.BEST_CAREER)

    if option.quality_of_life == max(u.quality_of_life for u in cohort):
        badges.append(Badge.BEST_QUALITY_OF_LIFE)

    ctx = build_context(cohort, bureaucracy_score)
    finals = [compute_breakdown(u, cohort, weights, context=ctx).final_score for u in cohort]
    own_final = compute_breakdown(option, cohort, weights, context=ctx).final_score
    if own_final == max(finals):
        badges.append(Badge.BEST_OVERALL)

    return badges


def badges_for_all(
    options: Iterable[UniversityOption],
    weights: Weights,
    bureaucracy_score: float = BUREAUCRACY_SCORE,
) -> Dict[str, List[Badge]]:
    """Badges of every active option, keyed by option id."""
    cohort = active_options(options)
    return {u.id: badges_for(u, cohort, weights, bureaucracy_score) for u in cohort}
