"""
Score Aggregator

Computes the per-category scores of one option against a cohort and
combines them into the weighted final score.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .constants import (
    ADAPTATION_FIELDS,
    BUREAUCRACY_SCORE,
    Category,
    Direction,
    QUALITY_FIELDS,
    STEM_FIELDS,
    STUDENT_LIFE_FIELDS,
    WORK_FIELDS,
    ZERO_WEIGHT_DENOMINATOR,
)
from .contracts import ScoreBreakdown, UniversityOption, Weights
from .cost_calculators import monthly_total
from .normalizer import mean, normalize, round_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CohortContext:
    """Cohort-wide inputs of the cost normalizations, computed once per cohort."""
    monthly_totals: Tuple[float, ...]
    rents: Tuple[float, ...]
    bureaucracy_score: float = BUREAUCRACY_SCORE


def build_context(
    cohort: Sequence[UniversityOption],
    bureaucracy_score: float = BUREAUCRACY_SCORE,
) -> CohortContext:
    return CohortContext(
        monthly_totals=tuple(monthly_total(u) for u in cohort),
        rents=tuple(u.monthly_rent for u in cohort),
        bureaucracy_score=bureaucracy_score,
    )


def criterion_mean(option: UniversityOption, fields: Sequence[str]) -> float:
    """Arithmetic mean of a fixed set of 0-10 rating fields."""
    return mean(getattr(option, name) for name in fields)


# =============================================================================
# CATEGORY SCORERS
# =============================================================================

def score_cost(option: UniversityOption, ctx: CohortContext) -> float:
    return normalize(monthly_total(option), ctx.monthly_totals, Direction.LOWER_IS_BETTER)


def score_housing(option: UniversityOption, ctx: CohortContext) -> float:
    return normalize(option.monthly_rent, ctx.rents, Direction.LOWER_IS_BETTER)


def score_stem(option: UniversityOption, ctx: CohortContext) -> float:
    return criterion_mean(option, STEM_FIELDS)


def score_work(option: UniversityOption, ctx: CohortContext) -> float:
    return criterion_mean(option, WORK_FIELDS)


def score_adaptation(option: UniversityOption, ctx: CohortContext) -> float:
    return criterion_mean(option, ADAPTATION_FIELDS)


def score_quality(option: UniversityOption, ctx: CohortContext) -> float:
    return criterion_mean(option, QUALITY_FIELDS)


def score_climate(option: UniversityOption, ctx: CohortContext) -> float:
    return option.climate_score


def score_student_life(option: UniversityOption, ctx: CohortContext) -> float:
    # No authored field; reuses existing ratings
    return criterion_mean(option, STUDENT_LIFE_FIELDS)


def score_bureaucracy(option: UniversityOption, ctx: CohortContext) -> float:
    return ctx.bureaucracy_score


def score_emotional(option: UniversityOption, ctx: CohortContext) -> float:
    return option.emotional_score


Scorer = Callable[[UniversityOption, CohortContext], float]

# Evaluation order of the breakdown
CATEGORY_SCORERS: List[Tuple[Category, Scorer]] = [
    (Category.COST, score_cost),
    (Category.HOUSING, score_housing),
    (Category.STEM, score_stem),
    (Category.WORK, score_work),
    (Category.ADAPTATION, score_adaptation),
    (Category.QUALITY, score_quality),
    (Category.CLIMATE, score_climate),
    (Category.STUDENT_LIFE, score_student_life),
    (Category.BUREAUCRACY, score_bureaucracy),
    (Category.EMOTIONAL, score_emotional),
]


# =============================================================================
# AGGREGATION
# =============================================================================

def raw_category_scores(option: UniversityOption, ctx: CohortContext) -> Dict[Category, float]:
    """Unrounded score per category."""
    return {category: scorer(option, ctx) for category, scorer in CATEGORY_SCORERS}


def weighted_final_score(scores: Dict[Category, float], weights: Weights) -> float:
    """
    Weighted average over the ten categories.

    An all-zero weight set falls back to a denominator of 1.
    """
    total_weight = weights.total() or ZERO_WEIGHT_DENOMINATOR
    weighted_sum = sum(
        scores[category] * weights.weight_for(category)
        for category in scores
    )
    return weighted_sum / total_weight


def compute_breakdown(
    option: UniversityOption,
    cohort: Sequence[UniversityOption],
    weights: Weights,
    bureaucracy_score: float = BUREAUCRACY_SCORE,
    context: Optional[CohortContext] = None,
) -> ScoreBreakdown:
    """
    Compute the full breakdown of one option.

    Args:
        option: Option to score
        cohort: Working set used for the cost/rent min-max (not filtered
            by status - callers decide whether discarded options count)
        weights: Category weights
        bureaucracy_score: Constant score of the bureaucracy category
        context: Precomputed cohort context; built from cohort when omitted

    Returns:
        ScoreBreakdown with every value rounded to one decimal
    """
    ctx = context or build_context(cohort, bureaucracy_score)
    scores = raw_category_scores(option, ctx)
    final = weighted_final_score(scores, weights)

    logger.debug("Breakdown for %s: final=%.3f", option.id, final)

    return ScoreBreakdown(
        cost_score=round_score(scores[Category.COST]),
        housing_score=round_score(scores[Category.HOUSING]),
        stem_score=round_score(scores[Category.STEM]),
        work_score=round_score(scores[Category.WORK]),
        adaptation_score=round_score(scores[Category.ADAPTATION]),
        quality_score=round_score(scores[Category.QUALITY]),
        climate_score=round_score(scores[Category.CLIMATE]),
        student_life_score=round_score(scores[Category.STUDENT_LIFE]),
        bureaucracy_score=round_score(scores[Category.BUREAUCRACY]),
        emotional_score=round_score(scores[Category.EMOTIONAL]),
        final_score=round_score(final),
    )


def batch_breakdowns(
    options: Sequence[UniversityOption],
    weights: Weights,
    bureaucracy_score: float = BUREAUCRACY_SCORE,
) -> List[ScoreBreakdown]:
    """
    Score every option against the same cohort (the options themselves).
    """
    ctx = build_context(options, bureaucracy_score)
    return [compute_breakdown(u, options, weights, context=ctx) for u in options]
