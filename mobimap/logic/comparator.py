"""
Comparator

Builds the side-by-side comparison table: one row per criterion, one value
per option, with the best and worst options marked on numeric rows.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from .aggregator import build_context, compute_breakdown
from .constants import BUREAUCRACY_SCORE, Direction, MAX_COMPARE_OPTIONS
from .contracts import ComparisonRow, ComparisonTable, UniversityOption, Weights
from .cost_calculators import monthly_total, one_time_total, six_month_total
from .normalizer import normalize, round_score


@dataclass(frozen=True)
class Criterion:
    label: str
    category: str
    get_value: Callable[[UniversityOption], Any]
    kind: str  # text/status/currency/score
    higher_is_better: Optional[bool] = None


def _rating(field: str) -> Callable[[UniversityOption], float]:
    return lambda u: getattr(u, field)


CRITERIA: List[Criterion] = [
    # General
    Criterion("City", "General", lambda u: u.city, "text"),
    Criterion("Country", "General", lambda u: u.country, "text"),
    Criterion("Language", "General", lambda u: u.language or "-", "text"),
    Criterion("Status", "General", lambda u: u.status, "status"),
    # Costs
    Criterion("Rent/month", "Costs", _rating("monthly_rent"), "currency", False),
    Criterion("Food/month", "Costs", _rating("monthly_food"), "currency", False),
    Criterion("Transport/month", "Costs", _rating("monthly_transport"), "currency", False),
    Criterion("Monthly total", "Costs", monthly_total, "currency", False),
    Criterion("Arrival costs", "Costs", one_time_total, "currency", False),
    Criterion("6-month total", "Costs", six_month_total, "currency", False),
    Criterion("Scholarship/month", "Costs", _rating("scholarship"), "currency", True),
    # Academic
    Criterion("STEM reputation", "Academic", _rating("stem_reputation"), "score", True),
    Criterion("Research", "Academic", _rating("research_opportunities"), "score", True),
    Criterion("English courses", "Academic", _rating("english_courses"), "score", True),
    Criterion("Credit compatibility", "Academic", _rating("credit_compatibility"), "score", True),
    Criterion("Lab access", "Academic", _rating("lab_access"), "score", True),
    # Work
    Criterion("Internship chance", "Work", _rating("internship_chance"), "score", True),
    Criterion("Networking", "Work", _rating("networking_quality"), "score", True),
    Criterion("Startup ecosystem", "Work", _rating("startup_ecosystem"), "score", True),
    # Adaptation
    Criterion("Language ease", "Adaptation", _rating("language_difficulty"), "score", True),
    Criterion("Climate fit", "Adaptation", _rating("climate_score"), "score", True),
    Criterion("Safety", "Adaptation", _rating("safety"), "score", True),
    Criterion("Quality of life", "Adaptation", _rating("quality_of_life"), "score", True),
    Criterion("International community", "Adaptation", _rating("international_community"), "score", True),
    Criterion("Public transport", "Adaptation", _rating("public_transport"), "score", True),
    # Personal
    Criterion("Emotional fit", "Personal", _rating("emotional_score"), "score", True),
]


def criteria_categories() -> List[str]:
    seen: List[str] = []
    for criterion in CRITERIA:
        if criterion.category not in seen:
            seen.append(criterion.category)
    return seen


def best_and_worst(values: dict, higher_is_better: Optional[bool]) -> tuple:
    """
    Ids holding the best and worst numeric value.

    Rows without a direction get neither; a single numeric value is best but
    never worst.
    """
    if higher_is_better is None:
        return [], []
    numeric = _numeric(values)
    if not numeric:
        return [], []

    ordered = sorted(numeric.values(), reverse=higher_is_better)
    best_value, worst_value = ordered[0], ordered[-1]
    best = [option_id for option_id, value in numeric.items() if value == best_value]
    worst = [
        option_id for option_id, value in numeric.items()
        if value == worst_value and len(ordered) > 1
    ]
    return best, worst


def _numeric(values: dict) -> dict:
    return {
        option_id: value for option_id, value in values.items()
        if isinstance(value, (int, float)) and not isinstance(value, bool)
    }


def relative_scores(values: dict, higher_is_better: Optional[bool]) -> dict:
    """0-10 score of each numeric value against the other compared values."""
    if higher_is_better is None:
        return {}
    numeric = _numeric(values)
    direction = Direction.HIGHER_IS_BETTER if higher_is_better else Direction.LOWER_IS_BETTER
    cohort = list(numeric.values())
    return {
        option_id: round_score(normalize(value, cohort, direction))
        for option_id, value in numeric.items()
    }


def build_comparison(
    options: Iterable[UniversityOption],
    category: Optional[str] = None,
    weights: Optional[Weights] = None,
    bureaucracy_score: float = BUREAUCRACY_SCORE,
) -> ComparisonTable:
    """
    Compare up to five options side by side.

    Args:
        options: Options in column order; extras beyond five are dropped
        category: Restrict rows to one criteria category
        weights: When given, a score breakdown per option is attached
            (normalized against the compared options)

    Returns:
        ComparisonTable
    """
    options = list(options)[:MAX_COMPARE_OPTIONS]
    criteria = [c for c in CRITERIA if category in (None, "all", c.category)]

    rows: List[ComparisonRow] = []
    for criterion in criteria:
        values = {u.id: criterion.get_value(u) for u in options}
        best, worst = best_and_worst(values, criterion.higher_is_better)
        rows.append(ComparisonRow(
            label=criterion.label,
            category=criterion.category,
            kind=criterion.kind,
            higher_is_better=criterion.higher_is_better,
            values=values,
            scores=relative_scores(values, criterion.higher_is_better),
            best=best,
            worst=worst,
        ))

    breakdowns = {}
    if weights is not None and options:
        ctx = build_context(options, bureaucracy_score)
        breakdowns = {
            u.id: compute_breakdown(u, options, weights, context=ctx)
            for u in options
        }

    return ComparisonTable(
        option_ids=[u.id for u in options],
        categories=criteria_categories(),
        rows=rows,
        breakdowns=breakdowns,
    )
