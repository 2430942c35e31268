"""
Normalizer

Converts raw amounts into 0-10 scores relative to a cohort, plus the small
numeric helpers shared by the scorers (mean, clamp, rounding).
Nothing here rounds internally; rounding happens only when a value leaves
the engine.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Sequence

from .constants import (
    COHORT_MAX_FLOOR,
    COHORT_MIN_CEILING,
    Direction,
    RANGE_FALLBACK,
    SCORE_MAX,
    SCORE_MIN,
)


def clamp(value: float, low: float = SCORE_MIN, high: float = SCORE_MAX) -> float:
    return max(low, min(high, value))


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean; 0.0 for an empty input."""
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def cohort_bounds(cohort_values: Sequence[float]) -> tuple:
    """
    Return (min, max, range) for a cohort.

    The synthetic bounds guarantee a non-empty, non-degenerate range even
    for a single-option or all-zero cohort.
    """
    high = max([*cohort_values, COHORT_MAX_FLOOR])
    low = min([*cohort_values, COHORT_MIN_CEILING])
    spread = (high - low) or RANGE_FALLBACK
    return low, high, spread


def normalize(
    value: float,
    cohort_values: Sequence[float],
    direction: Direction = Direction.LOWER_IS_BETTER,
) -> float:
    """
    Score a raw amount on 0-10 against its cohort.

    Args:
        value: Raw amount (e.g. a monthly total)
        cohort_values: Same metric for every option in the cohort
        direction: LOWER_IS_BETTER for costs

    Returns:
        Unrounded score clamped to [0, 10]
    """
    low, high, spread = cohort_bounds(cohort_values)
    if Direction(direction) == Direction.HIGHER_IS_BETTER:
        raw = (value - low) / spread * 10
    else:
        raw = (high - value) / spread * 10
    return clamp(raw)


def _half_up(value: float, exponent: str) -> Decimal:
    # str() keeps the shortest decimal form, so 2.45 rounds to 2.5
    return Decimal(str(value)).quantize(Decimal(exponent), rounding=ROUND_HALF_UP)


def round_score(value: float) -> float:
    """One decimal place, half away from zero."""
    return float(_half_up(value, "0.1"))


def round_currency(value) -> int:
    """Nearest whole currency unit, half away from zero."""
    if isinstance(value, Decimal):
        return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return int(_half_up(value, "1"))


def scale_amount(amount: float, factor: float) -> int:
    """Multiply an amount by a decimal factor and round to a whole unit."""
    return round_currency(Decimal(str(amount)) * Decimal(str(factor)))
