"""
Cost Calculators

Pure functions of one option - no cohort dependency.
"""

from .constants import DEFAULT_PROJECTION_MONTHS, MONTHLY_COST_FIELDS, ONE_TIME_COST_FIELDS
from .contracts import UniversityOption


def monthly_total(option: UniversityOption) -> float:
    """Sum of the nine monthly items minus scholarship. May be negative."""
    return sum(getattr(option, name) for name in MONTHLY_COST_FIELDS) - option.scholarship


def one_time_total(option: UniversityOption) -> float:
    """Sum of the five one-time arrival costs."""
    return sum(getattr(option, name) for name in ONE_TIME_COST_FIELDS)


def multi_month_total(option: UniversityOption, months: int = DEFAULT_PROJECTION_MONTHS) -> float:
    return monthly_total(option) * months + one_time_total(option)


def six_month_total(option: UniversityOption) -> float:
    return multi_month_total(option, 6)
