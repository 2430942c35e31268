"""
Scenario Simulator

Projects one option's monthly budget under a spending profile and a set of
what-if scenarios.

The scenarios are an ordered pipeline of named steps. Each step transforms
the running cost/income state, so the order matters: the currency shift
scales the net total and must run last.
"""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Set, Union

from .constants import (
    CHEAPER_CITY_CATEGORIES,
    CHEAPER_CITY_FACTOR,
    DEFAULT_EXTRA_RESERVE,
    DEFAULT_FX_DELTA_PERCENT,
    DEFAULT_PROJECTION_MONTHS,
    DORMITORY_RENT_FACTOR,
    MAX_BUDGET_COMPARISON,
    MAX_SIMULATION_MONTHS,
    MIN_SIMULATION_MONTHS,
    PART_TIME_INCOME,
    PROFILE_CATEGORIES,
    PROFILE_LABELS,
    PROFILE_MULTIPLIERS,
    SCENARIO_KEY_ALIASES,
    ScenarioKey,
    SCHOLARSHIP_BONUS,
    SHARED_ROOM_RENT_FACTOR,
    SpendingProfile,
)
from .contracts import BudgetProjection, ProfileCosts, ScenarioResult, UniversityOption
from .cost_calculators import one_time_total
from .normalizer import round_currency, scale_amount
from .ranker import active_options

logger = logging.getLogger(__name__)

# Profile category -> option field
PROFILE_SOURCE_FIELDS: Dict[str, str] = {
    "rent": "monthly_rent",
    "food": "monthly_food",
    "transport": "monthly_transport",
    "phone": "monthly_phone",
    "academic": "monthly_academic",
    "leisure": "monthly_leisure",
    "travel": "monthly_travel",
    "health": "monthly_health",
    "misc": "monthly_misc",
}


# =============================================================================
# PROFILES
# =============================================================================

def apply_profile(
    option: UniversityOption,
    profile: Union[SpendingProfile, str] = SpendingProfile.REALISTIC,
) -> ProfileCosts:
    """
    Scale each monthly category by the profile multiplier.

    Each amount is rounded to a whole currency unit. The realistic profile
    passes the authored values through.
    """
    multipliers = PROFILE_MULTIPLIERS[SpendingProfile(profile)]
    return ProfileCosts(**{
        category: scale_amount(getattr(option, PROFILE_SOURCE_FIELDS[category]), multipliers[category])
        for category in PROFILE_CATEGORIES
    })


# =============================================================================
# SCENARIO PIPELINE
# =============================================================================

@dataclass(frozen=True)
class SimulationState:
    costs: Dict[str, int]
    income: Decimal
    total_monthly: Optional[Decimal] = None


@dataclass(frozen=True)
class ScenarioStep:
    """A named transform. key=None marks a step that always runs."""
    key: Optional[ScenarioKey]
    label: str
    description: str
    apply: Callable[[SimulationState, Decimal], SimulationState]


def _scale_costs(state: SimulationState, categories, factor: float) -> SimulationState:
    costs = dict(state.costs)
    for category in categories:
        costs[category] = scale_amount(costs[category], factor)
    return replace(state, costs=costs)


def _dormitory(state: SimulationState, fx: Decimal) -> SimulationState:
    return _scale_costs(state, ("rent",), DORMITORY_RENT_FACTOR)


def _shared_room(state: SimulationState, fx: Decimal) -> SimulationState:
    return _scale_costs(state, ("rent",), SHARED_ROOM_RENT_FACTOR)


def _scholarship_bonus(state: SimulationState, fx: Decimal) -> SimulationState:
    return replace(state, income=state.income + SCHOLARSHIP_BONUS)


def _part_time(state: SimulationState, fx: Decimal) -> SimulationState:
    return replace(state, income=state.income + PART_TIME_INCOME)


def _cheaper_city(state: SimulationState, fx: Decimal) -> SimulationState:
    return _scale_costs(state, CHEAPER_CITY_CATEGORIES, CHEAPER_CITY_FACTOR)


def _net_total(state: SimulationState, fx: Decimal) -> SimulationState:
    raw_total = sum(Decimal(state.costs[c]) for c in PROFILE_CATEGORIES) - state.income
    return replace(state, total_monthly=raw_total)


def _currency_shift(state: SimulationState, fx: Decimal) -> SimulationState:
    shifted = state.total_monthly * (1 + fx / 100)
    return replace(state, total_monthly=Decimal(round_currency(shifted)))


SCENARIO_PIPELINE: List[ScenarioStep] = [
    ScenarioStep(ScenarioKey.DORMITORY, "University dormitory",
                 "Housing in a university residence (-30% rent)", _dormitory),
    ScenarioStep(ScenarioKey.SHARED_ROOM, "Shared room",
                 "Sharing a room with a colleague (-20% rent)", _shared_room),
    ScenarioStep(ScenarioKey.SCHOLARSHIP, f"Extra scholarship +{SCHOLARSHIP_BONUS}",
                 f"Additional scholarship of {SCHOLARSHIP_BONUS}/month", _scholarship_bonus),
    ScenarioStep(ScenarioKey.PART_TIME, f"Part-time job +{PART_TIME_INCOME}",
                 f"Part-time work of about {PART_TIME_INCOME}/month", _part_time),
    ScenarioStep(ScenarioKey.CHEAPER_CITY, "Cheaper city",
                 "Living in a neighbouring city (-15% rent, food and leisure)", _cheaper_city),
    ScenarioStep(None, "Net monthly total", "Costs minus income", _net_total),
    ScenarioStep(ScenarioKey.CURRENCY_SHIFT, "Currency appreciation",
                 "Exchange rate moves against you by the given percentage", _currency_shift),
]


def _scenario_keys(active: Iterable) -> Set[str]:
    keys = set()
    for key in active or ():
        key = getattr(key, "value", key)
        alias = SCENARIO_KEY_ALIASES.get(key)
        keys.add(alias.value if alias is not None else key)
    return keys


def apply_scenarios(
    costs: ProfileCosts,
    scholarship: float,
    active_scenarios: Iterable[Union[ScenarioKey, str]],
    fx_delta_percent: float = 0.0,
) -> ScenarioResult:
    """
    Run the scenario pipeline over profile costs.

    Args:
        costs: Output of apply_profile
        scholarship: Monthly income offset of the option
        active_scenarios: Scenario keys to enable; unknown keys are ignored
        fx_delta_percent: Currency shift applied to the net total

    Returns:
        ScenarioResult with adjusted costs, income and net monthly total
    """
    enabled = _scenario_keys(active_scenarios)
    fx = Decimal(str(fx_delta_percent))
    state = SimulationState(costs=costs.model_dump(), income=Decimal(str(scholarship)))

    for step in SCENARIO_PIPELINE:
        if step.key is None or step.key.value in enabled:
            state = step.apply(state, fx)

    return ScenarioResult(
        costs=ProfileCosts(**state.costs),
        income=float(state.income),
        total_monthly=float(state.total_monthly),
    )


# =============================================================================
# PROJECTIONS
# =============================================================================

def clamp_months(months: int) -> int:
    clamped = max(MIN_SIMULATION_MONTHS, min(MAX_SIMULATION_MONTHS, int(months)))
    if clamped != months:
        logger.warning("Simulation months %s out of range, using %s", months, clamped)
    return clamped


def total_estimate(monthly: float, months: int, one_time: float, extra_reserve: float) -> float:
    return monthly * months + one_time + extra_reserve


def project_budget(
    option: UniversityOption,
    profile: Union[SpendingProfile, str] = SpendingProfile.REALISTIC,
    active_scenarios: Iterable[Union[ScenarioKey, str]] = (),
    fx_delta_percent: float = DEFAULT_FX_DELTA_PERCENT,
    months: int = DEFAULT_PROJECTION_MONTHS,
    extra_reserve: float = DEFAULT_EXTRA_RESERVE,
) -> BudgetProjection:
    """
    Project an option's budget and compare it with the no-scenario baseline.

    The baseline uses the same profile with no scenarios and no currency
    shift. savings_vs_baseline is positive when the scenario is cheaper.
    """
    months = clamp_months(months)
    enabled = sorted(_scenario_keys(active_scenarios))

    profile_costs = apply_profile(option, profile)
    result = apply_scenarios(profile_costs, option.scholarship, enabled, fx_delta_percent)
    baseline = apply_scenarios(profile_costs, option.scholarship, (), 0)

    one_time = one_time_total(option)
    scenario_total = total_estimate(result.total_monthly, months, one_time, extra_reserve)
    baseline_total = total_estimate(baseline.total_monthly, months, one_time, extra_reserve)

    return BudgetProjection(
        option_id=option.id,
        option_name=option.name,
        profile=SpendingProfile(profile).value,
        active_scenarios=enabled,
        fx_delta_percent=fx_delta_percent,
        months=months,
        extra_reserve=extra_reserve,
        profile_costs=profile_costs,
        result=result,
        baseline=baseline,
        one_time_total=one_time,
        total_estimate=scenario_total,
        baseline_total=baseline_total,
        savings_vs_baseline=baseline_total - scenario_total,
    )


def compare_budgets(
    options: Iterable[UniversityOption],
    profile: Union[SpendingProfile, str] = SpendingProfile.REALISTIC,
    active_scenarios: Iterable[Union[ScenarioKey, str]] = (),
    fx_delta_percent: float = DEFAULT_FX_DELTA_PERCENT,
    months: int = DEFAULT_PROJECTION_MONTHS,
    extra_reserve: float = DEFAULT_EXTRA_RESERVE,
    limit: int = MAX_BUDGET_COMPARISON,
) -> List[BudgetProjection]:
    """Run the same projection over the first active options."""
    active_scenarios = list(active_scenarios or ())
    return [
        project_budget(u, profile, active_scenarios, fx_delta_percent, months, extra_reserve)
        for u in active_options(options)[:limit]
    ]


def scenario_catalog() -> Dict[str, List[Dict[str, str]]]:
    """Profiles and toggleable scenarios, in pipeline order."""
    return {
        "profiles": [
            {"key": profile.value, "label": PROFILE_LABELS[profile]}
            for profile in SpendingProfile
        ],
        "scenarios": [
            {"key": step.key.value, "label": step.label, "description": step.description}
            for step in SCENARIO_PIPELINE
            if step.key is not None
        ],
    }
