"""
Comparison Logic Module

Provides the deterministic weighted multi-criteria scoring engine for
study/relocation options.
"""

from .contracts import (
    UniversityOption,
    Weights,
    WeightPreset,
    ChecklistItem,
    DiaryEntry,
    ScoreBreakdown,
    RankedOption,
    DeadlineItem,
    ProfileCosts,
    ScenarioResult,
    BudgetProjection,
    ComparisonRow,
    ComparisonTable,
    ChecklistProgress,
    DashboardSummary,
)
from .constants import (
    Badge,
    Category,
    Direction,
    Priority,
    RegretRisk,
    ScenarioKey,
    SpendingProfile,
    Status,
)
from .normalizer import normalize, mean, clamp, round_score, round_currency
from .cost_calculators import monthly_total, one_time_total, multi_month_total, six_month_total
from .aggregator import compute_breakdown, criterion_mean
from .ranker import active_options, rank_options
from .badges import badges_for, badges_for_all
from .deadlines import upcoming_deadlines
from .scenario_simulator import (
    apply_profile,
    apply_scenarios,
    project_budget,
    compare_budgets,
    scenario_catalog,
    SCENARIO_PIPELINE,
)
from .comparator import build_comparison
from .summary import summarize, checklist_progress
from .adapter import option_from_record, country_flag, default_checklist
from .engine import ComparisonEngine

__all__ = [
    # Main engine
    "ComparisonEngine",

    # Contracts
    "UniversityOption",
    "Weights",
    "WeightPreset",
    "ChecklistItem",
    "DiaryEntry",
    "ScoreBreakdown",
    "RankedOption",
    "DeadlineItem",
    "ProfileCosts",
    "ScenarioResult",
    "BudgetProjection",
    "ComparisonRow",
    "ComparisonTable",
    "ChecklistProgress",
    "DashboardSummary",

    # Enums
    "Badge",
    "Category",
    "Direction",
    "Priority",
    "RegretRisk",
    "ScenarioKey",
    "SpendingProfile",
    "Status",

    # Operations
    "normalize",
    "mean",
    "clamp",
    "round_score",
    "round_currency",
    "monthly_total",
    "one_time_total",
    "multi_month_total",
    "six_month_total",
    "compute_breakdown",
    "criterion_mean",
    "active_options",
    "rank_options",
    "badges_for",
    "badges_for_all",
    "upcoming_deadlines",
    "apply_profile",
    "apply_scenarios",
    "project_budget",
    "compare_budgets",
    "scenario_catalog",
    "SCENARIO_PIPELINE",
    "build_comparison",
    "summarize",
    "checklist_progress",
    "option_from_record",
    "country_flag",
    "default_checklist",
]
