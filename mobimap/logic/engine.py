"""
Comparison Engine

Main orchestrator that bundles the scoring components behind one stateless
service. This is the primary entry point for the UI and API layers.
"""

import logging
import time
from datetime import date
from typing import Iterable, List, Optional, Sequence

from .aggregator import compute_breakdown
from .badges import badges_for, badges_for_all
from .comparator import build_comparison
from .constants import Badge, BUREAUCRACY_SCORE, DEFAULT_EXTRA_RESERVE, DEFAULT_FX_DELTA_PERCENT
from .contracts import (
    BudgetProjection,
    ComparisonTable,
    DashboardSummary,
    DeadlineItem,
    RankedOption,
    ScoreBreakdown,
    UniversityOption,
    Weights,
)
from .deadlines import upcoming_deadlines
from .ranker import active_options, rank_options
from .scenario_simulator import compare_budgets, project_budget
from .summary import summarize

logger = logging.getLogger(__name__)


class ComparisonEngine:
    """
    Stateless facade over the scoring pipeline.

    Pipeline flow:
    1. Breakdown - Normalize costs and aggregate ratings per category
    2. Ranking - Weighted final score over the active cohort
    3. Derived views - Badges, deadlines, comparison table, summary
    4. Simulation - Budget projections per option

    Every call receives the option collection by value; nothing is cached.
    """

    def __init__(self, bureaucracy_score: float = BUREAUCRACY_SCORE):
        """
        Initialize the engine.

        Args:
            bureaucracy_score: Constant score of the bureaucracy category
        """
        self.bureaucracy_score = bureaucracy_score
        self.version = "1.0.0"

    def breakdown(
        self,
        option: UniversityOption,
        cohort: Sequence[UniversityOption],
        weights: Weights,
    ) -> ScoreBreakdown:
        return compute_breakdown(option, cohort, weights, self.bureaucracy_score)

    def rank(self, options: Iterable[UniversityOption], weights: Weights) -> List[RankedOption]:
        start_time = time.perf_counter()
        ranked = rank_options(options, weights, self.bureaucracy_score)
        elapsed = (time.perf_counter() - start_time) * 1000
        logger.info("Ranked %d active options in %.2fms", len(ranked), elapsed)
        return ranked

    def badges(
        self,
        option: UniversityOption,
        options: Iterable[UniversityOption],
        weights: Weights,
    ) -> List[Badge]:
        return badges_for(option, active_options(options), weights, self.bureaucracy_score)

    def all_badges(self, options: Iterable[UniversityOption], weights: Weights):
        return badges_for_all(options, weights, self.bureaucracy_score)

    def deadlines(
        self,
        options: Iterable[UniversityOption],
        today: Optional[date] = None,
    ) -> List[DeadlineItem]:
        return upcoming_deadlines(options, today)

    def compare(
        self,
        options: Iterable[UniversityOption],
        weights: Optional[Weights] = None,
        category: Optional[str] = None,
    ) -> ComparisonTable:
        return build_comparison(options, category, weights, self.bureaucracy_score)

    def summary(
        self,
        options: Iterable[UniversityOption],
        weights: Weights,
        today: Optional[date] = None,
    ) -> DashboardSummary:
        return summarize(options, weights, today, self.bureaucracy_score)

    def simulate(
        self,
        option: UniversityOption,
        profile: str = "realistic",
        scenarios: Iterable[str] = (),
        fx_delta_percent: float = DEFAULT_FX_DELTA_PERCENT,
        months: int = 6,
        extra_reserve: float = DEFAULT_EXTRA_RESERVE,
    ) -> BudgetProjection:
        projection = project_budget(option, profile, scenarios, fx_delta_percent, months, extra_reserve)
        logger.info(
            "Simulated %s (%s, %s): %.2f vs baseline %.2f",
            option.id, projection.profile, projection.active_scenarios or "no scenarios",
            projection.total_estimate, projection.baseline_total,
        )
        return projection

    def simulate_many(
        self,
        options: Iterable[UniversityOption],
        profile: str = "realistic",
        scenarios: Iterable[str] = (),
        fx_delta_percent: float = DEFAULT_FX_DELTA_PERCENT,
        months: int = 6,
        extra_reserve: float = DEFAULT_EXTRA_RESERVE,
    ) -> List[BudgetProjection]:
        return compare_budgets(options, profile, scenarios, fx_delta_percent, months, extra_reserve)
