"""
Data Contracts for the Comparison Engine

Defines Pydantic models for the option records and weights (input) and for
the derived score breakdowns, rankings, deadlines and projections (output).
These contracts are the API boundary for the engine and serialize to JSON
for any persistence layer.
"""

import datetime as dt
import math
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .constants import (
    Badge,
    Category,
    CATEGORY_WEIGHT_FIELDS,
    DEFAULT_WEIGHTS,
    MONTHLY_COST_FIELDS,
    ONE_TIME_COST_FIELDS,
    Priority,
    PROFILE_CATEGORIES,
    RegretRisk,
    Status,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_number(value: Any) -> float:
    """Absent, malformed or non-finite numeric input counts as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


RATING_FIELDS = (
    "stem_reputation",
    "research_opportunities",
    "english_courses",
    "credit_compatibility",
    "lab_access",
    "academic_intensity",
    "internship_chance",
    "networking_quality",
    "startup_ecosystem",
    "university_jobs",
    "language_difficulty",
    "climate_score",
    "safety",
    "quality_of_life",
    "international_community",
    "public_transport",
    "emotional_score",
)

NUMERIC_FIELDS = (
    MONTHLY_COST_FIELDS
    + ONE_TIME_COST_FIELDS
    + ("scholarship", "lat", "lng")
    + RATING_FIELDS
)

TEXT_LIST_FIELDS = ("stem_focus", "pros", "cons", "red_flags", "links")

DATE_FIELDS = (
    "application_deadline",
    "visa_deadline",
    "housing_deadline",
    "semester_start",
    "semester_end",
)


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class ChecklistItem(BaseModel):
    """A fixed-label boolean task. Ids are stable within one option."""
    id: str
    label: str
    completed: bool = False


class DiaryEntry(BaseModel):
    """A dated free-text note. Stored in insertion order."""
    id: str
    date: dt.date
    text: str


class UniversityOption(BaseModel):
    """
    A candidate study/relocation destination.

    Costs are monthly amounts in one currency unit; ratings are authored on a
    0-10 scale where higher is always better (language_difficulty is stored
    inverted, so 10 means easy).
    """
    # Identity
    id: str
    name: str = ""
    acronym: str = ""
    city: str = ""
    country: str = ""
    flag: str = ""
    lat: float = 0.0
    lng: float = 0.0
    website: str = ""
    stem_focus: List[str] = Field(default_factory=list)

    # Lifecycle
    status: Status = Status.INTERESTED
    priority: Optional[Priority] = None
    is_favorite: bool = False

    # Monthly costs
    monthly_rent: float = 0.0
    monthly_food: float = 0.0
    monthly_transport: float = 0.0
    monthly_phone: float = 0.0
    monthly_academic: float = 0.0
    monthly_leisure: float = 0.0
    monthly_travel: float = 0.0
    monthly_health: float = 0.0
    monthly_misc: float = 0.0

    # One-time arrival costs
    flight_cost: float = 0.0
    visa_cost: float = 0.0
    housing_deposit: float = 0.0
    setup_cost: float = 0.0
    insurance_cost: float = 0.0

    # Monthly income offset
    scholarship: float = 0.0

    # Academic (0-10)
    stem_reputation: float = 0.0
    research_opportunities: float = 0.0
    english_courses: float = 0.0
    credit_compatibility: float = 0.0
    lab_access: float = 0.0
    academic_intensity: float = 0.0

    # Work (0-10)
    internship_chance: float = 0.0
    networking_quality: float = 0.0
    startup_ecosystem: float = 0.0
    university_jobs: float = 0.0

    # Adaptation (0-10)
    language_difficulty: float = 0.0  # 10 = very easy
    climate_score: float = 0.0
    safety: float = 0.0
    quality_of_life: float = 0.0
    international_community: float = 0.0
    public_transport: float = 0.0

    # Personal fit
    emotional_score: float = 0.0
    regret_risk: RegretRisk = RegretRisk.LOW

    # Free text
    language: str = ""
    climate: str = ""
    professor_of_interest: str = ""
    pros: List[str] = Field(default_factory=list)
    cons: List[str] = Field(default_factory=list)
    red_flags: List[str] = Field(default_factory=list)
    notes: str = ""
    links: List[str] = Field(default_factory=list)

    # Timeline
    application_deadline: Optional[date] = None
    visa_deadline: Optional[date] = None
    housing_deadline: Optional[date] = None
    semester_start: Optional[date] = None
    semester_end: Optional[date] = None

    # Nested collections
    checklist: List[ChecklistItem] = Field(default_factory=list)
    diary: List[DiaryEntry] = Field(default_factory=list)

    # Audit
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    class Config:
        use_enum_values = True

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def _numeric_or_zero(cls, value):
        return _coerce_number(value)

    @field_validator(*TEXT_LIST_FIELDS, "checklist", "diary", mode="before")
    @classmethod
    def _list_or_empty(cls, value):
        return [] if value is None else value

    @field_validator(*DATE_FIELDS, mode="before")
    @classmethod
    def _blank_date_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value):
        return Status.INTERESTED if not value else value

    @field_validator("priority", mode="before")
    @classmethod
    def _blank_priority_is_none(cls, value):
        return value or None

    @property
    def is_active(self) -> bool:
        return self.status != Status.DISCARDED


class Weights(BaseModel):
    """
    Ten non-negative category coefficients.
    Conventionally in [0, 10] but not clamped.
    """
    total_cost: float = Field(default=DEFAULT_WEIGHTS["total_cost"], ge=0)
    housing: float = Field(default=DEFAULT_WEIGHTS["housing"], ge=0)
    stem_strength: float = Field(default=DEFAULT_WEIGHTS["stem_strength"], ge=0)
    work_opportunities: float = Field(default=DEFAULT_WEIGHTS["work_opportunities"], ge=0)
    language_adaptation: float = Field(default=DEFAULT_WEIGHTS["language_adaptation"], ge=0)
    quality_of_life: float = Field(default=DEFAULT_WEIGHTS["quality_of_life"], ge=0)
    climate: float = Field(default=DEFAULT_WEIGHTS["climate"], ge=0)
    student_life: float = Field(default=DEFAULT_WEIGHTS["student_life"], ge=0)
    bureaucracy_ease: float = Field(default=DEFAULT_WEIGHTS["bureaucracy_ease"], ge=0)
    emotional_fit: float = Field(default=DEFAULT_WEIGHTS["emotional_fit"], ge=0)

    class Config:
        allow_inf_nan = False

    def weight_for(self, category: Category) -> float:
        return getattr(self, CATEGORY_WEIGHT_FIELDS[Category(category)])

    def total(self) -> float:
        return sum(self.weight_for(category) for category in Category)


class WeightPreset(BaseModel):
    """A named, persisted snapshot of a Weights value."""
    id: str
    name: str
    weights: Weights = Field(default_factory=Weights)
    created_at: datetime = Field(default_factory=_utcnow)


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class ScoreBreakdown(BaseModel):
    """
    One 0-10 score per category plus the weighted final score.
    Derived on every call and never persisted; values rounded to one decimal.
    """
    cost_score: float
    housing_score: float
    stem_score: float
    work_score: float
    adaptation_score: float
    quality_score: float
    climate_score: float
    student_life_score: float
    bureaucracy_score: float
    emotional_score: float
    final_score: float

    def score_for(self, category: Category) -> float:
        return getattr(self, f"{Category(category).value}_score")

    def category_scores(self) -> Dict[str, float]:
        return {category.value: self.score_for(category) for category in Category}


class RankedOption(BaseModel):
    """Ranking entry. rank is 1-based."""
    rank: int
    option: UniversityOption
    breakdown: ScoreBreakdown


class DeadlineItem(BaseModel):
    """A dated milestone of an active option."""
    option: UniversityOption
    milestone: str
    type: str
    date: dt.date
    days_left: int


class ProfileCosts(BaseModel):
    """Monthly costs per category after a spending profile, in whole units."""
    rent: int = 0
    food: int = 0
    transport: int = 0
    phone: int = 0
    academic: int = 0
    leisure: int = 0
    travel: int = 0
    health: int = 0
    misc: int = 0

    @property
    def total(self) -> int:
        return sum(getattr(self, category) for category in PROFILE_CATEGORIES)


class ScenarioResult(BaseModel):
    costs: ProfileCosts
    income: float
    total_monthly: float


class BudgetProjection(BaseModel):
    """Scenario projection of one option against its no-scenario baseline."""
    option_id: str
    option_name: str = ""
    profile: str
    active_scenarios: List[str] = Field(default_factory=list)
    fx_delta_percent: float = 0.0
    months: int
    extra_reserve: float
    profile_costs: ProfileCosts
    result: ScenarioResult
    baseline: ScenarioResult
    one_time_total: float
    total_estimate: float
    baseline_total: float
    savings_vs_baseline: float


class ComparisonRow(BaseModel):
    """One criterion across the compared options."""
    label: str
    category: str
    kind: str  # text/status/currency/score
    higher_is_better: Optional[bool] = None
    values: Dict[str, Any] = Field(default_factory=dict)
    scores: Dict[str, float] = Field(default_factory=dict)  # 0-10 within the compared options
    best: List[str] = Field(default_factory=list)
    worst: List[str] = Field(default_factory=list)


class ComparisonTable(BaseModel):
    option_ids: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    rows: List[ComparisonRow] = Field(default_factory=list)
    breakdowns: Dict[str, ScoreBreakdown] = Field(default_factory=dict)


class ChecklistProgress(BaseModel):
    option_id: str
    done: int
    total: int
    percent: int


class DashboardSummary(BaseModel):
    total_options: int = 0
    active_options: int = 0
    average_monthly_total: int = 0
    average_six_month_total: int = 0
    favorites: int = 0
    candidates: int = 0
    urgent_deadlines: int = 0
    top_ranked: List[RankedOption] = Field(default_factory=list)
    upcoming_deadlines: List[DeadlineItem] = Field(default_factory=list)
    checklist_progress: List[ChecklistProgress] = Field(default_factory=list)
    badges: Dict[str, List[Badge]] = Field(default_factory=dict)
