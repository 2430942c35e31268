"""
Scoring Engine Constants

Defines the enums, fallback bounds, default weights, spending profiles and
scenario amounts used by the comparison engine.
All values are deterministic policy - change them here, not inline.
"""

from enum import Enum
from typing import Dict, List, Tuple

# =============================================================================
# LIFECYCLE ENUMS
# =============================================================================

class Status(str, Enum):
    """Lifecycle of an option. DISCARDED is terminal."""
    INTERESTED = "interested"
    CANDIDATE = "candidate"
    APPROVED = "approved"
    DISCARDED = "discarded"


class Priority(str, Enum):
    A = "A"
    B = "B"
    C = "C"


class RegretRisk(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Direction(str, Enum):
    """Normalization direction for numeric metrics."""
    LOWER_IS_BETTER = "lower_is_better"    # all cost metrics
    HIGHER_IS_BETTER = "higher_is_better"


class Category(str, Enum):
    """The ten weighted categories of a score breakdown."""
    COST = "cost"
    HOUSING = "housing"
    STEM = "stem"
    WORK = "work"
    ADAPTATION = "adaptation"
    QUALITY = "quality"
    CLIMATE = "climate"
    STUDENT_LIFE = "student_life"
    BUREAUCRACY = "bureaucracy"
    EMOTIONAL = "emotional"


class Badge(str, Enum):
    """Superlative tags an option can earn against the active cohort."""
    CHEAPEST = "cheapest"
    BEST_STEM = "best_stem"
    BEST_CAREER = "best_career"
    BEST_QUALITY_OF_LIFE = "best_quality_of_life"
    BEST_OVERALL = "best_overall"


# =============================================================================
# NORMALIZATION FALLBACKS
# =============================================================================

# Synthetic cohort bounds: max never below 1, min never above 0.
# Keeps the range non-degenerate for single-option and all-zero cohorts.
COHORT_MAX_FLOOR = 1.0
COHORT_MIN_CEILING = 0.0

# Used when max == min
RANGE_FALLBACK = 1.0

SCORE_MIN = 0.0
SCORE_MAX = 10.0

# Denominator used when every weight is zero
ZERO_WEIGHT_DENOMINATOR = 1.0

# =============================================================================
# CATEGORY POLICY
# =============================================================================

# No authored input exists for bureaucracy yet
BUREAUCRACY_SCORE = 7.0

# Rating fields averaged per category. STEM uses the five-field academic set
# everywhere (client-side engine formula).
STEM_FIELDS: Tuple[str, ...] = (
    "stem_reputation",
    "research_opportunities",
    "lab_access",
    "credit_compatibility",
    "english_courses",
)
WORK_FIELDS: Tuple[str, ...] = (
    "internship_chance",
    "networking_quality",
    "startup_ecosystem",
    "university_jobs",
)
ADAPTATION_FIELDS: Tuple[str, ...] = (
    "language_difficulty",
    "international_community",
    "public_transport",
)
QUALITY_FIELDS: Tuple[str, ...] = ("safety", "quality_of_life")
STUDENT_LIFE_FIELDS: Tuple[str, ...] = (
    "international_community",
    "public_transport",
    "quality_of_life",
)

# Career badge deliberately leaves university_jobs out
CAREER_BADGE_FIELDS: Tuple[str, ...] = (
    "internship_chance",
    "networking_quality",
    "startup_ecosystem",
)

# Category -> Weights field
CATEGORY_WEIGHT_FIELDS: Dict[Category, str] = {
    Category.COST: "total_cost",
    Category.HOUSING: "housing",
    Category.STEM: "stem_strength",
    Category.WORK: "work_opportunities",
    Category.ADAPTATION: "language_adaptation",
    Category.QUALITY: "quality_of_life",
    Category.CLIMATE: "climate",
    Category.STUDENT_LIFE: "student_life",
    Category.BUREAUCRACY: "bureaucracy_ease",
    Category.EMOTIONAL: "emotional_fit",
}

# =============================================================================
# COST FIELDS
# =============================================================================

MONTHLY_COST_FIELDS: Tuple[str, ...] = (
    "monthly_rent",
    "monthly_food",
    "monthly_transport",
    "monthly_phone",
    "monthly_academic",
    "monthly_leisure",
    "monthly_travel",
    "monthly_health",
    "monthly_misc",
)

ONE_TIME_COST_FIELDS: Tuple[str, ...] = (
    "flight_cost",
    "visa_cost",
    "housing_deposit",
    "setup_cost",
    "insurance_cost",
)

DEFAULT_PROJECTION_MONTHS = 6

# =============================================================================
# WEIGHTS & PRESETS
# =============================================================================

DEFAULT_WEIGHTS: Dict[str, float] = {
    "total_cost": 8,
    "housing": 6,
    "stem_strength": 9,
    "work_opportunities": 5,
    "language_adaptation": 6,
    "quality_of_life": 7,
    "climate": 4,
    "student_life": 5,
    "bureaucracy_ease": 4,
    "emotional_fit": 7,
}

BUILTIN_PRESETS: List[Dict] = [
    {
        "id": "cost-focused",
        "name": "Priority: Cost",
        "weights": {
            "total_cost": 10, "housing": 9, "stem_strength": 5, "work_opportunities": 4,
            "language_adaptation": 5, "quality_of_life": 5, "climate": 3,
            "student_life": 3, "bureaucracy_ease": 3, "emotional_fit": 5,
        },
    },
    {
        "id": "stem-focused",
        "name": "Priority: STEM",
        "weights": {
            "total_cost": 5, "housing": 4, "stem_strength": 10, "work_opportunities": 7,
            "language_adaptation": 4, "quality_of_life": 5, "climate": 3,
            "student_life": 4, "bureaucracy_ease": 3, "emotional_fit": 6,
        },
    },
    {
        "id": "career-focused",
        "name": "Priority: Career",
        "weights": {
            "total_cost": 4, "housing": 3, "stem_strength": 8, "work_opportunities": 10,
            "language_adaptation": 5, "quality_of_life": 5, "climate": 2,
            "student_life": 4, "bureaucracy_ease": 3, "emotional_fit": 5,
        },
    },
    {
        "id": "balanced",
        "name": "Balanced",
        "weights": dict(DEFAULT_WEIGHTS),
    },
]

# =============================================================================
# CHECKLIST
# =============================================================================

DEFAULT_CHECKLIST: List[Tuple[str, str]] = [
    ("application", "Application submitted"),
    ("docs", "Documents translated"),
    ("acceptance", "Acceptance letter received"),
    ("passport", "Valid passport"),
    ("visa", "Visa requested"),
    ("insurance", "Insurance purchased"),
    ("housing", "Housing confirmed"),
    ("flight", "Flight booked"),
    ("courses", "Courses approved"),
    ("financial", "Financial plan closed"),
    ("bank", "International bank account opened"),
    ("chip", "International SIM/internet"),
]

# =============================================================================
# DEADLINES
# =============================================================================

# (option field, human label) in display order
DEADLINE_FIELDS: List[Tuple[str, str]] = [
    ("application_deadline", "Application"),
    ("visa_deadline", "Visa"),
    ("housing_deadline", "Housing"),
    ("semester_start", "Semester start"),
]

# Exclusive bounds on days left
DEADLINE_MIN_DAYS = -30
DEADLINE_MAX_DAYS = 365

URGENT_DEADLINE_DAYS = 30

# =============================================================================
# COMPARISON
# =============================================================================

MAX_COMPARE_OPTIONS = 5
TOP_RANKED_SUMMARY = 3

# =============================================================================
# SCENARIO SIMULATOR
# =============================================================================

class SpendingProfile(str, Enum):
    FRUGAL = "frugal"
    REALISTIC = "realistic"
    COMFORTABLE = "comfortable"


class ScenarioKey(str, Enum):
    """Toggleable what-if adjustments, listed in pipeline order."""
    DORMITORY = "dormitory"
    SHARED_ROOM = "sharedRoom"
    SCHOLARSHIP = "scholarship"
    PART_TIME = "partTime"
    CHEAPER_CITY = "betterCity"
    CURRENCY_SHIFT = "euroBrl"


# Snake-case spellings accepted for the scenario keys
SCENARIO_KEY_ALIASES: Dict[str, ScenarioKey] = {
    "shared_room": ScenarioKey.SHARED_ROOM,
    "part_time": ScenarioKey.PART_TIME,
    "cheaper_city": ScenarioKey.CHEAPER_CITY,
    "better_city": ScenarioKey.CHEAPER_CITY,
    "currency_shift": ScenarioKey.CURRENCY_SHIFT,
    "euro_brl": ScenarioKey.CURRENCY_SHIFT,
}


# Profile cost categories, in display order
PROFILE_CATEGORIES: Tuple[str, ...] = (
    "rent", "food", "transport", "phone", "academic",
    "leisure", "travel", "health", "misc",
)

PROFILE_MULTIPLIERS: Dict[SpendingProfile, Dict[str, float]] = {
    SpendingProfile.FRUGAL: {
        "rent": 0.75, "food": 0.7, "transport": 0.8, "phone": 0.9, "academic": 0.7,
        "leisure": 0.5, "travel": 0.5, "health": 0.9, "misc": 0.6,
    },
    SpendingProfile.REALISTIC: {category: 1.0 for category in PROFILE_CATEGORIES},
    SpendingProfile.COMFORTABLE: {
        "rent": 1.4, "food": 1.3, "transport": 1.2, "phone": 1.1, "academic": 1.3,
        "leisure": 1.8, "travel": 1.6, "health": 1.2, "misc": 1.4,
    },
}

PROFILE_LABELS: Dict[SpendingProfile, str] = {
    SpendingProfile.FRUGAL: "Super frugal",
    SpendingProfile.REALISTIC: "Realistic",
    SpendingProfile.COMFORTABLE: "Comfortable",
}

DORMITORY_RENT_FACTOR = 0.7
SHARED_ROOM_RENT_FACTOR = 0.8
CHEAPER_CITY_FACTOR = 0.85
CHEAPER_CITY_CATEGORIES: Tuple[str, ...] = ("rent", "food", "leisure")
SCHOLARSHIP_BONUS = 200
PART_TIME_INCOME = 400

DEFAULT_FX_DELTA_PERCENT = 15.0
DEFAULT_EXTRA_RESERVE = 500.0
MIN_SIMULATION_MONTHS = 1
MAX_SIMULATION_MONTHS = 12
MAX_BUDGET_COMPARISON = 5
