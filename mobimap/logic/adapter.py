"""
Record Adapter

Transforms the backend's nested option records (estimatedMonthlyCost,
academicProfile, lifeProfile, userPreferencesFit, ...) into the flat
UniversityOption contract used by the engine.

This is a pure TRANSFORM layer:
- NO scoring logic
- NO ranking
- NO DB access
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .constants import DEFAULT_CHECKLIST
from .contracts import ChecklistItem, UniversityOption

# Rating used when a profile field is missing or zero
DEFAULT_RATING = 5

# Monthly cost keys of the nested record, summed when "total" is absent
RECORD_COST_KEYS = (
    "housing",
    "food",
    "transport",
    "internetPhone",
    "studyMaterials",
    "leisure",
    "healthInsurance",
    "misc",
)

# Regional indicator symbol A minus ord("A")
_FLAG_OFFSET = 127397


def country_flag(country_code: Optional[str]) -> str:
    """Flag glyph from a two-letter country code ('' for no code)."""
    if not country_code:
        return ""
    return "".join(chr(_FLAG_OFFSET + ord(char)) for char in country_code.upper())


def monthly_cost_total(cost: Dict[str, Any]) -> float:
    """The record's total, or the sum of its line items when total is missing."""
    if cost.get("total"):
        return cost["total"]
    return sum(cost.get(key) or 0 for key in RECORD_COST_KEYS)


def default_checklist() -> List[ChecklistItem]:
    return [ChecklistItem(id=item_id, label=label) for item_id, label in DEFAULT_CHECKLIST]


def _rating(profile: Dict[str, Any], key: str) -> float:
    return profile.get(key) or DEFAULT_RATING


def _deadline(record: Dict[str, Any], kind: str) -> Optional[str]:
    for deadline in record.get("deadlines") or []:
        if deadline.get("type") == kind:
            return deadline.get("date") or None
    return None


def option_from_record(record: Dict[str, Any]) -> UniversityOption:
    """
    Convert a nested backend record to a UniversityOption.

    Missing ratings default to 5; language difficulty is 10 minus the
    language fit so that 10 still means easy.

    Args:
        record: Backend record (camelCase keys)

    Returns:
        UniversityOption
    """
    cost = record.get("estimatedMonthlyCost") or {}
    academic = record.get("academicProfile") or {}
    life = record.get("lifeProfile") or {}
    fit = record.get("userPreferencesFit") or {}
    now = datetime.now(timezone.utc)

    option_id = record["id"]
    language_fit = fit.get("languageFitScore")

    return UniversityOption(
        id=option_id,
        name=record.get("universityName") or "",
        acronym=option_id.upper()[:4],
        city=record.get("city") or "",
        country=record.get("country") or "",
        flag=country_flag(record.get("countryCode")),
        lat=record.get("latitude") or 0,
        lng=record.get("longitude") or 0,
        website=record.get("websiteUrl") or "",
        stem_focus=record.get("stemFocus") or [],
        status=record.get("status") or "interested",
        priority=record.get("priorityTag"),

        # Monthly costs
        monthly_rent=cost.get("housing") or 0,
        monthly_food=cost.get("food") or 0,
        monthly_transport=cost.get("transport") or 0,
        monthly_phone=cost.get("internetPhone") or 0,
        monthly_academic=cost.get("studyMaterials") or 0,
        monthly_leisure=cost.get("leisure") or 0,
        monthly_health=cost.get("healthInsurance") or 0,
        monthly_misc=cost.get("misc") or 0,

        # Academic
        stem_reputation=_rating(academic, "stemStrengthScore"),
        research_opportunities=_rating(academic, "researchOpportunityScore"),
        english_courses=DEFAULT_RATING,
        credit_compatibility=DEFAULT_RATING,
        lab_access=_rating(academic, "labInfrastructureScore"),
        academic_intensity=DEFAULT_RATING,

        # Work
        internship_chance=_rating(academic, "internshipPotentialScore"),
        networking_quality=_rating(academic, "industryConnectionScore"),
        startup_ecosystem=DEFAULT_RATING,
        university_jobs=_rating(academic, "workOpportunityScore"),

        # Adaptation
        language_difficulty=10 - language_fit if language_fit else DEFAULT_RATING,
        climate_score=_rating(life, "climatePreferenceScore"),
        safety=_rating(life, "safetyScore"),
        quality_of_life=_rating(life, "qualityOfLifeScore"),
        international_community=DEFAULT_RATING,
        public_transport=_rating(life, "publicTransportScore"),

        # Personal fit
        emotional_score=_rating(fit, "overallFitScore"),

        # Text
        language=", ".join(record.get("languageOfInstruction") or []),
        pros=record.get("pros") or [],
        cons=record.get("cons") or [],
        red_flags=record.get("redFlags") or [],
        notes=record.get("personalNotes") or "",
        links=[link.get("url", "") for link in record.get("links") or []],

        # Timeline
        application_deadline=_deadline(record, "application"),
        visa_deadline=_deadline(record, "visa"),
        housing_deadline=_deadline(record, "housing"),

        checklist=record.get("checklist") or default_checklist(),

        created_at=record.get("createdAt") or now,
        updated_at=record.get("updatedAt") or now,
    )
