"""
MobiMap API Routes

Exposes the option collection, weights, presets and the comparison engine
via REST API under /api.
"""

import datetime as dt
import logging
import os
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from .logic.adapter import option_from_record
from .logic.constants import (
    DEFAULT_EXTRA_RESERVE,
    DEFAULT_FX_DELTA_PERCENT,
    DEFAULT_PROJECTION_MONTHS,
    MAX_COMPARE_OPTIONS,
    SpendingProfile,
)
from .logic.contracts import ChecklistItem, UniversityOption, Weights
from .logic.engine import ComparisonEngine
from .logic.scenario_simulator import scenario_catalog
from .state import AppStore, DuplicateOptionError, MobiMapError, OptionNotFoundError, PresetNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["mobimap"])

_store: Optional[AppStore] = None
_engine: Optional[ComparisonEngine] = None


def set_store(store: AppStore) -> None:
    global _store
    _store = store


def get_store() -> AppStore:
    global _store
    if _store is None:
        _store = AppStore()
    return _store


def get_engine() -> ComparisonEngine:
    global _engine
    if _engine is None:
        _engine = ComparisonEngine(float(os.getenv("MOBIMAP_BUREAUCRACY_SCORE", "7")))
    return _engine


def _http_error(exc: MobiMapError) -> HTTPException:
    if isinstance(exc, (OptionNotFoundError, PresetNotFoundError)):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, DuplicateOptionError):
        return HTTPException(status_code=409, detail=str(exc))
    logger.error(f"Unhandled application error: {exc}")
    return HTTPException(status_code=500, detail=str(exc))


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class DiaryRequest(BaseModel):
    text: str = Field(..., min_length=1)
    date: Optional[dt.date] = None


class PresetRequest(BaseModel):
    name: str = Field(..., min_length=1)
    weights: Optional[Weights] = Field(
        default=None,
        description="Weights to store; the current weights when omitted"
    )


class PresetUpdateRequest(BaseModel):
    name: Optional[str] = None
    weights: Optional[Weights] = None


class RankingRequest(BaseModel):
    weights: Optional[Weights] = Field(
        default=None,
        description="Ad-hoc weights; the stored weights when omitted"
    )
    university_ids: Optional[List[str]] = Field(
        default=None,
        description="Restrict the cohort to these ids"
    )


class ComparisonRequest(BaseModel):
    university_ids: List[str] = Field(..., min_length=1, max_length=MAX_COMPARE_OPTIONS)
    category: Optional[str] = Field(default=None, example="Costs")
    weights: Optional[Weights] = None


class SimulationRequest(BaseModel):
    profile: SpendingProfile = SpendingProfile.REALISTIC
    scenarios: List[str] = Field(default_factory=list, example=["dormitory", "scholarship", "euroBrl"])
    fx_delta_percent: float = DEFAULT_FX_DELTA_PERCENT
    months: int = DEFAULT_PROJECTION_MONTHS
    extra_reserve: float = DEFAULT_EXTRA_RESERVE


class SingleSimulationRequest(SimulationRequest):
    university_id: str


class MultiSimulationRequest(SimulationRequest):
    university_ids: List[str] = Field(..., min_length=1)


# =============================================================================
# HEALTH
# =============================================================================

@router.get("/health")
def health(store: AppStore = Depends(get_store), engine: ComparisonEngine = Depends(get_engine)):
    return {"status": "ok", "engine_version": engine.version, "state_version": store.version}


# =============================================================================
# UNIVERSITIES
# =============================================================================

@router.get("/universities")
def list_universities(store: AppStore = Depends(get_store)):
    return store.snapshot().options


@router.post("/universities", status_code=201)
def create_university(option: UniversityOption, store: AppStore = Depends(get_store)):
    try:
        return store.add_option(option)
    except MobiMapError as e:
        raise _http_error(e)


@router.post("/universities/import", status_code=201)
def import_universities(records: List[Dict[str, Any]] = Body(...), store: AppStore = Depends(get_store)):
    """
    Import nested university records (camelCase backend shape).

    All records are added in one commit; a taken id rejects the whole batch.
    """
    try:
        options = [option_from_record(record) for record in records]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid record: {str(e)}")
    try:
        imported = store.import_options(options)
    except MobiMapError as e:
        raise _http_error(e)
    return {"count": len(imported), "universities": imported}


@router.get("/universities/{option_id}")
def get_university(option_id: str, store: AppStore = Depends(get_store)):
    try:
        return store.get_option(option_id)
    except MobiMapError as e:
        raise _http_error(e)


@router.put("/universities/{option_id}")
def replace_university(option_id: str, payload: Dict[str, Any] = Body(...), store: AppStore = Depends(get_store)):
    try:
        option = UniversityOption(**{**payload, "id": option_id})
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Invalid university: {str(e)}")
    try:
        return store.update_option(option)
    except MobiMapError as e:
        raise _http_error(e)


@router.patch("/universities/{option_id}")
def patch_university(option_id: str, changes: Dict[str, Any] = Body(...), store: AppStore = Depends(get_store)):
    try:
        return store.patch_option(option_id, changes)
    except MobiMapError as e:
        raise _http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid changes: {str(e)}")


@router.delete("/universities/{option_id}", status_code=204)
def delete_university(option_id: str, store: AppStore = Depends(get_store)):
    try:
        store.delete_option(option_id)
    except MobiMapError as e:
        raise _http_error(e)


@router.post("/universities/{option_id}/duplicate", status_code=201)
def duplicate_university(option_id: str, store: AppStore = Depends(get_store)):
    try:
        return store.duplicate_option(option_id)
    except MobiMapError as e:
        raise _http_error(e)


@router.post("/universities/{option_id}/favorite")
def toggle_favorite(option_id: str, store: AppStore = Depends(get_store)):
    try:
        return store.toggle_favorite(option_id)
    except MobiMapError as e:
        raise _http_error(e)


# =============================================================================
# CHECKLIST & DIARY
# =============================================================================

@router.get("/universities/{option_id}/checklist")
def get_checklist(option_id: str, store: AppStore = Depends(get_store)):
    try:
        return store.get_option(option_id).checklist
    except MobiMapError as e:
        raise _http_error(e)


@router.put("/universities/{option_id}/checklist")
def put_checklist(option_id: str, checklist: List[ChecklistItem], store: AppStore = Depends(get_store)):
    try:
        return store.set_checklist(option_id, checklist).checklist
    except MobiMapError as e:
        raise _http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/universities/{option_id}/checklist/{item_id}/toggle")
def toggle_checklist_item(option_id: str, item_id: str, store: AppStore = Depends(get_store)):
    try:
        return store.toggle_checklist_item(option_id, item_id).checklist
    except MobiMapError as e:
        raise _http_error(e)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/universities/{option_id}/diary")
def get_diary(option_id: str, store: AppStore = Depends(get_store)):
    try:
        return store.diary_recent_first(option_id)
    except MobiMapError as e:
        raise _http_error(e)


@router.post("/universities/{option_id}/diary", status_code=201)
def add_diary_entry(option_id: str, request: DiaryRequest, store: AppStore = Depends(get_store)):
    try:
        return store.add_diary_entry(option_id, request.text, request.date)
    except MobiMapError as e:
        raise _http_error(e)


# =============================================================================
# SCORING
# =============================================================================

@router.get("/universities/{option_id}/breakdown")
def get_breakdown(
    option_id: str,
    store: AppStore = Depends(get_store),
    engine: ComparisonEngine = Depends(get_engine),
):
    """Category scores of one option against the active cohort."""
    snapshot = store.snapshot()
    try:
        option = store.get_option(option_id)
    except MobiMapError as e:
        raise _http_error(e)
    cohort = [u for u in snapshot.options if u.is_active]
    return engine.breakdown(option, cohort, snapshot.weights)


@router.get("/universities/{option_id}/badges")
def get_badges(
    option_id: str,
    store: AppStore = Depends(get_store),
    engine: ComparisonEngine = Depends(get_engine),
):
    snapshot = store.snapshot()
    try:
        option = store.get_option(option_id)
    except MobiMapError as e:
        raise _http_error(e)
    return {"university_id": option.id, "badges": engine.badges(option, snapshot.options, snapshot.weights)}


@router.get("/badges")
def get_all_badges(store: AppStore = Depends(get_store), engine: ComparisonEngine = Depends(get_engine)):
    """Badges of every active option, keyed by id."""
    snapshot = store.snapshot()
    return engine.all_badges(snapshot.options, snapshot.weights)


@router.post("/ranking/calculate")
def calculate_ranking(
    request: Optional[RankingRequest] = None,
    store: AppStore = Depends(get_store),
    engine: ComparisonEngine = Depends(get_engine),
):
    """
    Rank the active options.

    **Request Body:**
    - `weights`: Optional ad-hoc weights (stored weights otherwise)
    - `university_ids`: Optional subset of the collection to rank
    """
    request = request or RankingRequest()
    snapshot = store.snapshot()
    options = snapshot.options
    if request.university_ids is not None:
        wanted = set(request.university_ids)
        options = [u for u in options if u.id in wanted]
    weights = request.weights or snapshot.weights
    ranked = engine.rank(options, weights)
    return {"weights": weights, "count": len(ranked), "ranking": ranked}


@router.get("/deadlines")
def get_deadlines(
    today: Optional[date] = Query(default=None, description="Reference day (server date when omitted)"),
    store: AppStore = Depends(get_store),
    engine: ComparisonEngine = Depends(get_engine),
):
    return engine.deadlines(store.snapshot().options, today)


@router.get("/summary")
def get_summary(
    today: Optional[date] = Query(default=None),
    store: AppStore = Depends(get_store),
    engine: ComparisonEngine = Depends(get_engine),
):
    snapshot = store.snapshot()
    return engine.summary(snapshot.options, snapshot.weights, today)


# =============================================================================
# WEIGHTS & PRESETS
# =============================================================================

@router.get("/weights")
def get_weights(store: AppStore = Depends(get_store)):
    return store.snapshot().weights


@router.put("/weights")
def put_weights(weights: Weights, store: AppStore = Depends(get_store)):
    return store.set_weights(weights)


@router.get("/comparisons/presets")
def list_presets(store: AppStore = Depends(get_store)):
    return store.snapshot().presets


@router.post("/comparisons/presets", status_code=201)
def create_preset(request: PresetRequest, store: AppStore = Depends(get_store)):
    return store.save_preset(request.name, request.weights)


@router.put("/comparisons/presets/{preset_id}")
def update_preset(preset_id: str, request: PresetUpdateRequest, store: AppStore = Depends(get_store)):
    try:
        return store.update_preset(preset_id, request.name, request.weights)
    except MobiMapError as e:
        raise _http_error(e)


@router.delete("/comparisons/presets/{preset_id}", status_code=204)
def delete_preset(preset_id: str, store: AppStore = Depends(get_store)):
    try:
        store.delete_preset(preset_id)
    except MobiMapError as e:
        raise _http_error(e)


@router.post("/comparisons/presets/{preset_id}/apply")
def apply_preset(preset_id: str, store: AppStore = Depends(get_store)):
    try:
        return store.apply_preset(preset_id)
    except MobiMapError as e:
        raise _http_error(e)


@router.post("/comparisons/table")
def comparison_table(
    request: ComparisonRequest,
    store: AppStore = Depends(get_store),
    engine: ComparisonEngine = Depends(get_engine),
):
    """Side-by-side criteria of up to five options, in request order."""
    try:
        options = [store.get_option(option_id) for option_id in request.university_ids]
    except MobiMapError as e:
        raise _http_error(e)
    weights = request.weights or store.snapshot().weights
    return engine.compare(options, weights, request.category)


# =============================================================================
# SCENARIOS
# =============================================================================

@router.get("/scenarios/catalog")
def get_scenario_catalog():
    return scenario_catalog()


@router.post("/scenarios/simulate")
def simulate(
    request: SingleSimulationRequest,
    store: AppStore = Depends(get_store),
    engine: ComparisonEngine = Depends(get_engine),
):
    try:
        option = store.get_option(request.university_id)
    except MobiMapError as e:
        raise _http_error(e)
    return engine.simulate(
        option,
        request.profile,
        request.scenarios,
        request.fx_delta_percent,
        request.months,
        request.extra_reserve,
    )


@router.post("/scenarios/compare")
def simulate_many(
    request: MultiSimulationRequest,
    store: AppStore = Depends(get_store),
    engine: ComparisonEngine = Depends(get_engine),
):
    try:
        options = [store.get_option(option_id) for option_id in request.university_ids]
    except MobiMapError as e:
        raise _http_error(e)
    projections = engine.simulate_many(
        options,
        request.profile,
        request.scenarios,
        request.fx_delta_percent,
        request.months,
        request.extra_reserve,
    )
    return {"count": len(projections), "projections": projections}
