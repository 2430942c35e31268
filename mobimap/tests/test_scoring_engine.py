"""
Test the score breakdown and ranking pipeline.
"""

import json

import pytest

from mobimap.logic import (
    ComparisonEngine,
    Status,
    UniversityOption,
    Weights,
    apply_profile,
    apply_scenarios,
    compute_breakdown,
    rank_options,
)
from mobimap.logic.aggregator import batch_breakdowns

from .factories import build_option, only_weight


def rated_option(option_id="rated", **overrides):
    fields = dict(
        monthly_rent=800,
        stem_reputation=8,
        research_opportunities=8,
        lab_access=8,
        credit_compatibility=8,
        english_courses=6,
        internship_chance=6,
        networking_quality=7,
        startup_ecosystem=8,
        university_jobs=9,
        language_difficulty=9,
        international_community=6,
        public_transport=3,
        safety=8,
        quality_of_life=7,
        climate_score=5,
        emotional_score=9,
    )
    fields.update(overrides)
    return build_option(option_id, **fields)


def test_breakdown_category_scores():
    """Rating categories are plain means of their fields."""
    option = rated_option()
    breakdown = compute_breakdown(option, [option], Weights())

    assert breakdown.stem_score == 7.6
    assert breakdown.work_score == 7.5
    assert breakdown.adaptation_score == 6.0
    assert breakdown.quality_score == 7.5
    assert breakdown.climate_score == 5.0
    assert breakdown.student_life_score == 5.3
    assert breakdown.bureaucracy_score == 7.0
    assert breakdown.emotional_score == 9.0
    # alone in its cohort: it is the max of both cost metrics
    assert breakdown.cost_score == 0.0
    assert breakdown.housing_score == 0.0


def test_bureaucracy_score_is_configurable():
    option = rated_option()
    breakdown = compute_breakdown(option, [option], Weights(), bureaucracy_score=4)
    assert breakdown.bureaucracy_score == 4.0
    assert ComparisonEngine(bureaucracy_score=2.5).breakdown(option, [option], Weights()).bureaucracy_score == 2.5


def test_weight_scaling_invariance():
    """Multiplying every weight by the same factor leaves the final score unchanged."""
    a = rated_option("a", monthly_rent=600)
    b = rated_option("b", monthly_rent=1400, stem_reputation=4)
    weights = Weights()
    scaled = Weights(**{name: value * 3 for name, value in weights.model_dump().items()})

    for option in (a, b):
        assert compute_breakdown(option, [a, b], weights).final_score == \
            compute_breakdown(option, [a, b], scaled).final_score


def test_all_zero_weights_use_unit_denominator():
    option = rated_option()
    zeros = Weights(**{name: 0 for name in Weights.model_fields})
    assert compute_breakdown(option, [option], zeros).final_score == 0.0


def test_single_weight_gives_that_category():
    option = rated_option()
    breakdown = compute_breakdown(option, [option], only_weight("stem_strength", 4))
    assert breakdown.final_score == breakdown.stem_score


def test_negative_weights_are_rejected():
    with pytest.raises(ValueError):
        Weights(total_cost=-1)
    with pytest.raises(ValueError):
        Weights(total_cost=float("inf"))


def test_overflowing_json_numbers_score_as_zero():
    """A JSON number too large for a float is read as zero, not infinity."""
    option = UniversityOption(**json.loads('{"id": "a", "stem_reputation": 1e400, "monthly_rent": 1e400}'))
    other = rated_option("b")

    assert option.stem_reputation == 0
    assert option.monthly_rent == 0
    breakdown = compute_breakdown(option, [option, other], Weights())
    assert breakdown.stem_score == 0.0
    assert [r.option.id for r in rank_options([option, other], Weights())] == ["b", "a"]
    assert apply_scenarios(apply_profile(option), 0, ["dormitory"]).total_monthly == 0


def test_batch_breakdowns_share_the_cohort():
    a = rated_option("a", monthly_rent=500)
    b = rated_option("b", monthly_rent=1000)
    breakdowns = batch_breakdowns([a, b], Weights())
    assert [bd.housing_score for bd in breakdowns] == [5.0, 0.0]


def test_end_to_end_two_option_ranking():
    """Only cost is weighted, so the final score equals the cost score."""
    a = build_option("a", monthly_rent=1000, stem_reputation=9)
    b = build_option("b", monthly_rent=2000, stem_reputation=5)

    ranked = rank_options([b, a], only_weight("total_cost"))

    assert [r.option.id for r in ranked] == ["a", "b"]
    assert [r.rank for r in ranked] == [1, 2]
    top, bottom = ranked[0].breakdown, ranked[1].breakdown
    # min is floored at 0: (2000 - 1000) / 2000 * 10
    assert top.cost_score == 5.0
    assert bottom.cost_score == 0.0
    assert top.final_score == top.cost_score
    assert bottom.final_score == bottom.cost_score


def test_ranking_ignores_discarded_options():
    """Discarded options are neither ranked nor part of the normalization cohort."""
    a = build_option("a", monthly_rent=1000)
    b = build_option("b", monthly_rent=2000)
    gone = build_option("gone", monthly_rent=8000, status=Status.DISCARDED)
    weights = only_weight("total_cost")

    with_discarded = rank_options([a, b, gone], weights)
    without = rank_options([a, b], weights)

    assert [r.option.id for r in with_discarded] == ["a", "b"]
    assert [r.breakdown for r in with_discarded] == [r.breakdown for r in without]


def test_ranking_ties_keep_insertion_order():
    options = [rated_option(option_id) for option_id in ("first", "second", "third")]
    ranked = rank_options(options, Weights())
    assert [r.option.id for r in ranked] == ["first", "second", "third"]
    assert len({r.breakdown.final_score for r in ranked}) == 1


def test_ranking_empty_cohorts():
    assert rank_options([], Weights()) == []
    discarded = build_option("x", status="discarded")
    assert rank_options([discarded], Weights()) == []


def test_engine_rank_matches_rank_options():
    options = [rated_option("a", monthly_rent=700), rated_option("b", monthly_rent=900, emotional_score=2)]
    engine = ComparisonEngine()
    assert engine.rank(options, Weights()) == rank_options(options, Weights())
    assert engine.version == "1.0.0"
