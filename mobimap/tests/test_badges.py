"""
Test the superlative badge rules.
"""

from mobimap.logic import Badge, Weights, badges_for, badges_for_all

from .factories import build_option, only_weight


def test_cohort_smaller_than_two_earns_nothing():
    solo = build_option("solo", monthly_rent=100, stem_reputation=10)
    assert badges_for(solo, [solo], Weights()) == []


def test_discarded_options_do_not_count_towards_the_cohort():
    a = build_option("a", stem_reputation=6)
    gone = build_option("gone", stem_reputation=10, status="discarded")

    # only one active option left
    assert badges_for(a, [a, gone], Weights()) == []

    b = build_option("b", stem_reputation=5)
    assert Badge.BEST_STEM in badges_for(a, [a, b, gone], Weights())


def test_each_rule_is_evaluated_independently():
    cheap = build_option(
        "cheap", monthly_rent=500, stem_reputation=6, quality_of_life=5,
        internship_chance=4, networking_quality=4, startup_ecosystem=4,
    )
    strong = build_option(
        "strong", monthly_rent=1500, stem_reputation=9, quality_of_life=8,
        internship_chance=9, networking_quality=8, startup_ecosystem=7,
    )
    cohort = [cheap, strong]
    weights = only_weight("total_cost")

    assert badges_for(cheap, cohort, weights) == [Badge.CHEAPEST, Badge.BEST_OVERALL]
    assert badges_for(strong, cohort, weights) == [
        Badge.BEST_STEM, Badge.BEST_CAREER, Badge.BEST_QUALITY_OF_LIFE,
    ]


def test_ties_award_every_holder():
    a = build_option("a", monthly_rent=900, stem_reputation=8)
    b = build_option("b", monthly_rent=900, stem_reputation=8)
    cohort = [a, b]

    for option in cohort:
        badges = badges_for(option, cohort, Weights())
        assert Badge.CHEAPEST in badges
        assert Badge.BEST_STEM in badges
        assert Badge.BEST_OVERALL in badges


def test_career_badge_ignores_university_jobs():
    a = build_option("a", internship_chance=7, networking_quality=7, startup_ecosystem=7, university_jobs=0)
    b = build_option("b", internship_chance=6, networking_quality=6, startup_ecosystem=6, university_jobs=10)
    assert Badge.BEST_CAREER in badges_for(a, [a, b], Weights())
    assert Badge.BEST_CAREER not in badges_for(b, [a, b], Weights())


def test_badges_for_all_covers_active_options_only():
    a = build_option("a", monthly_rent=400)
    b = build_option("b", monthly_rent=800)
    gone = build_option("gone", monthly_rent=100, status="discarded")

    result = badges_for_all([a, b, gone], Weights())

    assert set(result) == {"a", "b"}
    assert Badge.CHEAPEST in result["a"]
    assert Badge.CHEAPEST not in result["b"]


def test_discarded_option_earns_nothing():
    a = build_option("a", monthly_rent=900, stem_reputation=6)
    b = build_option("b", monthly_rent=800, stem_reputation=7)
    gone = build_option("gone", monthly_rent=100, stem_reputation=10, status="discarded")

    assert badges_for(gone, [a, b, gone], Weights()) == []
