"""
Test the budget scenario pipeline.
"""

from mobimap.logic import (
    ScenarioKey,
    SpendingProfile,
    apply_profile,
    apply_scenarios,
    compare_budgets,
    project_budget,
    scenario_catalog,
)


def test_realistic_profile_passes_costs_through(make_option, sample_costs):
    costs = apply_profile(make_option("a", **sample_costs), SpendingProfile.REALISTIC)
    assert costs.rent == 1000
    assert costs.total == 1930


def test_frugal_and_comfortable_profiles(make_option, sample_costs):
    option = make_option("a", **sample_costs)
    frugal = apply_profile(option, "frugal")
    comfortable = apply_profile(option, "comfortable")

    assert frugal.rent == 750
    assert frugal.leisure == 75
    assert comfortable.leisure == 270
    assert frugal.total < 1930 < comfortable.total


def test_worked_example_chain(make_option, sample_costs):
    """1930 -> dormitory 1630 -> scholarship 1430 -> +15% currency 1645."""
    costs = apply_profile(make_option("a", **sample_costs))

    assert apply_scenarios(costs, 0, []).total_monthly == 1930
    assert apply_scenarios(costs, 0, ["dormitory"]).total_monthly == 1630
    assert apply_scenarios(costs, 0, ["dormitory", "scholarship"]).total_monthly == 1430

    shifted = apply_scenarios(costs, 0, ["dormitory", "scholarship", "euroBrl"], 15)
    assert shifted.total_monthly == 1645
    assert shifted.costs.rent == 700
    assert shifted.income == 200


def test_pipeline_order_is_fixed(make_option, sample_costs):
    """The currency shift always scales the net total, whatever order keys arrive in."""
    costs = apply_profile(make_option("a", **sample_costs))
    keys = [ScenarioKey.CURRENCY_SHIFT, ScenarioKey.SCHOLARSHIP, ScenarioKey.DORMITORY]
    assert apply_scenarios(costs, 0, keys, 15).total_monthly == 1645


def test_rent_scenarios_stack(make_option, sample_costs):
    costs = apply_profile(make_option("a", **sample_costs))
    result = apply_scenarios(costs, 0, ["dormitory", "sharedRoom", "betterCity"])
    # 1000 * 0.7 = 700, * 0.8 = 560, * 0.85 = 476
    assert result.costs.rent == 476
    assert result.costs.food == 340
    assert result.costs.leisure == 128


def test_unknown_scenarios_are_ignored(make_option, sample_costs):
    costs = apply_profile(make_option("a", **sample_costs))
    assert apply_scenarios(costs, 0, ["teleport", "EUROBRL"]).total_monthly == 1930


def test_snake_case_aliases_match_the_canonical_keys(make_option, sample_costs):
    costs = apply_profile(make_option("a", **sample_costs))
    canonical = apply_scenarios(costs, 0, ["dormitory", "scholarship", "euroBrl"], 15)
    aliased = apply_scenarios(costs, 0, ["dormitory", "scholarship", "currency_shift"], 15)
    assert canonical.total_monthly == aliased.total_monthly == 1645
    assert apply_scenarios(costs, 0, ["part_time", "better_city"]) == apply_scenarios(costs, 0, ["partTime", "betterCity"])


def test_fx_delta_needs_the_currency_scenario(make_option, sample_costs):
    costs = apply_profile(make_option("a", **sample_costs))
    assert apply_scenarios(costs, 0, ["dormitory"], 15).total_monthly == 1630


def test_scholarship_and_part_time_add_income(make_option, sample_costs):
    costs = apply_profile(make_option("a", **sample_costs))
    result = apply_scenarios(costs, 150, ["scholarship", "partTime"])
    assert result.income == 750
    assert result.total_monthly == 1930 - 750


def test_project_budget_against_baseline(make_option, sample_costs):
    option = make_option("a", flight_cost=700, visa_cost=100, **sample_costs)

    projection = project_budget(
        option,
        profile="realistic",
        active_scenarios=["dormitory", "scholarship", "euroBrl"],
        fx_delta_percent=15,
        months=6,
        extra_reserve=500,
    )

    assert projection.one_time_total == 800
    assert projection.total_estimate == 1645 * 6 + 800 + 500
    assert projection.baseline.total_monthly == 1930
    assert projection.baseline_total == 1930 * 6 + 800 + 500
    assert projection.savings_vs_baseline == (1930 - 1645) * 6
    assert projection.active_scenarios == ["dormitory", "euroBrl", "scholarship"]


def test_project_budget_clamps_months(make_option, sample_costs):
    option = make_option("a", **sample_costs)
    assert project_budget(option, months=24).months == 12
    assert project_budget(option, months=0).months == 1


def test_compare_budgets_skips_discarded_and_limits(make_option, sample_costs):
    options = [make_option(f"u{i}", **sample_costs) for i in range(7)]
    options[0] = make_option("u0", status="discarded", **sample_costs)

    projections = compare_budgets(options, active_scenarios=["partTime"])

    assert [p.option_id for p in projections] == ["u1", "u2", "u3", "u4", "u5"]
    assert all(p.result.total_monthly == 1530 for p in projections)


def test_catalog_lists_toggles_in_pipeline_order():
    catalog = scenario_catalog()
    assert [p["key"] for p in catalog["profiles"]] == ["frugal", "realistic", "comfortable"]
    assert [s["key"] for s in catalog["scenarios"]] == [
        "dormitory", "sharedRoom", "scholarship", "partTime", "betterCity", "euroBrl",
    ]
