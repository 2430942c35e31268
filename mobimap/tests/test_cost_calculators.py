"""
Test the single-option cost totals.
"""

from mobimap.logic import monthly_total, multi_month_total, one_time_total, six_month_total


def test_monthly_total_sums_nine_items(make_option, sample_costs):
    option = make_option("lisbon", **sample_costs)
    assert monthly_total(option) == 1930


def test_scholarship_can_make_total_negative(make_option):
    option = make_option("funded", monthly_rent=300, monthly_food=200, scholarship=900)
    assert monthly_total(option) == -400


def test_one_time_and_multi_month_totals(make_option, sample_costs):
    option = make_option(
        "porto",
        scholarship=130,
        flight_cost=600,
        visa_cost=100,
        housing_deposit=1000,
        setup_cost=250,
        insurance_cost=50,
        **sample_costs,
    )
    assert one_time_total(option) == 2000
    assert multi_month_total(option, 3) == 1800 * 3 + 2000
    assert six_month_total(option) == monthly_total(option) * 6 + one_time_total(option)


def test_missing_or_malformed_numbers_count_as_zero(make_option):
    option = make_option("sparse", monthly_rent=None, monthly_food="n/a", monthly_misc=float("nan"), monthly_phone="25")
    assert option.monthly_rent == 0
    assert option.monthly_food == 0
    assert option.monthly_misc == 0
    assert monthly_total(option) == 25


def test_non_finite_numbers_count_as_zero(make_option):
    option = make_option("huge", monthly_rent="inf", monthly_food="-Infinity", monthly_misc=10 ** 400, monthly_phone=25)
    assert option.monthly_rent == 0
    assert option.monthly_food == 0
    assert option.monthly_misc == 0
    assert monthly_total(option) == 25
