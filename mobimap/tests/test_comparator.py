"""
Test the side-by-side comparison table.
"""

from mobimap.logic import Weights, build_comparison
from mobimap.logic.comparator import best_and_worst

from .factories import build_option


def rows_by_label(table):
    return {row.label: row for row in table.rows}


def test_best_and_worst_on_numeric_rows():
    a = build_option("a", monthly_rent=600, stem_reputation=9)
    b = build_option("b", monthly_rent=900, stem_reputation=9)
    c = build_option("c", monthly_rent=1200, stem_reputation=4)

    rows = rows_by_label(build_comparison([a, b, c]))

    assert rows["Rent/month"].best == ["a"]
    assert rows["Rent/month"].worst == ["c"]
    # ties are all best
    assert rows["STEM reputation"].best == ["a", "b"]
    assert rows["STEM reputation"].worst == ["c"]


def test_text_rows_have_no_extremes():
    a = build_option("a", city="Lisbon")
    b = build_option("b", city="Porto")
    row = rows_by_label(build_comparison([a, b]))["City"]
    assert row.values == {"a": "Lisbon", "b": "Porto"}
    assert row.best == [] and row.worst == []


def test_single_value_is_never_worst():
    assert best_and_worst({"a": 3.0}, True) == (["a"], [])
    assert best_and_worst({"a": "x"}, True) == ([], [])
    assert best_and_worst({"a": 1, "b": 2}, None) == ([], [])


def test_category_filter_and_option_cap():
    options = [build_option(f"u{i}") for i in range(7)]

    table = build_comparison(options, category="Costs")

    assert table.option_ids == ["u0", "u1", "u2", "u3", "u4"]
    assert {row.category for row in table.rows} == {"Costs"}
    assert table.categories == ["General", "Costs", "Academic", "Work", "Adaptation", "Personal"]
    assert len(build_comparison(options, category="all").rows) == len(build_comparison(options).rows)


def test_breakdowns_attached_when_weights_given():
    a = build_option("a", monthly_rent=500)
    b = build_option("b", monthly_rent=1000)

    assert build_comparison([a, b]).breakdowns == {}

    table = build_comparison([a, b], weights=Weights())
    assert table.breakdowns["a"].housing_score == 5.0
    assert table.breakdowns["b"].housing_score == 0.0


def test_rows_carry_relative_scores():
    a = build_option("a", monthly_rent=600, stem_reputation=9)
    b = build_option("b", monthly_rent=900, stem_reputation=9)
    c = build_option("c", monthly_rent=1200, stem_reputation=4, city="Porto")

    rows = rows_by_label(build_comparison([a, b, c]))

    # lower rent scores higher; the cohort minimum is floored at 0
    assert rows["Rent/month"].scores == {"a": 5.0, "b": 2.5, "c": 0.0}
    # higher rating scores higher
    assert rows["STEM reputation"].scores == {"a": 10.0, "b": 10.0, "c": 4.4}
    assert rows["City"].scores == {}
