"""
Test the dashboard summary.
"""

from datetime import date, timedelta

from mobimap.logic import Badge, ComparisonEngine, Weights, checklist_progress, default_checklist, summarize

from .factories import build_option

TODAY = date(2026, 5, 10)


def test_empty_collection():
    summary = summarize([], Weights(), today=TODAY)
    assert summary.total_options == 0
    assert summary.top_ranked == []


def test_headline_numbers():
    options = [
        build_option("a", monthly_rent=1000, status="candidate", is_favorite=True,
                     application_deadline=TODAY + timedelta(days=10)),
        build_option("b", monthly_rent=1500, status="approved",
                     visa_deadline=TODAY + timedelta(days=45)),
        build_option("c", monthly_rent=701, status="discarded",
                     application_deadline=TODAY + timedelta(days=3)),
        build_option("d", monthly_rent=2000),
    ]

    summary = summarize(options, Weights(), today=TODAY)

    assert summary.total_options == 4
    assert summary.active_options == 3
    # average over every option, discarded included: 5201 / 4 = 1300.25
    assert summary.average_monthly_total == 1300
    assert summary.average_six_month_total == 7800
    assert summary.favorites == 1
    assert summary.candidates == 2
    assert summary.urgent_deadlines == 1
    assert [d.option.id for d in summary.upcoming_deadlines] == ["a", "b"]
    assert [r.option.id for r in summary.top_ranked][0] == "a"
    assert len(summary.top_ranked) == 3
    assert Badge.CHEAPEST in summary.badges["a"]
    assert "c" not in summary.badges


def test_checklist_progress():
    checklist = default_checklist()
    checklist[0] = checklist[0].model_copy(update={"completed": True})
    checklist[1] = checklist[1].model_copy(update={"completed": True})
    checklist[2] = checklist[2].model_copy(update={"completed": True})
    option = build_option("a", checklist=checklist)

    progress = checklist_progress(option)

    assert (progress.done, progress.total, progress.percent) == (3, 12, 25)
    assert checklist_progress(build_option("empty")).percent == 0


def test_engine_summary_delegates():
    options = [build_option("a", monthly_rent=100), build_option("b", monthly_rent=300)]
    engine = ComparisonEngine()
    assert engine.summary(options, Weights(), TODAY) == summarize(options, Weights(), TODAY)
