"""Tests for scenario projections and scenario value updates."""

from __future__ import annotations

import pytest

from analytics.scenarios import (
    can_delete,
    duplicate_scenario,
    nudge_scenario,
    project,
    update_scenario,
    validate_scenario,
)
from core.errors import InvalidScenario
from core.models import BaseFinancials, ForecastScenario


@pytest.fixture()
def scenario() -> ForecastScenario:
    return ForecastScenario(
        id="sc-1",
        name="Raise and budget",
        income_adjustment_pct=10,
        expense_adjustment_pct=-20,
    )


def test_project_applies_percentage_adjustments(scenario):
    projection = project({"income": 5000, "expenses": 3000}, scenario)

    assert projection.projected_income == pytest.approx(5500.0)
    assert projection.projected_expenses == pytest.approx(2400.0)
    assert projection.net_savings == pytest.approx(3100.0)
    assert projection.deficit == 0.0


def test_project_floors_savings_and_reports_deficit():
    scenario = ForecastScenario(
        id="sc-2", name="Pay cut", income_adjustment_pct=-50, expense_adjustment_pct=20
    )

    projection = project(BaseFinancials(income=5000, expenses=3000), scenario)

    assert projection.projected_income == pytest.approx(2500.0)
    assert projection.projected_expenses == pytest.approx(3600.0)
    assert projection.net_savings == 0.0
    assert projection.deficit == pytest.approx(1100.0)


def test_projected_income_is_non_decreasing_in_adjustment():
    base = BaseFinancials(income=4200, expenses=1000)
    incomes = [
        project(
            base,
            ForecastScenario(id="s", name="s", income_adjustment_pct=pct),
        ).projected_income
        for pct in range(-50, 101, 5)
    ]

    assert incomes == sorted(incomes)


def test_zero_adjustments_leave_base_unchanged():
    projection = project(
        BaseFinancials(income=3200, expenses=2100), ForecastScenario(id="s", name="Baseline")
    )

    assert projection.projected_income == 3200
    assert projection.projected_expenses == 2100
    assert projection.net_savings == 1100


@pytest.mark.parametrize(
    "changes",
    [
        {"income_adjustment_pct": 101},
        {"expense_adjustment_pct": -50.5},
        {"name": "  "},
    ],
)
def test_validate_scenario_rejects_out_of_range(scenario, changes):
    with pytest.raises(InvalidScenario):
        update_scenario(scenario, **changes)


def test_validate_scenario_accepts_bounds(scenario):
    bounded = ForecastScenario(
        id="b", name="Bounds", income_adjustment_pct=100, expense_adjustment_pct=-50
    )

    assert validate_scenario(bounded) is bounded


def test_update_scenario_returns_new_value(scenario):
    updated = update_scenario(scenario, expense_adjustment_pct=5, description="Tighter")

    assert updated is not scenario
    assert updated.expense_adjustment_pct == 5
    assert updated.description == "Tighter"
    assert updated.income_adjustment_pct == scenario.income_adjustment_pct
    assert scenario.expense_adjustment_pct == -20


def test_update_scenario_rejects_unknown_fields_and_id_changes(scenario):
    with pytest.raises(InvalidScenario, match="Unknown"):
        update_scenario(scenario, savings_goal=100)
    with pytest.raises(InvalidScenario, match="id"):
        update_scenario(scenario, id="other")


def test_duplicate_scenario_is_never_default():
    default = ForecastScenario(id="base", name="Baseline", is_default=True, income_adjustment_pct=5)

    copy = duplicate_scenario(default, new_id="copy-1")

    assert copy.id == "copy-1"
    assert copy.name == "Baseline (Copy)"
    assert copy.is_default is False
    assert copy.income_adjustment_pct == 5
    assert duplicate_scenario(default).id != default.id


def test_default_scenarios_cannot_be_deleted(scenario):
    assert can_delete(scenario)
    assert not can_delete(ForecastScenario(id="d", name="Default", is_default=True))


def test_nudge_scenario_clamps_to_range(scenario):
    raised = nudge_scenario(scenario, "income_adjustment_pct")
    assert raised.income_adjustment_pct == 20

    top = ForecastScenario(id="t", name="Top", income_adjustment_pct=95)
    assert nudge_scenario(top, "income_adjustment_pct").income_adjustment_pct == 100

    bottom = ForecastScenario(id="b", name="Bottom", expense_adjustment_pct=-45)
    assert nudge_scenario(bottom, "expense_adjustment_pct", -10).expense_adjustment_pct == -50


def test_nudge_scenario_rejects_other_fields(scenario):
    with pytest.raises(InvalidScenario):
        nudge_scenario(scenario, "name")  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "changes",
    [
        {"income_adjustment_pct": -300},
        {"expense_adjustment_pct": 150},
        {"income_adjustment_pct": float("nan")},
    ],
)
def test_project_rejects_out_of_range_adjustments(changes):
    scenario = ForecastScenario(id="x", name="Extreme", **changes)

    with pytest.raises(InvalidScenario):
        project(BaseFinancials(income=5000, expenses=3000), scenario)
