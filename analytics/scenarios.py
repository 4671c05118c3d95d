"""What-if scenario projections over a base income and expense pair."""

from __future__ import annotations

import logging
import uuid
from dataclasses import fields, replace
from typing import Any, Final, Literal, Mapping

import numpy as np

from core.errors import InvalidScenario
from core.models import BaseFinancials, ForecastScenario, ScenarioProjection

__all__ = [
    "ADJUSTMENT_MIN",
    "ADJUSTMENT_MAX",
    "QUICK_ADJUSTMENT_STEP",
    "project",
    "validate_scenario",
    "update_scenario",
    "duplicate_scenario",
    "can_delete",
    "nudge_scenario",
]

logger = logging.getLogger(__name__)

ADJUSTMENT_MIN: Final[float] = -50.0
ADJUSTMENT_MAX: Final[float] = 100.0
QUICK_ADJUSTMENT_STEP: Final[float] = 10.0

AdjustmentField = Literal["income_adjustment_pct", "expense_adjustment_pct"]

_SCENARIO_FIELDS = frozenset(field.name for field in fields(ForecastScenario))


def _coerce_base(base: BaseFinancials | Mapping[str, float]) -> BaseFinancials:
    if isinstance(base, BaseFinancials):
        return base
    return BaseFinancials(income=float(base["income"]), expenses=float(base["expenses"]))


def project(
    base: BaseFinancials | Mapping[str, float],
    scenario: ForecastScenario,
) -> ScenarioProjection:
    """Apply a scenario's percentage adjustments to the base figures.

    Net savings never go below zero; a shortfall is reported separately in
    ``deficit`` so callers can raise an alert instead.
    """

    base = _coerce_base(base)
    _check_adjustments(scenario)
    projected_income = base.income * (1 + scenario.income_adjustment_pct / 100)
    projected_expenses = base.expenses * (1 + scenario.expense_adjustment_pct / 100)
    difference = projected_income - projected_expenses

    projection = ScenarioProjection(
        projected_income=float(projected_income),
        projected_expenses=float(projected_expenses),
        net_savings=float(max(0.0, difference)),
        deficit=float(max(0.0, -difference)),
    )
    logger.debug("Projected scenario %s: %s", scenario.id, projection)
    return projection


def _check_adjustments(scenario: ForecastScenario) -> None:
    for name in ("income_adjustment_pct", "expense_adjustment_pct"):
        value = getattr(scenario, name)
        if not ADJUSTMENT_MIN <= value <= ADJUSTMENT_MAX:
            raise InvalidScenario(
                f"{name} must be within [{ADJUSTMENT_MIN:g}, {ADJUSTMENT_MAX:g}], got {value}"
            )


def validate_scenario(scenario: ForecastScenario) -> ForecastScenario:
    if not scenario.name or not scenario.name.strip():
        raise InvalidScenario("Scenario name is required.")
    _check_adjustments(scenario)
    return scenario


def update_scenario(scenario: ForecastScenario, **changes: Any) -> ForecastScenario:
    """Return a copy of ``scenario`` with a partial update applied."""

    unknown = set(changes) - _SCENARIO_FIELDS
    if unknown:
        raise InvalidScenario(f"Unknown scenario fields: {', '.join(sorted(unknown))}")
    if "id" in changes and changes["id"] != scenario.id:
        raise InvalidScenario("Scenario id cannot be changed.")
    return validate_scenario(replace(scenario, **changes))


def duplicate_scenario(scenario: ForecastScenario, *, new_id: str | None = None) -> ForecastScenario:
    """Copy a scenario under a new id; copies are never the default."""

    return replace(
        scenario,
        id=new_id or uuid.uuid4().hex,
        name=f"{scenario.name} (Copy)",
        is_default=False,
    )


def can_delete(scenario: ForecastScenario) -> bool:
    return not scenario.is_default


def nudge_scenario(
    scenario: ForecastScenario,
    field: AdjustmentField,
    step: float = QUICK_ADJUSTMENT_STEP,
) -> ForecastScenario:
    """Shift one adjustment by ``step`` percentage points within the allowed range."""

    if field not in ("income_adjustment_pct", "expense_adjustment_pct"):
        raise InvalidScenario(f"Cannot adjust field {field!r}")
    current = getattr(scenario, field)
    value = float(np.clip(current + step, ADJUSTMENT_MIN, ADJUSTMENT_MAX))
    return replace(scenario, **{field: value})
