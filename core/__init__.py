"""Core domain package for the ForecastLens engine.

Only the data model and error types are re-exported here; the service and
interaction modules depend on :mod:`analytics` and are imported directly.
"""

from .errors import ForecastEngineError, InvalidGoalParameters, InvalidRecord, InvalidScenario, UndefinedTrend
from .models import (
    AggregatedDay,
    BaseFinancials,
    ForecastDataPoint,
    ForecastScenario,
    ForecastView,
    Insight,
    SavingsGoal,
    ScenarioProjection,
    SpendingRecord,
    VisibleRange,
    WindowState,
)

__all__ = [
    "AggregatedDay",
    "BaseFinancials",
    "ForecastDataPoint",
    "ForecastScenario",
    "ForecastView",
    "Insight",
    "SavingsGoal",
    "ScenarioProjection",
    "SpendingRecord",
    "VisibleRange",
    "WindowState",
    "ForecastEngineError",
    "InvalidGoalParameters",
    "InvalidRecord",
    "InvalidScenario",
    "UndefinedTrend",
]
