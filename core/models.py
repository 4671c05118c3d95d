"""Shared data model definitions for the ForecastLens engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping, TypedDict

import pandas as pd

from core.errors import UndefinedTrend

Trend = Literal["increasing", "decreasing"]
ContributionFrequency = Literal["weekly", "monthly", "quarterly"]
PanDirection = Literal["back", "forward"]


@dataclass(frozen=True)
class ForecastDataPoint:
    date: pd.Timestamp
    predicted: float
    confidence_lower: float
    confidence_upper: float
    actual: float | None = None


@dataclass(frozen=True)
class SpendingRecord:
    date: pd.Timestamp
    category: str
    amount: float
    is_anomaly: bool = False
    anomaly_reason: str | None = None


@dataclass(frozen=True)
class AggregatedDay:
    """All spend observed on one date, split by category."""

    date: pd.Timestamp
    total: float
    per_category: Mapping[str, float]
    is_anomaly: bool = False
    anomaly_reason: str | None = None


@dataclass(frozen=True)
class WindowState:
    zoom_level: float = 1.0
    pan_offset: int = 0

    def __post_init__(self) -> None:
        if self.zoom_level < 1:
            raise ValueError(f"zoom_level must be >= 1, got {self.zoom_level}")
        if self.pan_offset < 0:
            raise ValueError(f"pan_offset must be >= 0, got {self.pan_offset}")


@dataclass(frozen=True)
class VisibleRange:
    start: int
    end: int

    @property
    def count(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class ForecastScenario:
    id: str
    name: str
    income_adjustment_pct: float = 0.0
    expense_adjustment_pct: float = 0.0
    description: str | None = None
    is_default: bool = False


@dataclass(frozen=True)
class BaseFinancials:
    income: float
    expenses: float


@dataclass(frozen=True)
class ScenarioProjection:
    projected_income: float
    projected_expenses: float
    net_savings: float
    deficit: float = 0.0


@dataclass(frozen=True)
class SavingsGoal:
    id: str
    name: str
    target_amount: float
    target_date: pd.Timestamp
    current_amount: float = 0.0
    monthly_contribution: float = 0.0

    @property
    def progress(self) -> float:
        """Percent of the target saved so far, unclamped."""

        if self.target_amount <= 0:
            return 0.0
        return self.current_amount / self.target_amount * 100

    @property
    def display_progress(self) -> float:
        return min(self.progress, 100.0)


@dataclass(frozen=True)
class ContributionSchedule:
    days_remaining: int
    weekly_amount: int
    monthly_amount: int
    quarterly_amount: int

    def amount_for(self, frequency: ContributionFrequency) -> int:
        amounts = {
            "weekly": self.weekly_amount,
            "monthly": self.monthly_amount,
            "quarterly": self.quarterly_amount,
        }
        try:
            return amounts[frequency]
        except KeyError:
            raise ValueError(f"Unknown contribution frequency: {frequency!r}") from None


@dataclass(frozen=True)
class GoalProgress:
    progress_pct: float
    display_progress_pct: float
    days_remaining: int
    is_on_track: bool
    weekly_contribution_needed: float
    monthly_contribution_needed: float


@dataclass(frozen=True)
class GoalPortfolioSummary:
    total_target: float
    total_current: float
    overall_progress: float
    average_progress: float
    total_goals: int


@dataclass(frozen=True)
class Insight:
    """Trend and summary statistics over a grouped series.

    ``trend`` is ``None`` when fewer than two periods are available; the
    reason for an unmeasurable change is reported in ``undefined_reason``.
    """

    trend: Trend | None
    change_percent: float
    anomaly_count: int
    total_amount: float
    average_daily: float
    first_mean: float = 0.0
    second_mean: float = 0.0
    undefined_reason: UndefinedTrend | None = None

    @property
    def has_trend(self) -> bool:
        return self.undefined_reason is None


@dataclass(frozen=True)
class IncomeSource:
    name: str
    amount: float
    percentage: float


@dataclass(frozen=True)
class IncomeInsight:
    primary_source: IncomeSource | None
    diversification_score: float
    total_sources: int


@dataclass(frozen=True)
class KeyEvent:
    key: str
    target_is_text_input: bool = False


class ForecastView(TypedDict):
    window: WindowState
    visible_range: VisibleRange
    visible_points: list[ForecastDataPoint]
    days: list[AggregatedDay]
    insight: Insight
    insight_messages: list[str]
    projection: ScenarioProjection | None


__all__ = [
    "Trend",
    "ContributionFrequency",
    "PanDirection",
    "ForecastDataPoint",
    "SpendingRecord",
    "AggregatedDay",
    "WindowState",
    "VisibleRange",
    "ForecastScenario",
    "BaseFinancials",
    "ScenarioProjection",
    "SavingsGoal",
    "ContributionSchedule",
    "GoalProgress",
    "GoalPortfolioSummary",
    "Insight",
    "IncomeSource",
    "IncomeInsight",
    "KeyEvent",
    "ForecastView",
]
