"""Trend, anomaly and summary statistics over grouped time series."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import numpy as np

from core.errors import UndefinedTrend
from core.models import AggregatedDay, ForecastDataPoint, IncomeInsight, IncomeSource, Insight

__all__ = [
    "summarize",
    "diversification_score",
    "income_insights",
    "forecast_variance_pct",
]


def summarize(series: Sequence[AggregatedDay]) -> Insight:
    """Compare first-half and second-half averages of an ordered series.

    Sparse input is not an error: fewer than two periods produce an insight
    with no trend, and a zero first-half average reports a 0% change with
    ``UndefinedTrend.ZERO_BASELINE`` instead of dividing by zero.
    """

    totals = np.array([float(day.total) for day in series], dtype=float)
    anomaly_count = sum(1 for day in series if day.is_anomaly)
    total_amount = float(totals.sum()) if totals.size else 0.0
    average_daily = total_amount / totals.size if totals.size else 0.0

    if totals.size < 2:
        return Insight(
            trend=None,
            change_percent=0.0,
            anomaly_count=anomaly_count,
            total_amount=total_amount,
            average_daily=average_daily,
            undefined_reason=UndefinedTrend.INSUFFICIENT_DATA,
        )

    midpoint = totals.size // 2
    first_mean = float(totals[:midpoint].mean())
    second_mean = float(totals[midpoint:].mean())
    trend = "increasing" if second_mean > first_mean else "decreasing"

    if first_mean == 0:
        change_percent = 0.0
        undefined_reason: Optional[UndefinedTrend] = UndefinedTrend.ZERO_BASELINE
    else:
        change_percent = abs((second_mean - first_mean) / first_mean) * 100
        undefined_reason = None

    return Insight(
        trend=trend,
        change_percent=float(change_percent),
        anomaly_count=anomaly_count,
        total_amount=total_amount,
        average_daily=average_daily,
        first_mean=first_mean,
        second_mean=second_mean,
        undefined_reason=undefined_reason,
    )


def diversification_score(shares: Iterable[float]) -> float:
    """Score how evenly income is spread, from percentage shares (0-100).

    A single source (or none) scores zero.
    """

    values = np.array(list(shares), dtype=float)
    if values.size <= 1:
        return 0.0
    return float((1 - (values / 100).max()) * 100)


def income_insights(sources: Sequence[IncomeSource]) -> IncomeInsight:
    primary = max(sources, key=lambda source: source.amount) if sources else None
    return IncomeInsight(
        primary_source=primary,
        diversification_score=diversification_score(source.percentage for source in sources),
        total_sources=len(sources),
    )


def forecast_variance_pct(point: ForecastDataPoint) -> Optional[float]:
    """Absolute deviation of the actual value from the prediction, in percent."""

    if point.actual is None or point.predicted == 0:
        return None
    return float(abs((point.actual - point.predicted) / point.predicted) * 100)
