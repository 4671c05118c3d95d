"""Tests for the Plotly rendering adapters."""

from __future__ import annotations

import pandas as pd

from analytics.aggregation import aggregate
from core.models import BaseFinancials, ForecastDataPoint, ScenarioProjection
from visualization import (
    build_forecast_chart,
    build_scenario_chart,
    build_spending_trends_chart,
    forecast_frame,
)


def _points():
    start = pd.Timestamp("2024-01-01")
    return [
        ForecastDataPoint(
            date=start + pd.Timedelta(days=offset),
            predicted=100.0 + offset,
            confidence_lower=90.0 + offset,
            confidence_upper=110.0 + offset,
            actual=101.0 + offset if offset < 3 else None,
        )
        for offset in range(6)
    ]


def test_forecast_chart_has_band_prediction_and_history():
    fig = build_forecast_chart(_points(), "$", today="2024-01-03")

    names = [trace.name for trace in fig.data]
    assert names[1:] == ["Confidence interval", "Forecast", "Historical"]
    assert len(fig.data[3].x) == 3
    assert len(fig.layout.shapes) == 1


def test_forecast_chart_empty_window():
    fig = build_forecast_chart([])

    assert len(fig.data) == 0
    assert fig.layout.annotations[0].text == "No forecast data in this range."


def test_forecast_frame_columns():
    frame = forecast_frame(_points())

    assert list(frame.columns) == ["Day", "Actual", "Predicted", "Lower", "Upper"]
    assert frame["Actual"].isna().sum() == 3


def test_spending_trends_chart_marks_anomalies(sample_spending_rows):
    fig = build_spending_trends_chart(aggregate(sample_spending_rows))

    assert [trace.name for trace in fig.data] == ["Total spend", "Anomaly"]
    assert len(fig.data[1].x) == 1


def test_scenario_chart_compares_current_and_projected():
    fig = build_scenario_chart(
        BaseFinancials(income=5000, expenses=3000),
        ScenarioProjection(projected_income=5500, projected_expenses=2400, net_savings=3100),
    )

    assert [trace.name for trace in fig.data] == ["Current", "Projected"]
    assert list(fig.data[1].y) == [5500, 2400, 3100]
