"""Tests for record parsing and the assembled forecast view."""

from __future__ import annotations

import logging
from datetime import date

import pandas as pd
import pytest

from config import Settings
from core.data_loader import (
    load_spending_records,
    parse_date,
    parse_forecast_points,
    parse_spending_records,
)
from core.errors import InvalidRecord, UndefinedTrend
from core.forecast_service import prepare_forecast_view, prepare_forecast_view_from_csv
from core.models import BaseFinancials, ForecastDataPoint, ForecastScenario, WindowState
from data.synth import (
    FORECAST_FIELDS,
    SPENDING_FIELDS,
    generate_forecast_rows,
    generate_spending_rows,
    write_rows_csv,
)


@pytest.fixture()
def forecast_rows() -> list[dict]:
    return generate_forecast_rows(date(2024, 1, 1), history_days=30, horizon_days=10)


@pytest.fixture()
def spending_rows() -> list[dict]:
    return generate_spending_rows(date(2024, 1, 1), days=30)


def test_parse_forecast_points_sorts_and_reads_camel_case():
    points = parse_forecast_points(
        [
            {
                "date": "2024-01-02",
                "predicted": 120,
                "confidenceLower": 100,
                "confidenceUpper": 140,
            },
            {
                "date": "2024-01-01",
                "actual": 95,
                "predicted": 110,
                "confidenceLower": 90,
                "confidenceUpper": 130,
            },
        ]
    )

    assert [point.date for point in points] == [pd.Timestamp("2024-01-01"), pd.Timestamp("2024-01-02")]
    assert points[0].actual == 95.0
    assert points[1].actual is None


def test_parse_forecast_points_rejects_broken_band():
    with pytest.raises(InvalidRecord, match="confidence band"):
        parse_forecast_points(
            [{"date": "2024-01-01", "predicted": 150, "confidence_lower": 90, "confidence_upper": 130}]
        )


def test_parse_forecast_points_rejects_duplicate_dates():
    row = {"date": "2024-01-01", "predicted": 100, "confidence_lower": 90, "confidence_upper": 110}

    with pytest.raises(InvalidRecord, match="duplicate"):
        parse_forecast_points([row, dict(row)])


def test_parse_spending_records_rejects_non_numeric_amount():
    with pytest.raises(InvalidRecord) as excinfo:
        parse_spending_records([{"date": "2024-01-01", "category": "Food", "amount": "ten"}])
    assert excinfo.value.index == 0


def test_parse_spending_records_defaults():
    [record] = parse_spending_records([{"date": "2024-01-01", "amount": 3, "is_anomaly": "true"}])

    assert record.category == "uncategorized"
    assert record.is_anomaly is True
    assert record.anomaly_reason is None


def test_parse_forecast_points_normalises_instance_dates():
    [point] = parse_forecast_points(
        [
            ForecastDataPoint(
                date="2024-01-01T00:00:00Z",
                predicted=100.0,
                confidence_lower=90.0,
                confidence_upper=110.0,
            )
        ]
    )

    assert point.date == pd.Timestamp("2024-01-01")
    assert point.date.tzinfo is None


def test_parse_date_accepts_dates():
    assert parse_date(date(2024, 5, 1)) == pd.Timestamp("2024-05-01")
    with pytest.raises(InvalidRecord):
        parse_date("tomorrow-ish")


def test_prepare_forecast_view_windows_and_summarises(forecast_rows, spending_rows):
    view = prepare_forecast_view(
        forecast_rows,
        spending_rows,
        window=WindowState(zoom_level=2.0, pan_offset=4),
        base=BaseFinancials(income=5000, expenses=3000),
        scenario=ForecastScenario(
            id="s", name="Raise", income_adjustment_pct=10, expense_adjustment_pct=-20
        ),
        settings=Settings(),
    )

    assert (view["visible_range"].start, view["visible_range"].end) == (4, 24)
    assert len(view["visible_points"]) == 20
    assert view["visible_points"][0].date == pd.Timestamp("2024-01-05")
    assert len(view["days"]) == len({row["date"] for row in spending_rows})
    assert view["insight"].total_amount == pytest.approx(sum(row["amount"] for row in spending_rows))
    assert view["projection"] is not None
    assert view["projection"].net_savings == pytest.approx(3100.0)
    assert any("Projected savings" in message for message in view["insight_messages"])


def test_prepare_forecast_view_weekly_without_scenario(forecast_rows, spending_rows):
    view = prepare_forecast_view(forecast_rows, spending_rows, granularity="weekly", settings=Settings())

    assert view["projection"] is None
    assert view["window"] == WindowState()
    assert view["visible_range"].count == 40
    assert len(view["days"]) == 5
    assert view["days"][0].date == pd.Timestamp("2024-01-01")


def test_prepare_forecast_view_handles_empty_inputs():
    view = prepare_forecast_view([], [], settings=Settings())

    assert view["visible_points"] == []
    assert view["insight"].undefined_reason is UndefinedTrend.INSUFFICIENT_DATA


def test_prepare_forecast_view_from_csv(tmp_path, forecast_rows, spending_rows):
    forecast_csv = write_rows_csv(forecast_rows, FORECAST_FIELDS, tmp_path / "forecast.csv")
    spending_csv = write_rows_csv(spending_rows, SPENDING_FIELDS, tmp_path / "spending.csv")

    view = prepare_forecast_view_from_csv(forecast_csv, spending_csv, settings=Settings())

    assert view["visible_range"].count == 40
    assert view["visible_points"][0].actual is not None
    assert view["visible_points"][-1].actual is None
    assert len(view["days"]) == len({row["date"] for row in spending_rows})
    anomalous = [day for day in view["days"] if day.is_anomaly]
    assert all(day.anomaly_reason for day in anomalous)


def test_load_spending_records_reports_bad_rows(tmp_path, caplog):
    csv_path = tmp_path / "bad.csv"
    csv_path.write_text("date,category,amount\n2024-01-01,Food,12\nnope,Food,3\n")

    with caplog.at_level(logging.WARNING, logger="core.data_loader"):
        with pytest.raises(InvalidRecord) as excinfo:
            load_spending_records(str(csv_path))
    assert excinfo.value.index == 1
    assert "Rejected spending CSV" in caplog.text


def test_load_spending_records_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_spending_records(str(tmp_path / "missing.csv"))
