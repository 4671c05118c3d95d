"""Core logic for assembling the ForecastLens chart and insight view."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from analytics.aggregation import Granularity, aggregate, resample_days
from analytics.insights import summarize
from analytics.scenarios import project
from analytics.windowing import compute_visible_range
from config import Settings, get_settings
from core.data_loader import load_forecast_points, load_spending_records, parse_forecast_points
from core.formatting import build_insight_messages
from core.models import (
    BaseFinancials,
    ForecastDataPoint,
    ForecastScenario,
    ForecastView,
    SpendingRecord,
    WindowState,
)

__all__ = ["prepare_forecast_view", "prepare_forecast_view_from_csv"]

logger = logging.getLogger(__name__)


def prepare_forecast_view(
    points: Iterable[ForecastDataPoint | Mapping[str, Any]],
    records: Iterable[SpendingRecord | Mapping[str, Any]],
    *,
    window: Optional[WindowState] = None,
    base: Optional[BaseFinancials] = None,
    scenario: Optional[ForecastScenario] = None,
    granularity: Granularity = "daily",
    settings: Optional[Settings] = None,
) -> ForecastView:
    """Run records and forecast points through the engine in one pass.

    Records are aggregated and summarised, the forecast series is windowed,
    and a scenario projection is added when both ``base`` and ``scenario``
    are supplied.
    """

    settings = settings or get_settings()
    window = window or WindowState()

    forecast = parse_forecast_points(points)
    days = resample_days(aggregate(records), granularity)

    visible_range = compute_visible_range(
        len(forecast),
        window.zoom_level,
        window.pan_offset,
        min_visible=settings.min_visible_points,
    )
    insight = summarize(days)

    projection = None
    if base is not None and scenario is not None:
        projection = project(base, scenario)

    messages = build_insight_messages(
        insight,
        projection=projection,
        currency_symbol=settings.currency_symbol,
    )
    logger.debug(
        "Prepared view: %d forecast points (%d visible), %d periods",
        len(forecast),
        visible_range.count,
        len(days),
    )

    return {
        "window": window,
        "visible_range": visible_range,
        "visible_points": forecast[visible_range.start : visible_range.end],
        "days": days,
        "insight": insight,
        "insight_messages": messages,
        "projection": projection,
    }


def prepare_forecast_view_from_csv(
    forecast_csv: str | Path,
    spending_csv: str | Path,
    **kwargs: Any,
) -> ForecastView:
    return prepare_forecast_view(
        load_forecast_points(str(forecast_csv)),
        load_spending_records(str(spending_csv)),
        **kwargs,
    )
