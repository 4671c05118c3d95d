"""Visualization adapters for ForecastLens dashboards."""

from .charts import (
    build_forecast_chart,
    build_scenario_chart,
    build_spending_trends_chart,
    forecast_frame,
)
from .theme import theme_tokens

__all__ = [
    "build_forecast_chart",
    "build_scenario_chart",
    "build_spending_trends_chart",
    "forecast_frame",
    "theme_tokens",
]
