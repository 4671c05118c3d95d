"""Analytics helpers shared across ForecastLens services."""

from analytics.aggregation import aggregate, aggregated_frame, resample_days
from analytics.goals import (
    compute_contribution_schedule,
    days_until,
    goal_progress,
    schedule_for_goal,
    summarize_goals,
)
from analytics.insights import diversification_score, forecast_variance_pct, income_insights, summarize
from analytics.scenarios import (
    can_delete,
    duplicate_scenario,
    nudge_scenario,
    project,
    update_scenario,
    validate_scenario,
)
from analytics.windowing import (
    can_pan,
    can_zoom_in,
    can_zoom_out,
    compute_visible_range,
    pan,
    pan_step,
    reset,
    visible_count,
    visible_slice,
    zoom_in,
    zoom_out,
)

__all__ = [
    "aggregate",
    "aggregated_frame",
    "resample_days",
    "compute_contribution_schedule",
    "days_until",
    "goal_progress",
    "schedule_for_goal",
    "summarize_goals",
    "diversification_score",
    "forecast_variance_pct",
    "income_insights",
    "summarize",
    "can_delete",
    "duplicate_scenario",
    "nudge_scenario",
    "project",
    "update_scenario",
    "validate_scenario",
    "can_pan",
    "can_zoom_in",
    "can_zoom_out",
    "compute_visible_range",
    "pan",
    "pan_step",
    "reset",
    "visible_count",
    "visible_slice",
    "zoom_in",
    "zoom_out",
]
