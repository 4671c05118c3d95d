"""Formatting helpers for ForecastLens insight cards and labels."""

from __future__ import annotations

from typing import Any, Optional

import pandas as pd

from core.data_loader import parse_date
from core.errors import UndefinedTrend
from core.models import Insight, ScenarioProjection

__all__ = [
    "build_insight_messages",
    "format_percentage",
    "format_change",
    "time_to_goal_label",
]


def format_percentage(value: float) -> str:
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:g}%"


def format_change(insight: Insight) -> str:
    if insight.undefined_reason is UndefinedTrend.INSUFFICIENT_DATA:
        return "Not enough data for a trend"
    if insight.undefined_reason is UndefinedTrend.ZERO_BASELINE:
        return "New spending vs earlier period"
    return f"{insight.change_percent:.1f}% change"


def build_insight_messages(
    insight: Insight,
    *,
    projection: Optional[ScenarioProjection] = None,
    currency_symbol: str = "$",
) -> list[str]:
    messages: list[str] = []

    if insight.trend is not None:
        messages.append(
            f"Spending is <strong>{insight.trend}</strong> ({format_change(insight)})."
        )
    else:
        messages.append(format_change(insight) + ".")

    messages.append(
        (
            f"Total <strong>{currency_symbol}{insight.total_amount:,.0f}</strong>, "
            f"about {currency_symbol}{insight.average_daily:,.0f}/day avg."
        )
    )

    if insight.anomaly_count:
        plural = "day" if insight.anomaly_count == 1 else "days"
        messages.append(f"<strong>{insight.anomaly_count}</strong> unusual spending {plural} flagged.")

    if projection is not None:
        if projection.deficit > 0:
            messages.append(
                (
                    f"Projected expenses exceed income by "
                    f"<strong>{currency_symbol}{projection.deficit:,.0f}</strong>/month."
                )
            )
        else:
            messages.append(
                f"Projected savings: <strong>{currency_symbol}{projection.net_savings:,.0f}</strong>/month."
            )

    return messages


def time_to_goal_label(target_date: Any, today: Any | None = None) -> str:
    target = parse_date(target_date)
    reference = pd.Timestamp.now() if today is None else parse_date(today)
    days_remaining = (target - reference).days

    if days_remaining <= 0:
        return "Overdue"
    if days_remaining < 30:
        return f"{days_remaining} days"
    if days_remaining < 365:
        return f"{days_remaining // 30} months"
    return f"{days_remaining // 365} years"
