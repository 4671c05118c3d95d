"""Plotly chart builders for ForecastLens.

The builders only read the typed engine outputs; no engine module imports
this package.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

import pandas as pd
import plotly.graph_objects as go

from analytics.aggregation import aggregated_frame
from core.models import AggregatedDay, BaseFinancials, ForecastDataPoint, ScenarioProjection

from .theme import theme_tokens

TOKENS = theme_tokens()

__all__ = [
    "forecast_frame",
    "build_forecast_chart",
    "build_spending_trends_chart",
    "build_scenario_chart",
]


def _empty_plotly_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        annotations=[
            dict(
                text=message,
                x=0.5,
                y=0.5,
                xref="paper",
                yref="paper",
                showarrow=False,
                font=dict(color=TOKENS.neutral_grey, size=14, family=TOKENS.label_font),
            )
        ],
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=0, r=0, t=20, b=0),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def _base_layout(fig: go.Figure, yaxis_title: str) -> go.Figure:
    fig.update_layout(
        title="",
        xaxis_title="Date",
        yaxis_title=yaxis_title,
        margin=dict(l=0, r=0, t=20, b=0),
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1.0),
        xaxis=dict(showgrid=False, tickformat=TOKENS.time_format),
        yaxis=dict(showgrid=True, gridcolor=TOKENS.neutral_background, zeroline=False),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def forecast_frame(points: Sequence[ForecastDataPoint]) -> pd.DataFrame:
    """Tabulate forecast points with columns ``Day, Actual, Predicted, Lower, Upper``."""

    return pd.DataFrame(
        [
            {
                "Day": point.date,
                "Actual": point.actual,
                "Predicted": point.predicted,
                "Lower": point.confidence_lower,
                "Upper": point.confidence_upper,
            }
            for point in points
        ],
        columns=["Day", "Actual", "Predicted", "Lower", "Upper"],
    )


def build_forecast_chart(
    points: Sequence[ForecastDataPoint],
    currency_symbol: str | None = "$",
    today: Optional[Any] = None,
) -> go.Figure:
    """Render the visible forecast window with its confidence band."""

    if not points:
        return _empty_plotly_figure("No forecast data in this range.")

    df = forecast_frame(points)
    currency_prefix = currency_symbol or ""
    hover_template = f"%{{x|{TOKENS.time_format}}}<br>{currency_prefix}%{{y:,.2f}}<extra></extra>"

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=df["Day"],
            y=df["Upper"],
            mode="lines",
            line=dict(width=0),
            hoverinfo="skip",
            showlegend=False,
        )
    )
    fig.add_trace(
        go.Scatter(
            x=df["Day"],
            y=df["Lower"],
            mode="lines",
            name="Confidence interval",
            line=dict(width=0),
            fill="tonexty",
            fillcolor=TOKENS.brand_blue_soft,
            hoverinfo="skip",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=df["Day"],
            y=df["Predicted"],
            mode="lines",
            name="Forecast",
            line=dict(color=TOKENS.accent_purple, width=2, dash="dash"),
            hovertemplate=hover_template,
        )
    )

    actual = df.dropna(subset=["Actual"])
    if not actual.empty:
        fig.add_trace(
            go.Scatter(
                x=actual["Day"],
                y=actual["Actual"],
                mode="lines+markers",
                name="Historical",
                line=dict(color=TOKENS.brand_blue, width=3, shape="spline", smoothing=0.45),
                marker=dict(size=6, color=TOKENS.brand_blue, line=dict(color=TOKENS.neutral_white, width=1.2)),
                hovertemplate=hover_template,
            )
        )

    if today is not None:
        marker_day = pd.Timestamp(today).normalize()
        if df["Day"].min() <= marker_day <= df["Day"].max():
            fig.add_vline(x=marker_day, line=dict(color=TOKENS.neutral_grey, width=1, dash="dot"))

    return _base_layout(fig, "Amount")


def build_spending_trends_chart(
    days: Sequence[AggregatedDay],
    currency_symbol: str | None = "$",
) -> go.Figure:
    """Daily totals with anomalous days highlighted."""

    df = aggregated_frame(days)
    if df.empty:
        return _empty_plotly_figure("No spending recorded for this period.")

    currency_prefix = currency_symbol or ""
    hover_template = f"%{{x|{TOKENS.time_format}}}<br>{currency_prefix}%{{y:,.2f}}<extra></extra>"

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=df["Day"],
            y=df["Total"],
            mode="lines+markers",
            name="Total spend",
            line=dict(color=TOKENS.brand_blue, width=3, shape="spline", smoothing=0.45),
            marker=dict(size=7, color=TOKENS.brand_blue, line=dict(color=TOKENS.neutral_white, width=1.5)),
            fill="tozeroy",
            fillcolor=TOKENS.brand_blue_soft,
            hovertemplate=hover_template,
        )
    )

    anomalies = df[df["IsAnomaly"]]
    if not anomalies.empty:
        fig.add_trace(
            go.Scatter(
                x=anomalies["Day"],
                y=anomalies["Total"],
                mode="markers",
                name="Anomaly",
                marker=dict(size=11, color=TOKENS.accent_orange, line=dict(color=TOKENS.neutral_white, width=2)),
                customdata=anomalies[["AnomalyReason"]],
                hovertemplate=(
                    f"%{{x|{TOKENS.time_format}}}<br>{currency_prefix}%{{y:,.2f}}"
                    "<br>%{customdata[0]}<extra></extra>"
                ),
            )
        )

    return _base_layout(fig, "Spend")


def build_scenario_chart(
    base: BaseFinancials,
    projection: ScenarioProjection,
    currency_symbol: str | None = "$",
) -> go.Figure:
    """Grouped bars comparing base figures with the scenario projection."""

    currency_prefix = currency_symbol or ""
    labels = ["Income", "Expenses", "Savings"]
    current = [base.income, base.expenses, max(0.0, base.income - base.expenses)]
    projected = [projection.projected_income, projection.projected_expenses, projection.net_savings]

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=labels,
            y=current,
            name="Current",
            marker_color=TOKENS.neutral_grey,
            hovertemplate=f"%{{x}}<br>{currency_prefix}%{{y:,.0f}}<extra></extra>",
        )
    )
    fig.add_trace(
        go.Bar(
            x=labels,
            y=projected,
            name="Projected",
            marker_color=TOKENS.brand_blue,
            hovertemplate=f"%{{x}}<br>{currency_prefix}%{{y:,.0f}}<extra></extra>",
        )
    )
    fig.update_layout(
        barmode="group",
        margin=dict(l=0, r=0, t=20, b=0),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1.0),
        yaxis=dict(showgrid=True, gridcolor=TOKENS.neutral_background, zeroline=False),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig
