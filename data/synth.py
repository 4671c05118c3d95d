"""Synthetic spending and forecast data for the ForecastLens demo.

Produces raw record rows in the same shape the analytics API delivers
(ISO-8601 date strings, snake_case keys) so the demo app and
tests exercise the real parsing path.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import List, Sequence, Tuple, TypeVar

import numpy as np
import pandas as pd

T = TypeVar("T")


SPENDING_FIELDS: Tuple[str, ...] = (
    "date",
    "category",
    "amount",
    "is_anomaly",
    "anomaly_reason",
)

FORECAST_FIELDS: Tuple[str, ...] = (
    "date",
    "actual",
    "predicted",
    "confidence_lower",
    "confidence_upper",
)


@dataclass(frozen=True)
class CategoryProfile:
    """Daily spending behaviour for one category."""

    name: str
    mean: float
    std: float
    probability: float


CATEGORY_PROFILES: Tuple[CategoryProfile, ...] = (
    CategoryProfile("Food", 38.0, 12.0, 0.9),
    CategoryProfile("Transport", 14.0, 6.0, 0.7),
    CategoryProfile("Entertainment", 45.0, 25.0, 0.25),
    CategoryProfile("Shopping", 70.0, 35.0, 0.2),
    CategoryProfile("Utilities", 120.0, 15.0, 0.05),
)

ANOMALY_REASONS: Tuple[str, ...] = (
    "Spending 3x above category average",
    "Unusual merchant for this category",
    "Large one-off purchase",
)


def generate_spending_rows(
    start: date,
    days: int,
    *,
    seed: int | None = 7,
    anomaly_probability: float = 0.04,
) -> List[dict]:
    """Generate per-category spending rows for ``days`` consecutive days."""

    rng = np.random.default_rng(seed)
    rows: List[dict] = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        weekend = day.weekday() >= 5
        for profile in CATEGORY_PROFILES:
            if rng.random() > profile.probability:
                continue
            multiplier = 1.3 if weekend and profile.name in {"Food", "Entertainment"} else 1.0
            amount = abs(rng.normal(profile.mean, profile.std)) * multiplier
            is_anomaly = bool(rng.random() < anomaly_probability)
            if is_anomaly:
                amount *= 3
            rows.append(
                {
                    "date": day.isoformat(),
                    "category": profile.name,
                    "amount": round(float(amount), 2),
                    "is_anomaly": is_anomaly,
                    "anomaly_reason": _rng_choice(ANOMALY_REASONS, rng) if is_anomaly else None,
                }
            )
    return rows


def generate_forecast_rows(
    start: date,
    history_days: int,
    horizon_days: int,
    *,
    seed: int | None = 11,
    base_level: float = 120.0,
    daily_growth: float = 0.15,
) -> List[dict]:
    """Generate a daily forecast series with actuals for the history part.

    The confidence band widens with the forecast horizon.
    """

    rng = np.random.default_rng(seed)
    rows: List[dict] = []
    for offset in range(history_days + horizon_days):
        day = start + timedelta(days=offset)
        seasonal = 15.0 * np.sin(2 * np.pi * day.weekday() / 7)
        predicted = max(base_level + daily_growth * offset + seasonal, 0.0)
        ahead = max(offset - history_days + 1, 0)
        spread = 8.0 + 1.2 * ahead
        actual = None
        if offset < history_days:
            actual = round(float(max(predicted + rng.normal(0, 10.0), 0.0)), 2)
        rows.append(
            {
                "date": day.isoformat(),
                "actual": actual,
                "predicted": round(float(predicted), 2),
                "confidence_lower": round(float(max(predicted - spread, 0.0)), 2),
                "confidence_upper": round(float(predicted + spread), 2),
            }
        )
    return rows


def write_rows_csv(rows: Sequence[dict], fields: Sequence[str], output_path: str | Path) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(list(rows), columns=list(fields)).to_csv(path, index=False)
    return path


def _rng_choice(options: Sequence[T], rng: np.random.Generator) -> T:
    if not options:
        raise ValueError("Cannot choose from an empty sequence")
    idx = int(rng.integers(0, len(options)))
    return options[idx]
