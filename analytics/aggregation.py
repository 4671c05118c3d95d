"""Grouping of spending records into per-day totals."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Iterable, Literal, Mapping

import pandas as pd

from core.data_loader import parse_spending_records
from core.models import AggregatedDay, SpendingRecord

__all__ = [
    "Granularity",
    "aggregate",
    "aggregated_frame",
    "resample_days",
]

logger = logging.getLogger(__name__)

Granularity = Literal["daily", "weekly", "monthly"]

# weeks run Monday to Sunday
_PERIOD_FREQ: dict[str, str] = {
    "weekly": "W-SUN",
    "monthly": "M",
}


class _DayBucket:
    __slots__ = ("date", "per_category", "is_anomaly", "anomaly_reason")

    def __init__(self, date: pd.Timestamp) -> None:
        self.date = date
        self.per_category: dict[str, float] = {}
        self.is_anomaly = False
        self.anomaly_reason: str | None = None

    def add(self, category: str, amount: float) -> None:
        self.per_category[category] = self.per_category.get(category, 0.0) + amount

    def flag(self, reason: str | None) -> None:
        self.is_anomaly = True
        if self.anomaly_reason is None and reason:
            self.anomaly_reason = reason

    def freeze(self) -> AggregatedDay:
        # total is derived from the category split so the two never drift
        return AggregatedDay(
            date=self.date,
            total=float(sum(self.per_category.values())),
            per_category=MappingProxyType(dict(self.per_category)),
            is_anomaly=self.is_anomaly,
            anomaly_reason=self.anomaly_reason,
        )


def aggregate(records: Iterable[SpendingRecord | Mapping[str, Any]]) -> list[AggregatedDay]:
    """Group records by date and accumulate per-category totals.

    Returns one ``AggregatedDay`` per distinct date, sorted ascending. A day is
    anomalous when any of its records is, and keeps the first non-empty
    anomaly reason it encounters.
    """

    parsed = parse_spending_records(records)
    buckets: dict[pd.Timestamp, _DayBucket] = {}

    for record in parsed:
        bucket = buckets.get(record.date)
        if bucket is None:
            bucket = buckets[record.date] = _DayBucket(record.date)
        bucket.add(record.category, record.amount)
        if record.is_anomaly:
            bucket.flag(record.anomaly_reason)

    days = [buckets[key].freeze() for key in sorted(buckets)]
    logger.debug("Aggregated %d records into %d days", len(parsed), len(days))
    return days


def aggregated_frame(days: Iterable[AggregatedDay]) -> pd.DataFrame:
    """Flatten aggregated days into a dataframe for the chart adapters."""

    rows: list[dict[str, object]] = []
    for day in days:
        row: dict[str, object] = {
            "Day": day.date,
            "Total": float(day.total),
            "IsAnomaly": bool(day.is_anomaly),
            "AnomalyReason": day.anomaly_reason or "",
        }
        for category, amount in day.per_category.items():
            row[category] = float(amount)
        rows.append(row)

    if not rows:
        return pd.DataFrame(columns=["Day", "Total", "IsAnomaly", "AnomalyReason"])

    df = pd.DataFrame(rows)
    base_columns = ["Day", "Total", "IsAnomaly", "AnomalyReason"]
    category_columns = sorted(col for col in df.columns if col not in base_columns)
    df[category_columns] = df[category_columns].fillna(0.0)
    return df[base_columns + category_columns].sort_values("Day").reset_index(drop=True)


def resample_days(days: Iterable[AggregatedDay], granularity: Granularity) -> list[AggregatedDay]:
    """Re-bucket a daily series into weekly or monthly periods.

    Period buckets are labelled with the period start. Anomaly flags are
    OR-ed and the earliest reason in the period wins.
    """

    days = list(days)
    if granularity == "daily" or not days:
        return days
    if granularity not in _PERIOD_FREQ:
        raise ValueError(f"Unknown granularity: {granularity!r}")

    frame = pd.DataFrame(
        {
            "date": pd.to_datetime([day.date for day in days]),
            "position": range(len(days)),
        }
    )
    frame["period"] = frame["date"].dt.to_period(_PERIOD_FREQ[granularity]).dt.start_time

    resampled: list[AggregatedDay] = []
    for period, group in frame.groupby("period", sort=True):
        bucket = _DayBucket(pd.Timestamp(period))
        for position in group.sort_values("date")["position"]:
            day = days[int(position)]
            for category, amount in day.per_category.items():
                bucket.add(category, amount)
            if day.is_anomaly:
                bucket.flag(day.anomaly_reason)
        resampled.append(bucket.freeze())
    return resampled
