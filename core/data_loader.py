"""Parsing and loading of the record contracts consumed by the engine."""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Final, Iterable, Mapping

import pandas as pd

from core.errors import InvalidRecord
from core.models import ForecastDataPoint, SpendingRecord

__all__ = [
    "parse_date",
    "parse_spending_records",
    "parse_forecast_points",
    "records_from_frame",
    "load_spending_records",
    "load_forecast_points",
]

logger = logging.getLogger(__name__)

_CACHE_SIZE: Final[int] = 8


def parse_date(value: Any, *, index: int | None = None) -> pd.Timestamp:
    """Parse an ISO-8601 string, ``date`` or ``Timestamp`` into a ``Timestamp``."""

    try:
        parsed = pd.Timestamp(value)
    except (ValueError, TypeError) as exc:
        raise InvalidRecord(f"unparseable date {value!r}", index=index) from exc
    if pd.isna(parsed):
        raise InvalidRecord(f"missing date {value!r}", index=index)
    if parsed.tzinfo is not None:
        # offsets are folded into naive UTC so every key compares with date-only input
        parsed = parsed.tz_convert(None)
    return parsed


def _pick(row: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in row:
            value = row[key]
            if _is_missing(value):
                return default
            return value
    return default


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def _as_float(value: Any, field: str, index: int) -> float:
    if _is_missing(value):
        raise InvalidRecord(f"missing {field}", index=index)
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidRecord(f"{field} is not numeric: {value!r}", index=index) from exc
    if math.isnan(number) or math.isinf(number):
        raise InvalidRecord(f"{field} is not finite: {value!r}", index=index)
    return number


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "y"}
    return bool(value)


def _spending_record(row: Mapping[str, Any], index: int) -> SpendingRecord:
    amount = _as_float(_pick(row, "amount"), "amount", index)
    if amount < 0:
        raise InvalidRecord(f"negative amount {amount}", index=index)

    category = _pick(row, "category", default="uncategorized")
    reason = _pick(row, "anomaly_reason", "anomalyReason")
    return SpendingRecord(
        date=parse_date(_pick(row, "date"), index=index),
        category=str(category),
        amount=amount,
        is_anomaly=_as_bool(_pick(row, "is_anomaly", "isAnomaly", default=False)),
        anomaly_reason=str(reason) if reason is not None else None,
    )


def _checked_record(record: SpendingRecord, index: int) -> SpendingRecord:
    amount = _as_float(record.amount, "amount", index)
    if amount < 0:
        raise InvalidRecord(f"negative amount {amount}", index=index)
    return replace(record, date=parse_date(record.date, index=index), amount=amount)


def parse_spending_records(
    rows: Iterable[Mapping[str, Any] | SpendingRecord],
) -> list[SpendingRecord]:
    """Convert raw rows (snake_case or camelCase keys) into ``SpendingRecord`` values.

    Rows that already are ``SpendingRecord`` instances are validated and kept.
    """

    records: list[SpendingRecord] = []
    for index, row in enumerate(rows):
        if isinstance(row, SpendingRecord):
            records.append(_checked_record(row, index))
            continue
        records.append(_spending_record(row, index))
    return records


def _forecast_point(row: Mapping[str, Any] | ForecastDataPoint, index: int) -> ForecastDataPoint:
    if isinstance(row, ForecastDataPoint):
        point = replace(row, date=parse_date(row.date, index=index))
    else:
        point = _forecast_point_from_mapping(row, index)
    if not point.confidence_lower <= point.predicted <= point.confidence_upper:
        raise InvalidRecord(
            (
                f"prediction {point.predicted} outside confidence band "
                f"[{point.confidence_lower}, {point.confidence_upper}]"
            ),
            index=index,
        )
    return point


def _forecast_point_from_mapping(row: Mapping[str, Any], index: int) -> ForecastDataPoint:
    actual = _pick(row, "actual")
    return ForecastDataPoint(
        date=parse_date(_pick(row, "date"), index=index),
        predicted=_as_float(_pick(row, "predicted"), "predicted", index),
        confidence_lower=_as_float(
            _pick(row, "confidence_lower", "confidenceLower"), "confidence_lower", index
        ),
        confidence_upper=_as_float(
            _pick(row, "confidence_upper", "confidenceUpper"), "confidence_upper", index
        ),
        actual=_as_float(actual, "actual", index) if actual is not None else None,
    )


def parse_forecast_points(
    rows: Iterable[Mapping[str, Any] | ForecastDataPoint],
) -> list[ForecastDataPoint]:
    """Return forecast points ordered by date, rejecting duplicate dates."""

    points = [_forecast_point(row, index) for index, row in enumerate(rows)]
    points.sort(key=lambda point: point.date)
    for previous, current in zip(points, points[1:]):
        if previous.date == current.date:
            raise InvalidRecord(f"duplicate forecast date {current.date.date().isoformat()}")
    return points


def records_from_frame(df: pd.DataFrame) -> list[SpendingRecord]:
    """Parse spending records from a dataframe with one row per record."""

    if df.empty:
        return []
    return parse_spending_records(df.to_dict(orient="records"))


def _read_csv(csv_path: str | Path) -> pd.DataFrame:
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found: {path}")
    # dates stay as text so unparseable values surface as InvalidRecord
    return pd.read_csv(path, dtype={"date": str})


@lru_cache(maxsize=_CACHE_SIZE)
def load_spending_records(csv_path: str | Path) -> tuple[SpendingRecord, ...]:
    """Return parsed spending records for the given CSV path.

    Results are cached to avoid redundant disk reads when the dashboard
    recomputes views for the same source file during a session.
    """

    try:
        records = tuple(records_from_frame(_read_csv(csv_path)))
    except InvalidRecord as exc:
        logger.warning("Rejected spending CSV %s: %s", csv_path, exc)
        raise
    logger.debug("Loaded %d spending records from %s", len(records), csv_path)
    return records


@lru_cache(maxsize=_CACHE_SIZE)
def load_forecast_points(csv_path: str | Path) -> tuple[ForecastDataPoint, ...]:
    df = _read_csv(csv_path)
    try:
        points = tuple(parse_forecast_points(df.to_dict(orient="records")))
    except InvalidRecord as exc:
        logger.warning("Rejected forecast CSV %s: %s", csv_path, exc)
        raise
    logger.debug("Loaded %d forecast points from %s", len(points), csv_path)
    return points
