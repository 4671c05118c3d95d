"""Error taxonomy for the ForecastLens engine."""

from __future__ import annotations

from enum import Enum

__all__ = [
    "ForecastEngineError",
    "InvalidRecord",
    "InvalidGoalParameters",
    "InvalidScenario",
    "UndefinedTrend",
]


class ForecastEngineError(ValueError):
    """Base class for input errors raised by engine computations."""


class InvalidRecord(ForecastEngineError):
    """Raised when an input record cannot be used (bad date, negative amount)."""

    def __init__(self, message: str, *, index: int | None = None) -> None:
        self.index = index
        if index is not None:
            message = f"record {index}: {message}"
        super().__init__(message)


class InvalidGoalParameters(ForecastEngineError):
    """Raised for a non-positive goal target or an unparseable target date."""


class InvalidScenario(ForecastEngineError):
    """Raised when scenario adjustments fall outside the supported range."""


class UndefinedTrend(str, Enum):
    """Why a trend could not be measured. Carried in results, never raised."""

    INSUFFICIENT_DATA = "insufficient_data"
    ZERO_BASELINE = "zero_baseline"
