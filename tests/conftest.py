"""Shared fixtures for the ForecastLens test suite."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest
import streamlit as st

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import get_settings


@pytest.fixture(autouse=True)
def clear_streamlit_secrets(monkeypatch):
    """Provide an empty secrets mapping so tests don't rely on Streamlit runtime."""

    monkeypatch.setattr(st, "secrets", {}, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class ManualTimer:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose clock only moves when the test advances it."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[ManualTimer] = []

    def schedule(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = [
            timer
            for timer in self.timers
            if not timer.cancelled and not timer.fired and timer.due <= self.now
        ]
        for timer in sorted(due, key=lambda item: item.due):
            timer.fired = True
            timer.callback()

    @property
    def active(self) -> list[ManualTimer]:
        return [timer for timer in self.timers if not timer.cancelled and not timer.fired]


@pytest.fixture()
def manual_scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def sample_spending_rows() -> list[dict]:
    return [
        {"date": "2024-01-01", "category": "Rent", "amount": 1200.0, "is_anomaly": False},
        {"date": "2024-01-01", "category": "Food", "amount": 300.0, "is_anomaly": False},
        {
            "date": "2024-01-02",
            "category": "Food",
            "amount": 45.5,
            "is_anomaly": True,
            "anomaly_reason": "",
        },
        {
            "date": "2024-01-02",
            "category": "Shopping",
            "amount": 410.0,
            "is_anomaly": True,
            "anomaly_reason": "Large one-off purchase",
        },
        {
            "date": "2024-01-02",
            "category": "Food",
            "amount": 12.0,
            "is_anomaly": True,
            "anomaly_reason": "Unusual merchant",
        },
        {"date": "2023-12-31", "category": "Transport", "amount": 22.0, "is_anomaly": False},
    ]
