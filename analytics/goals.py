"""Savings goal timing: auto-contribution schedules and progress tracking."""

from __future__ import annotations

import math
from typing import Any, Final, Iterable, Optional

import numpy as np
import pandas as pd

from core.errors import InvalidGoalParameters
from core.models import ContributionSchedule, GoalPortfolioSummary, GoalProgress, SavingsGoal

__all__ = [
    "PERIOD_DAYS",
    "days_until",
    "compute_contribution_schedule",
    "schedule_for_goal",
    "goal_progress",
    "summarize_goals",
]

PERIOD_DAYS: Final[dict[str, int]] = {
    "weekly": 7,
    "monthly": 30,
    "quarterly": 90,
}

_ONE_DAY = pd.Timedelta(days=1)


def _resolve_target_amount(target_amount: Any) -> float:
    try:
        amount = float(target_amount)
    except (TypeError, ValueError) as exc:
        raise InvalidGoalParameters(f"Target amount is not numeric: {target_amount!r}") from exc
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidGoalParameters(f"Target amount must be positive, got {target_amount!r}")
    return amount


def _resolve_date(value: Any, label: str) -> pd.Timestamp:
    try:
        parsed = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        raise InvalidGoalParameters(f"Unparseable {label}: {value!r}") from exc
    if pd.isna(parsed):
        raise InvalidGoalParameters(f"Missing {label}.")
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert(None)
    return parsed


def _resolve_today(today: Any | None) -> pd.Timestamp:
    if today is None:
        return pd.Timestamp.now()
    return _resolve_date(today, "reference date")


def days_until(target_date: Any, today: Any | None = None) -> int:
    """Whole days to the deadline, rounded up and never below one."""

    target = _resolve_date(target_date, "target date")
    reference = _resolve_today(today)
    return max(1, math.ceil((target - reference) / _ONE_DAY))


def _periodic_amount(target_amount: float, days_remaining: int, period_days: int) -> int:
    periods = max(1, math.ceil(days_remaining / period_days))
    amount = math.ceil(target_amount / periods)
    # float division can land a hair under the true quotient
    if amount * periods < target_amount:
        amount += 1
    return int(amount)


def compute_contribution_schedule(
    target_amount: Any,
    target_date: Any,
    today: Any | None = None,
) -> ContributionSchedule:
    """Return the weekly, monthly and quarterly amounts that fund a goal on time.

    Every amount is rounded up, so contributing it each period reaches the
    target by the deadline.
    """

    amount = _resolve_target_amount(target_amount)
    days_remaining = days_until(target_date, today)
    return ContributionSchedule(
        days_remaining=days_remaining,
        weekly_amount=_periodic_amount(amount, days_remaining, PERIOD_DAYS["weekly"]),
        monthly_amount=_periodic_amount(amount, days_remaining, PERIOD_DAYS["monthly"]),
        quarterly_amount=_periodic_amount(amount, days_remaining, PERIOD_DAYS["quarterly"]),
    )


def schedule_for_goal(goal: SavingsGoal, today: Any | None = None) -> ContributionSchedule:
    return compute_contribution_schedule(goal.target_amount, goal.target_date, today)


def goal_progress(goal: SavingsGoal, today: Any | None = None) -> GoalProgress:
    """Progress, time left, and the contributions still needed for a goal."""

    target = _resolve_target_amount(goal.target_amount)
    deadline = _resolve_date(goal.target_date, "target date")
    reference = _resolve_today(today)

    progress_pct = goal.current_amount / target * 100
    days_remaining = max((deadline - reference).days, 0)
    remaining_amount = max(target - goal.current_amount, 0.0)

    if days_remaining > 0:
        monthly_needed = remaining_amount / max(days_remaining / 30, 1)
        weekly_needed = remaining_amount / max(days_remaining / 7, 1)
    else:
        monthly_needed = 0.0
        weekly_needed = 0.0

    return GoalProgress(
        progress_pct=float(progress_pct),
        display_progress_pct=float(min(progress_pct, 100.0)),
        days_remaining=int(days_remaining),
        is_on_track=days_remaining > 0 and progress_pct > 0,
        weekly_contribution_needed=float(weekly_needed),
        monthly_contribution_needed=float(monthly_needed),
    )


def summarize_goals(goals: Iterable[SavingsGoal]) -> Optional[GoalPortfolioSummary]:
    goals = list(goals)
    if not goals:
        return None

    targets = np.array([goal.target_amount for goal in goals], dtype=float)
    currents = np.array([goal.current_amount for goal in goals], dtype=float)
    total_target = float(targets.sum())
    total_current = float(currents.sum())
    overall = total_current / total_target * 100 if total_target > 0 else 0.0
    average = float(np.mean([goal.progress for goal in goals]))

    return GoalPortfolioSummary(
        total_target=total_target,
        total_current=total_current,
        overall_progress=float(overall),
        average_progress=average,
        total_goals=len(goals),
    )
