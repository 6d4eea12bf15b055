"""Derived metrics over the dashboard collections.

Every function here is pure: it takes the records and the current calendar
day explicitly and never touches the clock or the store. Dates are compared
as calendar days, so "today" should be the user's local ``date.today()``.
"""

import datetime as dt
from dataclasses import dataclass
from typing import List, Optional, Sequence, TypeVar

from vitaltrack.config import (
    MIN_COMMITTED_SESSIONS,
    SLEEP_TARGET_HOURS,
    TREND_LIMIT,
    WATER_TARGET_LITERS,
    WINDOW_DAYS,
)
from vitaltrack.models import DashboardState, HealthEntry, WeightEntry, WorkoutEntry

T = TypeVar("T")


def window_start(today: dt.date, days: int = WINDOW_DAYS) -> dt.date:
    return today - dt.timedelta(days=days - 1)


def sort_by_date(records: Sequence[T]) -> List[T]:
    # Stable: same-day entries keep their insertion order.
    return sorted(records, key=lambda r: r.date, reverse=True)


def trailing_window(records: Sequence[T], today: dt.date, days: int = WINDOW_DAYS) -> List[T]:
    start = window_start(today, days)
    return [r for r in sort_by_date(records) if r.date >= start]


def total(records: Sequence[object], field: str) -> float:
    return sum(getattr(r, field) for r in records)


def average(records: Sequence[object], field: str) -> float:
    return total(records, field) / max(len(records), 1)


def latest_by(records: Sequence[T]) -> Optional[T]:
    ordered = sort_by_date(records)
    return ordered[0] if ordered else None


def top_n(records: Sequence[T], n: int) -> List[T]:
    return sort_by_date(records)[: max(n, 0)]


def delta(records: Sequence[object], field: str) -> Optional[float]:
    ordered = sort_by_date(records)
    if len(ordered) < 2:
        return None
    return getattr(ordered[0], field) - getattr(ordered[1], field)


@dataclass(frozen=True)
class WeightChange:
    latest: WeightEntry
    previous: WeightEntry
    delta: float
    favourable: bool


def weight_change(records: Sequence[WeightEntry], weight_goal: str = "lose", limit: int = TREND_LIMIT) -> Optional[WeightChange]:
    recent = top_n(records, limit)
    d = delta(recent, "weight_kg")
    if d is None:
        return None
    favourable = d <= 0 if weight_goal == "lose" else d >= 0
    return WeightChange(latest=recent[0], previous=recent[1], delta=d, favourable=favourable)


@dataclass(frozen=True)
class DashboardSummary:
    today: dt.date
    latest_health: Optional[HealthEntry]
    average_sleep: float
    average_water: float
    sleep_on_target: Optional[bool]
    water_on_target: Optional[bool]
    total_calories: float
    daily_calories: int
    recent_workouts: List[WorkoutEntry]
    last_workout: Optional[WorkoutEntry]
    committed_sessions: int
    latest_weight: Optional[WeightEntry]
    weight_change: Optional[WeightChange]


def summarize(state: DashboardState, today: dt.date, weight_goal: str = "lose") -> DashboardSummary:
    health = trailing_window(state.health, today)
    workouts = trailing_window(state.workouts, today)
    # Latest check-in comes from the window, not the full log.
    latest = health[0] if health else None
    calories = total(health, "calories")
    return DashboardSummary(
        today=today,
        latest_health=latest,
        average_sleep=average(health, "sleep_hours"),
        average_water=average(health, "water_liters"),
        sleep_on_target=None if latest is None else latest.sleep_hours >= SLEEP_TARGET_HOURS,
        water_on_target=None if latest is None else latest.water_liters >= WATER_TARGET_LITERS,
        total_calories=calories,
        daily_calories=int(calories / max(len(health), 1) + 0.5),
        recent_workouts=workouts,
        last_workout=workouts[0] if workouts else None,
        committed_sessions=max(MIN_COMMITTED_SESSIONS, len(workouts)),
        latest_weight=latest_by(state.weight),
        weight_change=weight_change(state.weight, weight_goal),
    )
