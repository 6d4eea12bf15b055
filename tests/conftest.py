import datetime as dt
from typing import List

import pytest

from vitaltrack.models import HealthEntry, WeightEntry, WorkoutEntry

TODAY = dt.date(2026, 10, 17)


def days_before(n: int) -> dt.date:
    return TODAY - dt.timedelta(days=n)


def health(rid: str, day: dt.date, sleep: float = 7.0, water: float = 2.0, calories: int = 2000, mood: str = "steady") -> HealthEntry:
    return HealthEntry(id=rid, date=day, sleep_hours=sleep, water_liters=water, calories=calories, mood=mood)


def workout(rid: str, day: dt.date, minutes: int = 45, kcal: int = 400) -> WorkoutEntry:
    return WorkoutEntry(id=rid, date=day, type="Strength", duration_minutes=minutes, intensity="medium", calories_burned=kcal)


def weight(rid: str, day: dt.date, kg: float, body_fat=None) -> WeightEntry:
    return WeightEntry(id=rid, date=day, weight_kg=kg, body_fat=body_fat)


class FakeWorksheet:
    """Just enough of gspread.Worksheet for SheetStore."""

    def __init__(self, rows: List[List[str]] = None, fail: bool = False):
        self.rows = [list(r) for r in (rows or [])]
        self.fail = fail
        self.calls = []

    def get_all_values(self):
        if self.fail:
            raise ConnectionError("sheet offline")
        return [list(r) for r in self.rows]

    def update(self, range_name, values, value_input_option=None):
        self.calls.append(("update", range_name))
        row = int("".join(c for c in range_name.split(":")[0] if c.isdigit()))
        while len(self.rows) < row:
            self.rows.append([])
        self.rows[row - 1] = list(values[0])

    def append_row(self, values, value_input_option=None):
        self.calls.append(("append_row", values[0]))
        self.rows.append(list(values))


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def fake_worksheet():
    return FakeWorksheet()
