import datetime as dt

from conftest import health, workout
from vitaltrack import formatting
from vitaltrack.tables import HEALTH_COLS, TRAINING_COLS, health_log, training_log


class TestHealthLog:
    def test_formats_and_limits_rows(self):
        records = [health(str(i), dt.date(2026, 10, 17) - dt.timedelta(days=i), sleep=7.25, water=2.0, calories=2100) for i in range(10)]
        tbl = health_log(records)
        assert list(tbl.columns) == HEALTH_COLS
        assert len(tbl) == 8
        first = tbl.iloc[0].to_dict()
        assert first == {"Date": "Sat • Oct 17", "Sleep": "7.2 h", "Water": "2.0 L", "Calories": "2100 kcal", "Mood": "Steady"}

    def test_empty(self):
        tbl = health_log([])
        assert tbl.empty
        assert list(tbl.columns) == HEALTH_COLS


class TestTrainingLog:
    def test_newest_first(self):
        records = [workout("old", dt.date(2026, 9, 1)), workout("new", dt.date(2026, 10, 2), minutes=30, kcal=250)]
        tbl = training_log(records)
        assert list(tbl.columns) == TRAINING_COLS
        assert tbl.iloc[0].to_dict() == {
            "Date": "Oct 2, 2026",
            "Session": "Strength",
            "Duration": "30 min",
            "Intensity": "MEDIUM",
            "Calories": "250 kcal",
        }


class TestFormatting:
    def test_labels(self):
        today = dt.date(2026, 10, 17)
        assert formatting.days_ago(today, today) == "today"
        assert formatting.days_ago(dt.date(2026, 10, 16), today) == "yesterday"
        assert formatting.days_ago(dt.date(2026, 10, 12), today) == "5 days ago"
        assert formatting.days_ago(dt.date(2026, 9, 2), today) == "45 days ago"
        assert formatting.days_ago(dt.date(2026, 10, 20), today) == "in 3 days"
        assert formatting.signed(0.4) == "+0.4"
        assert formatting.signed(-0.6) == "-0.6"
        assert formatting.month_day(dt.date(2026, 3, 4)) == "Mar 4"
        assert formatting.with_unit(72.0, "kg") == "72kg"
