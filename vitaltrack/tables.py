from typing import Sequence

import pandas as pd

from vitaltrack import formatting
from vitaltrack.config import HEALTH_LOG_ROWS, TRAINING_LOG_ROWS
from vitaltrack.metrics import top_n
from vitaltrack.models import HealthEntry, WorkoutEntry

HEALTH_COLS = ["Date", "Sleep", "Water", "Calories", "Mood"]
TRAINING_COLS = ["Date", "Session", "Duration", "Intensity", "Calories"]


def health_log(records: Sequence[HealthEntry], limit: int = HEALTH_LOG_ROWS) -> pd.DataFrame:
    rows = [
        {
            "Date": formatting.weekday_month_day(r.date),
            "Sleep": f"{r.sleep_hours:.1f} h",
            "Water": f"{r.water_liters:.1f} L",
            "Calories": f"{r.calories} kcal",
            "Mood": r.mood.capitalize(),
        }
        for r in top_n(records, limit)
    ]
    return pd.DataFrame(rows, columns=HEALTH_COLS)


def training_log(records: Sequence[WorkoutEntry], limit: int = TRAINING_LOG_ROWS) -> pd.DataFrame:
    rows = [
        {
            "Date": formatting.long_date(r.date),
            "Session": r.type,
            "Duration": f"{r.duration_minutes} min",
            "Intensity": r.intensity.upper(),
            "Calories": f"{r.calories_burned} kcal",
        }
        for r in top_n(records, limit)
    ]
    return pd.DataFrame(rows, columns=TRAINING_COLS)
