import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

STORAGE_KEY = "vitaltrack-dashboard"
WINDOW_DAYS = 7
TREND_LIMIT = 14
HEALTH_LOG_ROWS = 8
TRAINING_LOG_ROWS = 12

SLEEP_TARGET_HOURS = 7.0
WATER_TARGET_LITERS = 2.0
MIN_COMMITTED_SESSIONS = 4

BACKENDS = ("local", "sheets")
WEIGHT_GOALS = ("lose", "gain")
DEFAULT_DATA_DIR = os.path.join(os.path.expanduser("~"), ".vitaltrack")
SHEET_SCOPES = ["https://www.googleapis.com/auth/spreadsheets", "https://www.googleapis.com/auth/drive"]


@dataclass(frozen=True)
class Settings:
    storage_backend: str = "local"
    data_dir: str = DEFAULT_DATA_DIR
    storage_key: str = STORAGE_KEY
    google_sheet_url: Optional[str] = None
    state_worksheet_name: str = "State"
    weight_goal: str = "lose"
    log_level: str = "INFO"


def load_settings(secrets: Mapping[str, Any]) -> Settings:
    backend = str(secrets.get("storage_backend", "local")).strip().lower()
    if backend not in BACKENDS:
        raise ValueError(f"Unknown storage_backend {backend!r}. Must be one of: {', '.join(BACKENDS)}")
    goal = str(secrets.get("weight_goal", "lose")).strip().lower()
    if goal not in WEIGHT_GOALS:
        raise ValueError(f"Unknown weight_goal {goal!r}. Must be one of: {', '.join(WEIGHT_GOALS)}")
    if backend == "sheets" and ("gcp_service_account" not in secrets or "google_sheet_url" not in secrets):
        raise KeyError("Missing secrets: gcp_service_account or google_sheet_url")
    return Settings(
        storage_backend=backend,
        data_dir=os.path.expanduser(str(secrets.get("data_dir", DEFAULT_DATA_DIR))),
        storage_key=str(secrets.get("storage_key", STORAGE_KEY)),
        google_sheet_url=secrets.get("google_sheet_url"),
        state_worksheet_name=str(secrets.get("state_worksheet_name", "State")),
        weight_goal=goal,
        log_level=str(secrets.get("log_level", "INFO")).upper(),
    )
