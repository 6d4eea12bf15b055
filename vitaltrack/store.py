"""Key-value stores holding the dashboard state as one JSON text blob.

A store only has to ``read(key)`` and ``write(key, text)``. Neither raises:
a failed read logs and returns ``None``, a failed write logs and returns
``False``. The caller keeps working from its in-memory copy either way.
"""

import json
import logging
import os
import tempfile
from typing import Any, Callable, Dict, List, Optional, Protocol

import gspread
from google.oauth2.service_account import Credentials

from vitaltrack.config import SHEET_SCOPES
from vitaltrack.models import DashboardState, HealthEntry, WeightEntry, WorkoutEntry

logger = logging.getLogger(__name__)

SHEET_COLS = ["Key", "Value"]
# Google Sheets refuses cells longer than this.
SHEET_CELL_LIMIT = 50000


class StateStore(Protocol):
    def read(self, key: str) -> Optional[str]: ...

    def write(self, key: str, text: str) -> bool: ...


class MemoryStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def write(self, key: str, text: str) -> bool:
        self.data[key] = text
        return True


class LocalFileStore:
    """One ``<key>.json`` file per key inside ``directory``."""

    def __init__(self, directory: str) -> None:
        self.directory = directory

    def path(self, key: str) -> str:
        safe = "".join(c if c.isalnum() or c in "-_." else "_" for c in key)
        return os.path.join(self.directory, f"{safe}.json")

    def read(self, key: str) -> Optional[str]:
        p = self.path(key)
        if not os.path.exists(p):
            return None
        try:
            with open(p, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read key %r from %s: %s", key, p, exc)
            return None

    def write(self, key: str, text: str) -> bool:
        p = self.path(key)
        tmp = None
        try:
            os.makedirs(self.directory, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=".tmp_state_", dir=self.directory, text=True)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp, p)
        except (OSError, UnicodeError) as exc:
            logger.warning("Failed to write key %r to %s: %s", key, p, exc)
            if tmp is not None and os.path.exists(tmp):
                os.remove(tmp)
            return False
        return True


class SheetStore:
    """Keeps each key on its own row of a ``Key | Value`` worksheet."""

    def __init__(self, worksheet: gspread.Worksheet) -> None:
        self.worksheet = worksheet

    def _rows(self) -> List[List[str]]:
        vals = self.worksheet.get_all_values()
        if not any(any(c.strip() for c in row) for row in vals):
            self.worksheet.update(range_name="A1:B1", values=[SHEET_COLS])
            return [SHEET_COLS]
        header = [h.strip() for h in vals[0][:2]]
        if header != SHEET_COLS:
            # Never write over a worksheet that holds something else.
            raise ValueError(f"Worksheet header is {header}, expected {SHEET_COLS}")
        return vals

    @staticmethod
    def _find(rows: List[List[str]], key: str) -> Optional[int]:
        for i, row in enumerate(rows[1:], start=2):
            if row and row[0].strip() == key:
                return i
        return None

    def read(self, key: str) -> Optional[str]:
        try:
            rows = self._rows()
        except Exception as exc:
            logger.warning("Failed to read key %r from worksheet: %s", key, exc)
            return None
        idx = self._find(rows, key)
        if idx is None:
            return None
        row = rows[idx - 1]
        return row[1] if len(row) > 1 else None

    def write(self, key: str, text: str) -> bool:
        if len(text) > SHEET_CELL_LIMIT:
            logger.warning("State for key %r is %d chars, over the %d cell limit", key, len(text), SHEET_CELL_LIMIT)
            return False
        try:
            rows = self._rows()
            idx = self._find(rows, key)
            if idx is None:
                self.worksheet.append_row([key, text], value_input_option="RAW")
            else:
                self.worksheet.update(range_name=f"A{idx}:B{idx}", values=[[key, text]], value_input_option="RAW")
        except Exception as exc:
            logger.warning("Failed to write key %r to worksheet: %s", key, exc)
            return False
        return True


def open_sheet_store(service_account: Dict[str, Any], sheet_url: str, worksheet_name: str) -> SheetStore:
    creds = Credentials.from_service_account_info(dict(service_account), scopes=SHEET_SCOPES)
    spreadsheet = gspread.authorize(creds).open_by_url(sheet_url)
    try:
        worksheet = spreadsheet.worksheet(worksheet_name)
    except gspread.WorksheetNotFound as exc:
        raise KeyError(f"Worksheet `{worksheet_name}` not found.") from exc
    store = SheetStore(worksheet)
    store._rows()
    return store


# JSON codec ------------------------------------------------------------------


def dump_state(state: DashboardState) -> str:
    return json.dumps(state.to_dict(), ensure_ascii=False)


def _records(payload: Dict[str, Any], name: str, build: Callable[[Dict[str, Any]], Any]) -> list:
    raw = payload.get(name) or []
    if not isinstance(raw, list):
        logger.warning("Ignoring %r: expected a list, got %s", name, type(raw).__name__)
        return []
    out = []
    skipped = []
    for idx, entry in enumerate(raw):
        try:
            if not isinstance(entry, dict):
                raise TypeError(f"expected an object, got {type(entry).__name__}")
            out.append(build(entry))
        except (KeyError, ValueError, TypeError) as exc:
            skipped.append((idx, str(exc)))
    if skipped:
        logger.warning("Skipped %d invalid %s record(s)", len(skipped), name)
        for idx, err in skipped:
            logger.warning("  %s[%d]: %s", name, idx, err)
    return out


def load_state_text(text: str) -> DashboardState:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in stored state: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"Stored state must be a JSON object, got {type(payload).__name__}")
    return DashboardState(
        health=_records(payload, "health", HealthEntry.from_dict),
        workouts=_records(payload, "workouts", WorkoutEntry.from_dict),
        weight=_records(payload, "weight", WeightEntry.from_dict),
    )


def read_state(store: StateStore, key: str) -> DashboardState:
    """Load the state for ``key``, falling back to empty collections.

    Absent, blank, unreadable or malformed payloads are all treated as a
    first run.
    """
    text = store.read(key)
    if text is None or not text.strip():
        logger.info("No stored state under %r, starting empty", key)
        return DashboardState()
    try:
        return load_state_text(text)
    except ValueError as exc:
        logger.warning("Discarding stored state under %r: %s", key, exc)
        return DashboardState()


def write_state(store: StateStore, key: str, state: DashboardState) -> bool:
    ok = store.write(key, dump_state(state))
    if not ok:
        logger.warning("State under %r was not persisted; keeping the in-memory copy", key)
    return ok
