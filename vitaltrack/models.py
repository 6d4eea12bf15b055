"""Record types for the dashboard and the two ways of building them.

Records read back from storage are built leniently (``from_dict``): numeric
fields that are missing or malformed become 0 so the metrics never trip on
them. Records coming from a form are built strictly (``new_*_entry``) and
raise ``ValidationError`` so the submit can be blocked.
"""

import datetime as dt
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

MOODS = ("energized", "steady", "tired")
INTENSITIES = ("low", "medium", "high")
MAX_BODY_FAT = 75.0


class ValidationError(ValueError):
    """Form input that cannot become a record."""


def parse_day(value: object) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    s = str(value).strip()
    if not s:
        raise ValueError("Date is required")
    # Accept full ISO timestamps too; only the calendar day is kept.
    return dt.date.fromisoformat(s[:10])


def _lenient_float(value: object) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError):
        return 0.0
    return out if math.isfinite(out) else 0.0


def _lenient_int(value: object) -> int:
    return int(round(_lenient_float(value)))


def _optional_text(value: object) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _required_id(raw: Mapping[str, Any]) -> str:
    rid = str(raw.get("id") or "").strip()
    if not rid:
        raise ValueError("Record has no id")
    return rid


def _choice(value: object, options: tuple, name: str) -> str:
    s = str(value or "").strip().lower()
    if s not in options:
        raise ValueError(f"Unknown {name} {value!r}. Must be one of: {', '.join(options)}")
    return s


@dataclass
class HealthEntry:
    id: str
    date: dt.date
    sleep_hours: float
    water_liters: float
    calories: int
    mood: str
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "HealthEntry":
        return cls(
            id=_required_id(raw),
            date=parse_day(raw.get("date", "")),
            sleep_hours=_lenient_float(raw.get("sleepHours")),
            water_liters=_lenient_float(raw.get("waterLiters")),
            calories=_lenient_int(raw.get("calories")),
            mood=_choice(raw.get("mood"), MOODS, "mood"),
            notes=_optional_text(raw.get("notes")),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "date": self.date.isoformat(),
            "sleepHours": self.sleep_hours,
            "waterLiters": self.water_liters,
            "calories": self.calories,
            "mood": self.mood,
        }
        if self.notes is not None:
            out["notes"] = self.notes
        return out


@dataclass
class WorkoutEntry:
    id: str
    date: dt.date
    type: str
    duration_minutes: int
    intensity: str
    calories_burned: int
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "WorkoutEntry":
        return cls(
            id=_required_id(raw),
            date=parse_day(raw.get("date", "")),
            type=str(raw.get("type") or "").strip(),
            duration_minutes=_lenient_int(raw.get("durationMinutes")),
            intensity=_choice(raw.get("intensity"), INTENSITIES, "intensity"),
            calories_burned=_lenient_int(raw.get("caloriesBurned")),
            notes=_optional_text(raw.get("notes")),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "date": self.date.isoformat(),
            "type": self.type,
            "durationMinutes": self.duration_minutes,
            "intensity": self.intensity,
            "caloriesBurned": self.calories_burned,
        }
        if self.notes is not None:
            out["notes"] = self.notes
        return out


@dataclass
class WeightEntry:
    id: str
    date: dt.date
    weight_kg: float
    body_fat: Optional[float] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "WeightEntry":
        bf = raw.get("bodyFat")
        return cls(
            id=_required_id(raw),
            date=parse_day(raw.get("date", "")),
            weight_kg=_lenient_float(raw.get("weightKg")),
            body_fat=None if bf in (None, "") else _lenient_float(bf),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"id": self.id, "date": self.date.isoformat(), "weightKg": self.weight_kg}
        if self.body_fat is not None:
            out["bodyFat"] = self.body_fat
        return out


Entry = Union[HealthEntry, WorkoutEntry, WeightEntry]


@dataclass
class DashboardState:
    health: List[HealthEntry] = field(default_factory=list)
    workouts: List[WorkoutEntry] = field(default_factory=list)
    weight: List[WeightEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "health": [e.to_dict() for e in self.health],
            "workouts": [e.to_dict() for e in self.workouts],
            "weight": [e.to_dict() for e in self.weight],
        }


# Form boundary ---------------------------------------------------------------


def _number(form: Mapping[str, Any], key: str, label: str) -> float:
    raw = form.get(key)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError(f"{label} is required")
    if isinstance(raw, bool):
        raise ValidationError(f"{label} must be a number, got {raw!r}")
    try:
        out = float(str(raw).strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a number, got {raw!r}")
    if not math.isfinite(out):
        raise ValidationError(f"{label} must be a finite number, got {raw!r}")
    return out


def _non_negative(form: Mapping[str, Any], key: str, label: str) -> float:
    v = _number(form, key, label)
    if v < 0:
        raise ValidationError(f"{label} cannot be negative, got {v:g}")
    return v


def _whole(v: float, label: str) -> int:
    if not float(v).is_integer():
        raise ValidationError(f"{label} must be a whole number, got {v:g}")
    return int(v)


def _form_day(form: Mapping[str, Any]) -> dt.date:
    try:
        return parse_day(form.get("date", ""))
    except ValueError as exc:
        raise ValidationError(f"Invalid date: {exc}") from exc


def _form_choice(form: Mapping[str, Any], key: str, options: tuple) -> str:
    try:
        return _choice(form.get(key), options, key)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


def new_health_entry(form: Mapping[str, Any], entry_id: str) -> HealthEntry:
    return HealthEntry(
        id=entry_id,
        date=_form_day(form),
        sleep_hours=_non_negative(form, "sleep_hours", "Sleep"),
        water_liters=_non_negative(form, "water_liters", "Water"),
        calories=_whole(_non_negative(form, "calories", "Calories"), "Calories"),
        mood=_form_choice(form, "mood", MOODS),
        notes=_optional_text(form.get("notes")),
    )


def new_workout_entry(form: Mapping[str, Any], entry_id: str) -> WorkoutEntry:
    label = str(form.get("type") or "").strip()
    if not label:
        raise ValidationError("Session focus is required")
    duration = _whole(_number(form, "duration_minutes", "Duration"), "Duration")
    if duration <= 0:
        raise ValidationError(f"Duration must be positive, got {duration}")
    return WorkoutEntry(
        id=entry_id,
        date=_form_day(form),
        type=label,
        duration_minutes=duration,
        intensity=_form_choice(form, "intensity", INTENSITIES),
        calories_burned=_whole(_non_negative(form, "calories_burned", "Calories burned"), "Calories burned"),
        notes=_optional_text(form.get("notes")),
    )


def new_weight_entry(form: Mapping[str, Any], entry_id: str) -> WeightEntry:
    weight = _number(form, "weight_kg", "Weight")
    if weight <= 0:
        raise ValidationError(f"Weight must be positive, got {weight:g}")
    body_fat: Optional[float] = None
    raw_bf = form.get("body_fat")
    # Blank or zero body fat means "not measured".
    if raw_bf not in (None, "", 0, 0.0):
        body_fat = _number(form, "body_fat", "Body fat")
        if not 0 <= body_fat <= MAX_BODY_FAT:
            raise ValidationError(f"Body fat must be between 0 and {MAX_BODY_FAT:g}%, got {body_fat:g}")
        if body_fat == 0:
            body_fat = None
    return WeightEntry(id=entry_id, date=_form_day(form), weight_kg=weight, body_fat=body_fat)
