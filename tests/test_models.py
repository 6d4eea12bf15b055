import datetime as dt

import pytest

from vitaltrack.models import (
    HealthEntry,
    ValidationError,
    WeightEntry,
    WorkoutEntry,
    new_health_entry,
    new_weight_entry,
    new_workout_entry,
    parse_day,
)


def health_form(**overrides):
    form = {"date": "2026-10-17", "sleep_hours": 7, "water_liters": 2.5, "calories": 2100, "mood": "steady", "notes": ""}
    form.update(overrides)
    return form


def workout_form(**overrides):
    form = {"date": dt.date(2026, 10, 17), "type": "Run", "duration_minutes": 45, "intensity": "high", "calories_burned": 450}
    form.update(overrides)
    return form


class TestParseDay:
    def test_accepts_dates_datetimes_and_iso_text(self):
        assert parse_day(dt.date(2026, 1, 2)) == dt.date(2026, 1, 2)
        assert parse_day(dt.datetime(2026, 1, 2, 23, 59)) == dt.date(2026, 1, 2)
        assert parse_day("2026-01-02") == dt.date(2026, 1, 2)
        assert parse_day("2026-01-02T08:00:00.000Z") == dt.date(2026, 1, 2)

    def test_rejects_blank_and_garbage(self):
        with pytest.raises(ValueError):
            parse_day("")
        with pytest.raises(ValueError):
            parse_day("yesterday")


class TestHealthForm:
    def test_builds_entry_and_coerces_numeric_text(self):
        e = new_health_entry(health_form(sleep_hours="7.5", calories="2100", notes="  good day "), "h1")
        assert e == HealthEntry("h1", dt.date(2026, 10, 17), 7.5, 2.5, 2100, "steady", "good day")

    def test_blank_notes_become_none(self):
        assert new_health_entry(health_form(notes="   "), "h1").notes is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"sleep_hours": "abc"},
            {"water_liters": ""},
            {"calories": -5},
            {"calories": 10.5},
            {"sleep_hours": float("nan")},
            {"mood": "grumpy"},
            {"date": "not a date"},
        ],
    )
    def test_invalid_input_blocks_submit(self, overrides):
        with pytest.raises(ValidationError):
            new_health_entry(health_form(**overrides), "h1")


class TestWorkoutForm:
    def test_builds_entry(self):
        e = new_workout_entry(workout_form(intensity="HIGH"), "w1")
        assert e.intensity == "high"
        assert e.duration_minutes == 45
        assert e.notes is None

    @pytest.mark.parametrize(
        "overrides",
        [{"type": "  "}, {"duration_minutes": 0}, {"duration_minutes": "ten"}, {"calories_burned": -1}, {"intensity": "max"}],
    )
    def test_invalid_input_blocks_submit(self, overrides):
        with pytest.raises(ValidationError):
            new_workout_entry(workout_form(**overrides), "w1")


class TestWeightForm:
    def test_body_fat_optional(self):
        assert new_weight_entry({"date": "2026-10-17", "weight_kg": "71.4", "body_fat": ""}, "g1").body_fat is None
        assert new_weight_entry({"date": "2026-10-17", "weight_kg": 71.4, "body_fat": 0}, "g1").body_fat is None
        assert new_weight_entry({"date": "2026-10-17", "weight_kg": 71.4, "body_fat": 18.2}, "g1").body_fat == 18.2

    @pytest.mark.parametrize("form", [{"weight_kg": 0}, {"weight_kg": "heavy"}, {"weight_kg": 70, "body_fat": 80}])
    def test_invalid_input_blocks_submit(self, form):
        with pytest.raises(ValidationError):
            new_weight_entry({"date": "2026-10-17", **form}, "g1")


class TestFromDict:
    def test_malformed_numbers_become_zero(self):
        e = HealthEntry.from_dict({"id": "h1", "date": "2026-10-17", "sleepHours": "lots", "calories": None, "mood": "tired"})
        assert (e.sleep_hours, e.water_liters, e.calories) == (0.0, 0.0, 0)

    def test_missing_id_or_date_is_rejected(self):
        with pytest.raises(ValueError):
            WeightEntry.from_dict({"date": "2026-10-17", "weightKg": 70})
        with pytest.raises(ValueError):
            WeightEntry.from_dict({"id": "g1", "weightKg": 70})

    def test_to_dict_omits_unset_optionals(self):
        w = WorkoutEntry("w1", dt.date(2026, 10, 17), "Yoga", 30, "low", 120)
        assert w.to_dict() == {
            "id": "w1",
            "date": "2026-10-17",
            "type": "Yoga",
            "durationMinutes": 30,
            "intensity": "low",
            "caloriesBurned": 120,
        }
        assert "bodyFat" not in WeightEntry("g1", dt.date(2026, 10, 17), 70.0).to_dict()
