import itertools
import logging
import uuid
from typing import Any, Callable, Iterator, Mapping

from vitaltrack.config import STORAGE_KEY
from vitaltrack.models import (
    DashboardState,
    HealthEntry,
    WeightEntry,
    WorkoutEntry,
    new_health_entry,
    new_weight_entry,
    new_workout_entry,
)
from vitaltrack.store import StateStore, read_state, write_state

logger = logging.getLogger(__name__)

IdGenerator = Callable[[], str]


def uuid_id() -> str:
    return uuid.uuid4().hex


def sequential_ids(prefix: str = "id") -> IdGenerator:
    counter: Iterator[int] = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


class Dashboard:
    """Working copy of the dashboard state plus the store that backs it.

    ``hydrate`` must run before any entry is added: an unloaded dashboard
    would otherwise overwrite the stored state with empty collections.
    """

    def __init__(self, store: StateStore, key: str = STORAGE_KEY, new_id: IdGenerator = uuid_id) -> None:
        self.store = store
        self.key = key
        self.new_id = new_id
        self.state = DashboardState()
        self.hydrated = False

    def hydrate(self) -> DashboardState:
        if not self.hydrated:
            self.state = read_state(self.store, self.key)
            self.hydrated = True
            logger.info(
                "Loaded %d check-ins, %d workouts, %d weight logs",
                len(self.state.health),
                len(self.state.workouts),
                len(self.state.weight),
            )
        return self.state

    def _require_hydrated(self) -> None:
        if not self.hydrated:
            raise RuntimeError("Dashboard state is still loading; refusing to write")

    def persist(self) -> bool:
        self._require_hydrated()
        return write_state(self.store, self.key, self.state)

    def add_health(self, form: Mapping[str, Any]) -> HealthEntry:
        self._require_hydrated()
        entry = new_health_entry(form, self.new_id())
        self.state.health.append(entry)
        self.persist()
        return entry

    def add_workout(self, form: Mapping[str, Any]) -> WorkoutEntry:
        self._require_hydrated()
        entry = new_workout_entry(form, self.new_id())
        self.state.workouts.append(entry)
        self.persist()
        return entry

    def add_weight(self, form: Mapping[str, Any]) -> WeightEntry:
        self._require_hydrated()
        entry = new_weight_entry(form, self.new_id())
        self.state.weight.append(entry)
        self.persist()
        return entry
