"""The fitness data store.

:class:`FitnessStore` owns every collection (muscles, equipment, training
logs, locations) and a handful of scalar preferences. Callers get copies;
changes go through the mutation methods, and each mutation immediately
writes a full snapshot of the affected collection under its key. Writes to
different collections are independent; there is no cross-key atomicity.
"""

import copy
import json
import logging
from datetime import date, datetime
from typing import Any, Callable, TypeVar

from .errors import NotFoundError, ValidationError
from .models.equipment import Equipment
from .models.muscle import Muscle, SubMuscle, default_muscles, normalize_name
from .models.training import TrainingLog, TrainingSet
from .models.units import WeightUnit
from .storage.kv import STORAGE_ERRORS, KeyValueStore
from .utils.dates import as_day
from .validation import (
    validate_equipment,
    validate_location,
    validate_muscle,
    validate_sub_muscle,
    validate_training_set,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Storage keys
MUSCLES_KEY = "muscles"
EQUIPMENTS_KEY = "equipments"
TRAINING_LOGS_KEY = "trainingLogs"
LOCATIONS_KEY = "locations"
PREFERRED_WEIGHT_UNIT_KEY = "preferredWeightUnit"
LAST_EDITED_REPS_KEY = "lastEditedReps"
LAST_USED_WEIGHT_UNIT_KEY = "lastUsedWeightUnit"


def _location_from_json(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Location must be a string, got {type(value).__name__}")
    return value


def _index_of(items: list, item_id: str) -> int | None:
    for i, item in enumerate(items):
        if item.id == item_id:
            return i
    return None


class FitnessStore:
    """Owned, persisted state of the application."""

    def __init__(self, kv: KeyValueStore, default_weight_unit: WeightUnit = WeightUnit.KG):
        self.kv = kv
        self._muscles: list[Muscle] = []
        self._equipments: list[Equipment] = []
        self._training_logs: list[TrainingLog] = []
        self._locations: list[str] = []
        self._preferred_weight_unit = WeightUnit(default_weight_unit)
        self._default_weight_unit = WeightUnit(default_weight_unit)
        self._last_edited_reps: int | None = None
        self._last_used_weight_unit: WeightUnit | None = None

    # Read access (copies)

    @property
    def muscles(self) -> tuple[Muscle, ...]:
        return copy.deepcopy(tuple(self._muscles))

    @property
    def equipments(self) -> tuple[Equipment, ...]:
        return copy.deepcopy(tuple(self._equipments))

    @property
    def training_logs(self) -> tuple[TrainingLog, ...]:
        return copy.deepcopy(tuple(self._training_logs))

    @property
    def locations(self) -> tuple[str, ...]:
        return tuple(self._locations)

    @property
    def preferred_weight_unit(self) -> WeightUnit:
        return self._preferred_weight_unit

    @property
    def last_edited_reps(self) -> int | None:
        return self._last_edited_reps

    @property
    def last_used_weight_unit(self) -> WeightUnit | None:
        return self._last_used_weight_unit

    # Persistence

    async def _read_json(self, key: str) -> Any:
        """Read and decode a key. Missing or unreadable data yields None."""
        try:
            raw = await self.kv.get(key)
        except STORAGE_ERRORS as e:
            logger.warning("Could not read %s, treating as absent: %s", key, e)
            return None

        if raw is None:
            return None

        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Discarding corrupt data under %s: %s", key, e)
            return None

    async def _load_list(self, key: str, factory: Callable[[Any], T]) -> list[T]:
        data = await self._read_json(key)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("Expected a list under %s, got %s", key, type(data).__name__)
            return []
        try:
            return [factory(item) for item in data]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Discarding undecodable records under %s: %s", key, e)
            return []

    async def _write(self, key: str, payload: Any) -> bool:
        """Write a JSON snapshot. Failures are logged and dropped."""
        try:
            encoded = json.dumps(payload, ensure_ascii=False).encode("utf-8")
            await self.kv.set(key, encoded)
        except STORAGE_ERRORS as e:
            logger.warning("Failed to save %s; change kept in memory only: %s", key, e)
            return False
        logger.debug("Saved %s (%d bytes)", key, len(encoded))
        return True

    async def load_muscles(self) -> list[Muscle]:
        self._muscles = await self._load_list(MUSCLES_KEY, Muscle.from_dict)
        return copy.deepcopy(self._muscles)

    async def load_equipments(self) -> list[Equipment]:
        self._equipments = await self._load_list(EQUIPMENTS_KEY, Equipment.from_dict)
        return copy.deepcopy(self._equipments)

    async def load_training_logs(self) -> list[TrainingLog]:
        self._training_logs = await self._load_list(TRAINING_LOGS_KEY, TrainingLog.from_dict)
        return copy.deepcopy(self._training_logs)

    async def load_locations(self) -> list[str]:
        self._locations = await self._load_list(LOCATIONS_KEY, _location_from_json)
        return list(self._locations)

    async def load_preferences(self) -> None:
        unit = await self._read_json(PREFERRED_WEIGHT_UNIT_KEY)
        try:
            self._preferred_weight_unit = WeightUnit(unit) if unit else self._default_weight_unit
        except ValueError:
            logger.warning("Ignoring unknown preferred weight unit %r", unit)
            self._preferred_weight_unit = self._default_weight_unit

        reps = await self._read_json(LAST_EDITED_REPS_KEY)
        self._last_edited_reps = reps if isinstance(reps, int) else None

        last_unit = await self._read_json(LAST_USED_WEIGHT_UNIT_KEY)
        try:
            self._last_used_weight_unit = WeightUnit(last_unit) if last_unit else None
        except ValueError:
            self._last_used_weight_unit = None

    async def load(self) -> None:
        """Load every collection and preference from storage."""
        await self.load_muscles()
        await self.load_equipments()
        await self.load_training_logs()
        await self.load_locations()
        await self.load_preferences()
        logger.debug(
            "Loaded %d muscles, %d equipment, %d logs, %d locations",
            len(self._muscles),
            len(self._equipments),
            len(self._training_logs),
            len(self._locations),
        )

    async def save_muscles(self) -> bool:
        return await self._write(MUSCLES_KEY, [m.to_dict() for m in self._muscles])

    async def save_equipments(self) -> bool:
        return await self._write(EQUIPMENTS_KEY, [e.to_dict() for e in self._equipments])

    async def save_training_logs(self) -> bool:
        return await self._write(
            TRAINING_LOGS_KEY, [log.to_dict() for log in self._training_logs]
        )

    async def save_locations(self) -> bool:
        return await self._write(LOCATIONS_KEY, list(self._locations))

    # Muscles

    def get_muscle(self, muscle_id: str) -> Muscle | None:
        index = _index_of(self._muscles, muscle_id)
        return copy.deepcopy(self._muscles[index]) if index is not None else None

    def find_muscle_by_name(self, name: str) -> Muscle | None:
        key = normalize_name(name)
        for muscle in self._muscles:
            if normalize_name(muscle.name) == key:
                return copy.deepcopy(muscle)
        return None

    def _check_muscle_name(self, name: str, muscle_id: str | None = None) -> None:
        key = normalize_name(name)
        for muscle in self._muscles:
            if muscle.id != muscle_id and normalize_name(muscle.name) == key:
                raise ValidationError("name", f"Muscle '{name}' already exists")

    def _require_muscle(self, muscle_id: str) -> int:
        index = _index_of(self._muscles, muscle_id)
        if index is None:
            raise NotFoundError("Muscle", muscle_id)
        return index

    async def add_muscle(self, muscle: Muscle) -> Muscle:
        validate_muscle(muscle)
        self._check_muscle_name(muscle.name)
        if _index_of(self._muscles, muscle.id) is not None:
            raise ValidationError("id", f"Muscle {muscle.id} already exists")

        self._muscles.append(copy.deepcopy(muscle))
        await self.save_muscles()
        return copy.deepcopy(muscle)

    async def update_muscle(self, muscle: Muscle) -> Muscle:
        index = self._require_muscle(muscle.id)
        validate_muscle(muscle)
        self._check_muscle_name(muscle.name, muscle.id)

        self._muscles[index] = copy.deepcopy(muscle)
        await self.save_muscles()
        return copy.deepcopy(muscle)

    async def delete_muscle(self, muscle_id: str) -> Muscle:
        """Remove a muscle.

        Equipment that referenced it keeps the id and resolves to no muscle.
        """
        index = self._require_muscle(muscle_id)
        removed = self._muscles.pop(index)
        await self.save_muscles()
        return removed

    async def add_sub_muscle(self, muscle_id: str, sub_muscle: SubMuscle) -> SubMuscle:
        index = self._require_muscle(muscle_id)
        validate_sub_muscle(sub_muscle)
        muscle = self._muscles[index]
        key = normalize_name(sub_muscle.name)
        if any(normalize_name(s.name) == key for s in muscle.sub_muscles):
            raise ValidationError(
                "name", f"'{sub_muscle.name}' already exists under {muscle.name}"
            )

        muscle.sub_muscles.append(copy.deepcopy(sub_muscle))
        await self.save_muscles()
        return copy.deepcopy(sub_muscle)

    async def delete_sub_muscle(self, muscle_id: str, sub_muscle_id: str) -> SubMuscle:
        muscle = self._muscles[self._require_muscle(muscle_id)]
        sub_index = _index_of(muscle.sub_muscles, sub_muscle_id)
        if sub_index is None:
            raise NotFoundError("SubMuscle", sub_muscle_id)

        removed = muscle.sub_muscles.pop(sub_index)
        await self.save_muscles()
        return removed

    async def seed_default_muscles(self) -> int:
        """Install the default taxonomy if no muscles exist yet."""
        if self._muscles:
            return 0
        self._muscles = default_muscles()
        await self.save_muscles()
        return len(self._muscles)

    # Equipment

    def get_equipment(self, equipment_id: str) -> Equipment | None:
        index = _index_of(self._equipments, equipment_id)
        return copy.deepcopy(self._equipments[index]) if index is not None else None

    def has_equipment(self, equipment_id: str) -> bool:
        return _index_of(self._equipments, equipment_id) is not None

    def muscle_for(self, equipment: Equipment) -> Muscle | None:
        """Resolve an equipment's muscle reference."""
        if not equipment.muscle_id:
            return None
        return self.get_muscle(equipment.muscle_id)

    def _check_equipment_refs(
        self, equipment: Equipment, current: Equipment | None = None
    ) -> None:
        """Check muscle references that are new or changed.

        References kept from ``current`` are not checked again, so equipment
        whose muscle was deleted can still be edited.
        """
        if equipment.sub_muscle_id and not equipment.muscle_id:
            raise ValidationError("muscle", "Choose a muscle before a sub-muscle")
        if not equipment.muscle_id:
            return
        if current is not None and (equipment.muscle_id, equipment.sub_muscle_id) == (
            current.muscle_id,
            current.sub_muscle_id,
        ):
            return

        index = _index_of(self._muscles, equipment.muscle_id)
        if index is None:
            raise ValidationError("muscle", f"Unknown muscle {equipment.muscle_id}")
        muscle = self._muscles[index]
        if equipment.sub_muscle_id and muscle.get_sub_muscle(equipment.sub_muscle_id) is None:
            raise ValidationError(
                "sub_muscle", f"Sub-muscle {equipment.sub_muscle_id} is not part of {muscle.name}"
            )

    def _require_equipment(self, equipment_id: str) -> int:
        index = _index_of(self._equipments, equipment_id)
        if index is None:
            raise NotFoundError("Equipment", equipment_id)
        return index

    async def add_equipment(self, equipment: Equipment) -> Equipment:
        validate_equipment(equipment)
        self._check_equipment_refs(equipment)
        if _index_of(self._equipments, equipment.id) is not None:
            raise ValidationError("id", f"Equipment {equipment.id} already exists")

        self._equipments.append(copy.deepcopy(equipment))
        await self.save_equipments()
        return copy.deepcopy(equipment)

    async def update_equipment(self, equipment: Equipment) -> Equipment:
        index = self._require_equipment(equipment.id)
        validate_equipment(equipment)
        self._check_equipment_refs(equipment, self._equipments[index])

        self._equipments[index] = copy.deepcopy(equipment)
        await self.save_equipments()
        return copy.deepcopy(equipment)

    async def delete_equipment(self, equipment_id: str) -> Equipment:
        """Remove an equipment and return it so its image can be cleaned up.

        Logged training sets keep their equipment id.
        """
        index = self._require_equipment(equipment_id)
        removed = self._equipments.pop(index)
        await self.save_equipments()
        return removed

    # Locations

    def _location_index(self, name: str) -> int | None:
        key = normalize_name(name)
        for i, location in enumerate(self._locations):
            if normalize_name(location) == key:
                return i
        return None

    async def add_location(self, name: str) -> str:
        validate_location(name)
        name = name.strip()
        if self._location_index(name) is not None:
            raise ValidationError("location", f"Location '{name}' already exists")

        self._locations.append(name)
        await self.save_locations()
        return name

    async def rename_location(self, old_name: str, new_name: str) -> str:
        index = self._location_index(old_name)
        if index is None:
            raise NotFoundError("Location", old_name)
        validate_location(new_name)
        new_name = new_name.strip()
        existing = self._location_index(new_name)
        if existing is not None and existing != index:
            raise ValidationError("location", f"Location '{new_name}' already exists")

        self._locations[index] = new_name
        await self.save_locations()
        return new_name

    async def delete_location(self, name: str) -> str:
        index = self._location_index(name)
        if index is None:
            raise NotFoundError("Location", name)

        removed = self._locations.pop(index)
        await self.save_locations()
        return removed

    # Training logs

    def _log_index_for_day(self, day: date) -> int | None:
        for i, log in enumerate(self._training_logs):
            if log.date == day:
                return i
        return None

    def _find_training_set(self, training_set_id: str) -> tuple[int, int]:
        for log_index, log in enumerate(self._training_logs):
            set_index = _index_of(log.sets, training_set_id)
            if set_index is not None:
                return log_index, set_index
        raise NotFoundError("TrainingSet", training_set_id)

    def log_for_day(self, day: date | datetime) -> TrainingLog | None:
        index = self._log_index_for_day(as_day(day))
        return copy.deepcopy(self._training_logs[index]) if index is not None else None

    def days_with_entries(self, year: int, month: int) -> set[date]:
        """Days of a month that have a training log."""
        return {
            log.date
            for log in self._training_logs
            if log.date.year == year and log.date.month == month and log.sets
        }

    def history_for_equipment(self, equipment_id: str) -> list[tuple[date, TrainingSet]]:
        """Every logged entry for an equipment, oldest first."""
        history = [
            (log.date, copy.deepcopy(training_set))
            for log in self._training_logs
            for training_set in log.sets
            if training_set.equipment_id == equipment_id
        ]
        return sorted(history, key=lambda item: item[0])

    def resolve_equipment(self, training_set: TrainingSet) -> Equipment | None:
        """Look up the equipment a logged entry refers to."""
        return self.get_equipment(training_set.equipment_id)

    async def add_training_set(
        self, training_set: TrainingSet, day: date | datetime
    ) -> TrainingLog:
        """Record an entry on ``day``.

        Appends to the day's existing log, or starts a new log for that day.
        If a set beats the equipment's personal record the record is raised
        and saved as a separate write.
        """
        validate_training_set(training_set)
        equipment_index = _index_of(self._equipments, training_set.equipment_id)
        if equipment_index is None:
            raise ValidationError("equipment", f"Unknown equipment {training_set.equipment_id}")

        day = as_day(day)
        log_index = self._log_index_for_day(day)
        if log_index is not None:
            log = self._training_logs[log_index]
            log.sets.append(copy.deepcopy(training_set))
        else:
            log = TrainingLog(date=day, sets=[copy.deepcopy(training_set)])
            self._training_logs.append(log)
        await self.save_training_logs()

        equipment = self._equipments[equipment_index]
        best = training_set.best_weight
        if best is not None and (equipment.pr is None or best > equipment.pr):
            logger.info("New PR for %s: %.2f kg", equipment.name, best)
            equipment.pr = best
            await self.save_equipments()

        return copy.deepcopy(log)

    async def update_training_set(self, training_set: TrainingSet) -> TrainingSet:
        log_index, set_index = self._find_training_set(training_set.id)
        validate_training_set(training_set)
        if not self.has_equipment(training_set.equipment_id):
            raise ValidationError("equipment", f"Unknown equipment {training_set.equipment_id}")

        self._training_logs[log_index].sets[set_index] = copy.deepcopy(training_set)
        await self.save_training_logs()
        return copy.deepcopy(training_set)

    async def delete_training_set(self, training_set_id: str) -> TrainingLog | None:
        """Remove an entry.

        Returns the remaining log for that day, or None when the entry was
        the last one and the now-empty log was removed too.
        """
        log_index, set_index = self._find_training_set(training_set_id)
        log = self._training_logs[log_index]
        log.sets.pop(set_index)

        remaining = None
        if log.sets:
            remaining = copy.deepcopy(log)
        else:
            self._training_logs.pop(log_index)
        await self.save_training_logs()
        return remaining

    async def delete_training_log(self, log_id: str) -> TrainingLog:
        index = _index_of(self._training_logs, log_id)
        if index is None:
            raise NotFoundError("TrainingLog", log_id)

        removed = self._training_logs.pop(index)
        await self.save_training_logs()
        return removed

    # Preferences

    async def set_preferred_weight_unit(self, unit: WeightUnit) -> None:
        self._preferred_weight_unit = WeightUnit(unit)
        await self._write(PREFERRED_WEIGHT_UNIT_KEY, self._preferred_weight_unit.value)

    async def set_last_edited_reps(self, reps: int) -> None:
        self._last_edited_reps = int(reps)
        await self._write(LAST_EDITED_REPS_KEY, self._last_edited_reps)

    async def set_last_used_weight_unit(self, unit: WeightUnit) -> None:
        self._last_used_weight_unit = WeightUnit(unit)
        await self._write(LAST_USED_WEIGHT_UNIT_KEY, self._last_used_weight_unit.value)
