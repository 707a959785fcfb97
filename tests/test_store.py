"""Tests for the fitness store."""

import json
from datetime import date, datetime

import pytest
import pytest_asyncio

from gymbook.errors import NotFoundError, ValidationError
from gymbook.models.equipment import Equipment
from gymbook.models.muscle import Muscle, SubMuscle
from gymbook.models.training import SetInfo, TrainingSet
from gymbook.models.units import WeightUnit
from gymbook.storage.kv import MemoryKeyValueStore
from gymbook.store import (
    EQUIPMENTS_KEY,
    LOCATIONS_KEY,
    MUSCLES_KEY,
    PREFERRED_WEIGHT_UNIT_KEY,
    TRAINING_LOGS_KEY,
    FitnessStore,
)


class FailingKeyValueStore(MemoryKeyValueStore):
    """Backend whose writes always fail."""

    async def set(self, key: str, value: bytes) -> None:
        raise OSError("disk full")


def _entry(equipment: Equipment, *weights: float, reps: int = 10) -> TrainingSet:
    return TrainingSet(
        equipment_id=equipment.id,
        sets=[SetInfo(reps=reps, weight=w) for w in weights],
    )


@pytest_asyncio.fixture
async def stocked(store, chest, bench_press):
    """A store holding the chest muscle and the bench press."""
    await store.add_muscle(chest)
    await store.add_equipment(bench_press)
    return store


class TestLoad:
    """Tests for loading from storage."""

    @pytest.mark.asyncio
    async def test_empty_storage(self, store):
        await store.load()
        assert store.muscles == ()
        assert store.equipments == ()
        assert store.training_logs == ()
        assert store.locations == ()
        assert store.preferred_weight_unit == WeightUnit.KG

    @pytest.mark.asyncio
    async def test_reload_round_trip(self, kv, stocked, bench_press):
        await stocked.add_training_set(_entry(bench_press, 60.0), date(2026, 10, 19))

        reloaded = FitnessStore(kv)
        await reloaded.load()
        assert reloaded.equipments == stocked.equipments
        assert reloaded.muscles == stocked.muscles
        assert reloaded.training_logs == stocked.training_logs

    @pytest.mark.asyncio
    async def test_corrupt_key_loads_empty(self, kv, stocked):
        kv.data[EQUIPMENTS_KEY] = b"{not json"

        reloaded = FitnessStore(kv)
        await reloaded.load()
        assert reloaded.equipments == ()
        assert len(reloaded.muscles) == 1

    @pytest.mark.asyncio
    async def test_wrong_shape_loads_empty(self, kv):
        kv.data[MUSCLES_KEY] = json.dumps({"name": "Chest"}).encode()
        kv.data[TRAINING_LOGS_KEY] = json.dumps([{"sets": []}]).encode()

        store = FitnessStore(kv)
        await store.load()
        assert store.muscles == ()
        assert store.training_logs == ()

    @pytest.mark.asyncio
    async def test_non_string_locations_load_empty(self, kv):
        kv.data[LOCATIONS_KEY] = json.dumps(["Home Gym", {}]).encode()

        store = FitnessStore(kv)
        await store.load()
        assert store.locations == ()

    @pytest.mark.asyncio
    async def test_snapshot_is_json_list(self, kv, stocked, bench_press):
        data = json.loads(kv.data[EQUIPMENTS_KEY])
        assert data == [bench_press.to_dict()]

    @pytest.mark.asyncio
    async def test_write_failure_keeps_memory_state(self, chest):
        store = FitnessStore(FailingKeyValueStore())
        await store.add_muscle(chest)
        assert [m.name for m in store.muscles] == ["Chest"]


class TestMuscles:
    """Tests for muscle operations."""

    @pytest.mark.asyncio
    async def test_duplicate_name_rejected(self, store, chest):
        await store.add_muscle(chest)
        with pytest.raises(ValidationError) as exc_info:
            await store.add_muscle(Muscle(name="  chest "))
        assert exc_info.value.field == "name"

    @pytest.mark.asyncio
    async def test_invalid_color_rejected(self, store):
        with pytest.raises(ValidationError):
            await store.add_muscle(Muscle(name="Legs", color="red"))
        assert store.muscles == ()

    @pytest.mark.asyncio
    async def test_update(self, store, chest):
        await store.add_muscle(chest)
        chest.name = "Pecs"
        await store.update_muscle(chest)
        assert store.get_muscle(chest.id).name == "Pecs"

    @pytest.mark.asyncio
    async def test_update_unknown_raises(self, store):
        with pytest.raises(NotFoundError):
            await store.update_muscle(Muscle(name="Ghost"))

    @pytest.mark.asyncio
    async def test_returned_copies_are_detached(self, store, chest):
        await store.add_muscle(chest)
        copy = store.get_muscle(chest.id)
        copy.name = "Changed"
        assert store.get_muscle(chest.id).name == "Chest"

    @pytest.mark.asyncio
    async def test_sub_muscles(self, store, chest):
        await store.add_muscle(chest)
        sub = await store.add_sub_muscle(chest.id, SubMuscle(name="Mid Chest"))
        assert len(store.get_muscle(chest.id).sub_muscles) == 3

        with pytest.raises(ValidationError):
            await store.add_sub_muscle(chest.id, SubMuscle(name="mid chest"))

        await store.delete_sub_muscle(chest.id, sub.id)
        assert len(store.get_muscle(chest.id).sub_muscles) == 2

        with pytest.raises(NotFoundError):
            await store.delete_sub_muscle(chest.id, sub.id)

    @pytest.mark.asyncio
    async def test_delete_leaves_equipment_reference(self, stocked, chest, bench_press):
        await stocked.delete_muscle(chest.id)
        equipment = stocked.get_equipment(bench_press.id)
        assert equipment.muscle_id == chest.id
        assert stocked.muscle_for(equipment) is None

    @pytest.mark.asyncio
    async def test_seed_defaults_only_when_empty(self, store, chest):
        assert await store.seed_default_muscles() == 2
        assert await store.seed_default_muscles() == 0

        other = FitnessStore(MemoryKeyValueStore())
        await other.add_muscle(chest)
        assert await other.seed_default_muscles() == 0


class TestEquipment:
    """Tests for equipment operations."""

    @pytest.mark.asyncio
    async def test_add_and_get(self, stocked, bench_press):
        assert stocked.get_equipment(bench_press.id) == bench_press
        assert stocked.has_equipment(bench_press.id)

    @pytest.mark.asyncio
    async def test_unknown_muscle_rejected(self, store):
        with pytest.raises(ValidationError) as exc_info:
            await store.add_equipment(Equipment(name="Row", muscle_id="nope"))
        assert exc_info.value.field == "muscle"

    @pytest.mark.asyncio
    async def test_foreign_sub_muscle_rejected(self, stocked, chest):
        back = Muscle(name="Back", sub_muscles=[SubMuscle(name="Lats")])
        await stocked.add_muscle(back)
        with pytest.raises(ValidationError) as exc_info:
            await stocked.add_equipment(
                Equipment(name="Fly", muscle_id=chest.id, sub_muscle_id=back.sub_muscles[0].id)
            )
        assert exc_info.value.field == "sub_muscle"

    @pytest.mark.asyncio
    async def test_empty_name_rejected(self, store):
        with pytest.raises(ValidationError):
            await store.add_equipment(Equipment(name="   "))

    @pytest.mark.asyncio
    async def test_update_unknown_raises(self, store):
        with pytest.raises(NotFoundError):
            await store.update_equipment(Equipment(name="Ghost"))

    @pytest.mark.asyncio
    async def test_update_after_muscle_deleted(self, stocked, chest, bench_press):
        await stocked.delete_muscle(chest.id)
        bench_press.name = "Flat Bench"
        bench_press.image_name = "photo.jpg"

        updated = await stocked.update_equipment(bench_press)
        assert updated.name == "Flat Bench"
        assert updated.muscle_id == chest.id

    @pytest.mark.asyncio
    async def test_update_after_sub_muscle_deleted(self, stocked, chest, bench_press):
        await stocked.delete_sub_muscle(chest.id, bench_press.sub_muscle_id)
        bench_press.location = "Garage"
        await stocked.update_equipment(bench_press)
        assert stocked.get_equipment(bench_press.id).location == "Garage"

    @pytest.mark.asyncio
    async def test_update_to_unknown_muscle_rejected(self, stocked, bench_press):
        bench_press.muscle_id = "nope"
        bench_press.sub_muscle_id = None
        with pytest.raises(ValidationError) as exc_info:
            await stocked.update_equipment(bench_press)
        assert exc_info.value.field == "muscle"

    @pytest.mark.asyncio
    async def test_update_to_foreign_sub_muscle_rejected(self, stocked, chest, bench_press):
        back = Muscle(name="Back", sub_muscles=[SubMuscle(name="Lats")])
        await stocked.add_muscle(back)
        bench_press.sub_muscle_id = back.sub_muscles[0].id
        with pytest.raises(ValidationError) as exc_info:
            await stocked.update_equipment(bench_press)
        assert exc_info.value.field == "sub_muscle"

    @pytest.mark.asyncio
    async def test_delete(self, stocked, bench_press):
        removed = await stocked.delete_equipment(bench_press.id)
        assert removed.id == bench_press.id
        assert not stocked.has_equipment(bench_press.id)

        with pytest.raises(NotFoundError):
            await stocked.delete_equipment(bench_press.id)


class TestLocations:
    """Tests for location operations."""

    @pytest.mark.asyncio
    async def test_add_rename_delete(self, store):
        await store.add_location(" Home Gym ")
        assert store.locations == ("Home Gym",)

        with pytest.raises(ValidationError):
            await store.add_location("home  gym")

        await store.rename_location("home gym", "Garage")
        assert store.locations == ("Garage",)

        await store.delete_location("Garage")
        assert store.locations == ()

    @pytest.mark.asyncio
    async def test_unknown_location(self, store):
        with pytest.raises(NotFoundError):
            await store.delete_location("Nowhere")
        with pytest.raises(NotFoundError):
            await store.rename_location("Nowhere", "Somewhere")

    @pytest.mark.asyncio
    async def test_persisted(self, kv, store):
        await store.add_location("Office")
        reloaded = FitnessStore(kv)
        await reloaded.load()
        assert reloaded.locations == ("Office",)


class TestTrainingLogs:
    """Tests for training log operations."""

    @pytest.mark.asyncio
    async def test_first_set_creates_log(self, stocked, bench_press):
        log = await stocked.add_training_set(_entry(bench_press, 60.0), date(2026, 10, 19))
        assert log.date == date(2026, 10, 19)
        assert len(log.sets) == 1
        assert len(stocked.training_logs) == 1

    @pytest.mark.asyncio
    async def test_same_day_appends(self, stocked, bench_press):
        await stocked.add_training_set(_entry(bench_press, 60.0), datetime(2026, 10, 19, 8, 0))
        log = await stocked.add_training_set(
            _entry(bench_press, 62.5), datetime(2026, 10, 19, 19, 30)
        )
        assert len(stocked.training_logs) == 1
        assert len(log.sets) == 2

    @pytest.mark.asyncio
    async def test_other_day_creates_second_log(self, stocked, bench_press):
        await stocked.add_training_set(_entry(bench_press, 60.0), date(2026, 10, 19))
        await stocked.add_training_set(_entry(bench_press, 60.0), date(2026, 10, 20))
        assert len(stocked.training_logs) == 2

    @pytest.mark.asyncio
    async def test_unknown_equipment_rejected(self, store):
        with pytest.raises(ValidationError) as exc_info:
            await store.add_training_set(
                TrainingSet(equipment_id="nope", sets=[SetInfo(reps=5, weight=20.0)]),
                date(2026, 10, 19),
            )
        assert exc_info.value.field == "equipment"
        assert store.training_logs == ()

    @pytest.mark.asyncio
    async def test_invalid_weight_rejected(self, stocked, bench_press):
        with pytest.raises(ValidationError) as exc_info:
            await stocked.add_training_set(_entry(bench_press, 0.0), date(2026, 10, 19))
        assert exc_info.value.field == "weight"
        assert stocked.training_logs == ()

    @pytest.mark.asyncio
    async def test_deleting_only_set_removes_log(self, stocked, bench_press):
        log = await stocked.add_training_set(_entry(bench_press, 60.0), date(2026, 10, 19))
        remaining = await stocked.delete_training_set(log.sets[0].id)
        assert remaining is None
        assert stocked.training_logs == ()
        assert stocked.log_for_day(date(2026, 10, 19)) is None

    @pytest.mark.asyncio
    async def test_deleting_one_of_several_keeps_log(self, stocked, bench_press):
        await stocked.add_training_set(_entry(bench_press, 60.0), date(2026, 10, 19))
        log = await stocked.add_training_set(_entry(bench_press, 65.0), date(2026, 10, 19))

        remaining = await stocked.delete_training_set(log.sets[0].id)
        assert remaining is not None
        assert [ts.id for ts in remaining.sets] == [log.sets[1].id]

    @pytest.mark.asyncio
    async def test_delete_unknown_set_raises(self, store):
        with pytest.raises(NotFoundError):
            await store.delete_training_set("missing")

    @pytest.mark.asyncio
    async def test_update_set(self, stocked, bench_press):
        log = await stocked.add_training_set(_entry(bench_press, 60.0), date(2026, 10, 19))
        entry = log.sets[0]
        entry.sets.append(SetInfo(reps=8, weight=65.0))
        await stocked.update_training_set(entry)
        assert len(stocked.log_for_day(date(2026, 10, 19)).sets[0].sets) == 2

    @pytest.mark.asyncio
    async def test_update_unknown_set_raises(self, stocked, bench_press):
        with pytest.raises(NotFoundError):
            await stocked.update_training_set(_entry(bench_press, 60.0))

    @pytest.mark.asyncio
    async def test_delete_log(self, stocked, bench_press):
        log = await stocked.add_training_set(_entry(bench_press, 60.0), date(2026, 10, 19))
        await stocked.delete_training_log(log.id)
        assert stocked.training_logs == ()
        with pytest.raises(NotFoundError):
            await stocked.delete_training_log(log.id)

    @pytest.mark.asyncio
    async def test_days_with_entries(self, stocked, bench_press):
        for day in (date(2026, 10, 1), date(2026, 10, 19), date(2026, 11, 2)):
            await stocked.add_training_set(_entry(bench_press, 60.0), day)
        assert stocked.days_with_entries(2026, 10) == {date(2026, 10, 1), date(2026, 10, 19)}
        assert stocked.days_with_entries(2026, 9) == set()

    @pytest.mark.asyncio
    async def test_history_is_oldest_first(self, stocked, bench_press):
        await stocked.add_training_set(_entry(bench_press, 65.0), date(2026, 10, 19))
        await stocked.add_training_set(_entry(bench_press, 60.0), date(2026, 10, 5))
        history = stocked.history_for_equipment(bench_press.id)
        assert [day for day, _ in history] == [date(2026, 10, 5), date(2026, 10, 19)]

    @pytest.mark.asyncio
    async def test_deleted_equipment_resolves_to_none(self, stocked, bench_press):
        log = await stocked.add_training_set(_entry(bench_press, 60.0), date(2026, 10, 19))
        await stocked.delete_equipment(bench_press.id)
        assert stocked.resolve_equipment(log.sets[0]) is None


class TestPersonalRecord:
    """Tests for automatic PR tracking."""

    @pytest.mark.asyncio
    async def test_first_set_sets_pr(self, stocked, bench_press):
        await stocked.add_training_set(_entry(bench_press, 60.0, 70.0), date(2026, 10, 19))
        assert stocked.get_equipment(bench_press.id).pr == 70.0

    @pytest.mark.asyncio
    async def test_lighter_set_keeps_pr(self, stocked, bench_press):
        await stocked.add_training_set(_entry(bench_press, 80.0), date(2026, 10, 19))
        await stocked.add_training_set(_entry(bench_press, 70.0), date(2026, 10, 20))
        assert stocked.get_equipment(bench_press.id).pr == 80.0

    @pytest.mark.asyncio
    async def test_pr_is_persisted(self, kv, stocked, bench_press):
        await stocked.add_training_set(_entry(bench_press, 90.0), date(2026, 10, 19))
        data = json.loads(kv.data[EQUIPMENTS_KEY])
        assert data[0]["pr"] == 90.0


class TestPreferences:
    """Tests for stored preferences."""

    @pytest.mark.asyncio
    async def test_round_trip(self, kv, store):
        await store.set_preferred_weight_unit(WeightUnit.LB)
        await store.set_last_edited_reps(12)
        await store.set_last_used_weight_unit("lb")

        reloaded = FitnessStore(kv)
        await reloaded.load()
        assert reloaded.preferred_weight_unit == WeightUnit.LB
        assert reloaded.last_edited_reps == 12
        assert reloaded.last_used_weight_unit == WeightUnit.LB

    @pytest.mark.asyncio
    async def test_unknown_unit_falls_back_to_default(self, kv):
        kv.data[PREFERRED_WEIGHT_UNIT_KEY] = b'"stone"'
        store = FitnessStore(kv, default_weight_unit=WeightUnit.LB)
        await store.load()
        assert store.preferred_weight_unit == WeightUnit.LB
