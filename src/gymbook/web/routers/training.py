"""Training log routes."""

from datetime import date

from fastapi import APIRouter, Depends

from ...errors import NotFoundError
from ...models.training import SetInfo, TrainingLog, TrainingSet
from ...models.units import WeightUnit, convert_weight
from ...store import FitnessStore
from ..deps import get_store
from ..schemas import TrainingSetIn

router = APIRouter(prefix="/logs", tags=["logs"])


def _log_out(store: FitnessStore, log: TrainingLog, unit: WeightUnit) -> dict:
    entries = []
    for training_set in log.sets:
        item = store.resolve_equipment(training_set)
        entries.append({
            "id": training_set.id,
            "equipment_id": training_set.equipment_id,
            "equipment": item.name if item else None,
            "sets": [
                {**info.to_dict(), "weight_display": convert_weight(info.weight, unit)}
                for info in training_set.sets
            ],
        })
    return {
        "id": log.id,
        "date": log.date.isoformat(),
        "unit": unit.value,
        "total_volume": convert_weight(log.total_volume, unit),
        "sets": entries,
    }


def _to_training_set(body: TrainingSetIn, **kwargs) -> TrainingSet:
    return TrainingSet(
        equipment_id=body.equipment_id,
        sets=[SetInfo.from_input(s.reps, s.weight, body.unit, s.time) for s in body.sets],
        **kwargs,
    )


@router.get("/{day}")
async def get_log(
    day: date,
    unit: WeightUnit | None = None,
    store: FitnessStore = Depends(get_store),
):
    log = store.log_for_day(day)
    if log is None:
        raise NotFoundError("TrainingLog", day.isoformat())
    return _log_out(store, log, unit or store.preferred_weight_unit)


@router.post("/{day}/sets", status_code=201)
async def add_training_set(
    day: date, body: TrainingSetIn, store: FitnessStore = Depends(get_store)
):
    """Log sets on a day, creating the day's log if needed."""
    log = await store.add_training_set(_to_training_set(body), day)
    return _log_out(store, log, store.preferred_weight_unit)


@router.put("/sets/{training_set_id}")
async def update_training_set(
    training_set_id: str, body: TrainingSetIn, store: FitnessStore = Depends(get_store)
):
    training_set = await store.update_training_set(
        _to_training_set(body, id=training_set_id)
    )
    return training_set.to_dict()


@router.delete("/sets/{training_set_id}")
async def delete_training_set(training_set_id: str, store: FitnessStore = Depends(get_store)):
    remaining = await store.delete_training_set(training_set_id)
    return {"log_removed": remaining is None}
