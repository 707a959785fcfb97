"""Muscle taxonomy routes."""

from fastapi import APIRouter, Depends

from ...models.muscle import Muscle, SubMuscle
from ...store import FitnessStore
from ..deps import get_store
from ..schemas import MuscleIn, SubMuscleIn

router = APIRouter(prefix="/muscles", tags=["muscles"])


@router.get("")
async def list_muscles(store: FitnessStore = Depends(get_store)):
    return [m.to_dict() for m in store.muscles]


@router.post("", status_code=201)
async def create_muscle(body: MuscleIn, store: FitnessStore = Depends(get_store)):
    muscle = Muscle(
        name=body.name.strip(),
        color=body.color,
        sub_muscles=[SubMuscle(name=s.name.strip(), color=s.color) for s in body.sub_muscles],
    )
    return (await store.add_muscle(muscle)).to_dict()


@router.put("/{muscle_id}")
async def update_muscle(
    muscle_id: str, body: MuscleIn, store: FitnessStore = Depends(get_store)
):
    """Rename or recolor a muscle. Sub-muscles are managed separately."""
    current = store.get_muscle(muscle_id)
    muscle = Muscle(
        id=muscle_id,
        name=body.name.strip(),
        color=body.color,
        sub_muscles=current.sub_muscles if current else [],
    )
    return (await store.update_muscle(muscle)).to_dict()


@router.delete("/{muscle_id}", status_code=204)
async def delete_muscle(muscle_id: str, store: FitnessStore = Depends(get_store)):
    await store.delete_muscle(muscle_id)


@router.post("/{muscle_id}/sub-muscles", status_code=201)
async def create_sub_muscle(
    muscle_id: str, body: SubMuscleIn, store: FitnessStore = Depends(get_store)
):
    sub = await store.add_sub_muscle(
        muscle_id, SubMuscle(name=body.name.strip(), color=body.color)
    )
    return sub.to_dict()


@router.delete("/{muscle_id}/sub-muscles/{sub_muscle_id}", status_code=204)
async def delete_sub_muscle(
    muscle_id: str, sub_muscle_id: str, store: FitnessStore = Depends(get_store)
):
    await store.delete_sub_muscle(muscle_id, sub_muscle_id)
