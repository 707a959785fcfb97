"""Preference routes."""

from fastapi import APIRouter, Depends

from ...store import FitnessStore
from ..deps import get_store
from ..schemas import PreferencesIn

router = APIRouter(prefix="/preferences", tags=["preferences"])


def _preferences(store: FitnessStore) -> dict:
    last_unit = store.last_used_weight_unit
    return {
        "preferred_weight_unit": store.preferred_weight_unit.value,
        "last_used_weight_unit": last_unit.value if last_unit else None,
        "last_edited_reps": store.last_edited_reps,
    }


@router.get("")
async def get_preferences(store: FitnessStore = Depends(get_store)):
    return _preferences(store)


@router.put("")
async def update_preferences(body: PreferencesIn, store: FitnessStore = Depends(get_store)):
    await store.set_preferred_weight_unit(body.preferred_weight_unit)
    return _preferences(store)
