"""Location routes."""

from fastapi import APIRouter, Depends

from ...store import FitnessStore
from ..deps import get_store
from ..schemas import LocationIn

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get("")
async def list_locations(store: FitnessStore = Depends(get_store)):
    return list(store.locations)


@router.post("", status_code=201)
async def create_location(body: LocationIn, store: FitnessStore = Depends(get_store)):
    return {"name": await store.add_location(body.name)}


@router.put("/{name}")
async def rename_location(name: str, body: LocationIn, store: FitnessStore = Depends(get_store)):
    return {"name": await store.rename_location(name, body.name)}


@router.delete("/{name}", status_code=204)
async def delete_location(name: str, store: FitnessStore = Depends(get_store)):
    await store.delete_location(name)
