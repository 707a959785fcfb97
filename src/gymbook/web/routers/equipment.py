"""Equipment catalog routes."""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import FileResponse, Response

from ...errors import NotFoundError, ValidationError
from ...models.equipment import Equipment
from ...models.muscle import normalize_name
from ...models.units import WeightUnit, convert_weight, to_kilograms
from ...storage.images import ImageLoader, ImageStore
from ...store import FitnessStore
from ..deps import get_images, get_loader, get_store
from ..images import encode_jpeg
from ..schemas import EquipmentIn

router = APIRouter(prefix="/equipment", tags=["equipment"])


def _equipment_out(store: FitnessStore, item: Equipment, unit: WeightUnit) -> dict:
    """Equipment with its muscle references resolved for display."""
    data = item.to_dict()
    muscle = store.muscle_for(item)
    sub = muscle.get_sub_muscle(item.sub_muscle_id) if muscle and item.sub_muscle_id else None
    data["muscle"] = muscle.name if muscle else None
    data["sub_muscle"] = sub.name if sub else None
    data["unit"] = unit.value
    data["pr_display"] = convert_weight(item.pr, unit) if item.pr is not None else None
    return data


def _from_body(body: EquipmentIn, **kwargs) -> Equipment:
    return Equipment(
        name=body.name.strip(),
        muscle_id=body.muscle_id,
        sub_muscle_id=body.sub_muscle_id,
        location=body.location.strip(),
        pr=to_kilograms(body.pr, body.unit) if body.pr is not None else None,
        **kwargs,
    )


def _require(store: FitnessStore, equipment_id: str) -> Equipment:
    item = store.get_equipment(equipment_id)
    if item is None:
        raise NotFoundError("Equipment", equipment_id)
    return item


@router.get("")
async def list_equipment(
    location: str | None = None,
    unit: WeightUnit | None = None,
    store: FitnessStore = Depends(get_store),
):
    unit = unit or store.preferred_weight_unit
    items = store.equipments
    if location:
        items = [e for e in items if normalize_name(e.location) == normalize_name(location)]
    return [_equipment_out(store, e, unit) for e in items]


@router.post("", status_code=201)
async def create_equipment(body: EquipmentIn, store: FitnessStore = Depends(get_store)):
    item = await store.add_equipment(_from_body(body))
    return _equipment_out(store, item, store.preferred_weight_unit)


@router.get("/{equipment_id}")
async def get_equipment(
    equipment_id: str,
    unit: WeightUnit | None = None,
    store: FitnessStore = Depends(get_store),
):
    item = _require(store, equipment_id)
    return _equipment_out(store, item, unit or store.preferred_weight_unit)


@router.put("/{equipment_id}")
async def update_equipment(
    equipment_id: str, body: EquipmentIn, store: FitnessStore = Depends(get_store)
):
    current = _require(store, equipment_id)
    item = await store.update_equipment(
        _from_body(body, id=equipment_id, image_name=current.image_name)
    )
    return _equipment_out(store, item, store.preferred_weight_unit)


@router.delete("/{equipment_id}", status_code=204)
async def delete_equipment(
    equipment_id: str,
    store: FitnessStore = Depends(get_store),
    images: ImageStore = Depends(get_images),
    loader: ImageLoader = Depends(get_loader),
):
    removed = await store.delete_equipment(equipment_id)
    loader.forget(equipment_id)
    if removed.image_name:
        images.delete(removed.image_name)


@router.get("/{equipment_id}/history")
async def equipment_history(
    equipment_id: str,
    unit: WeightUnit | None = None,
    store: FitnessStore = Depends(get_store),
):
    _require(store, equipment_id)
    unit = unit or store.preferred_weight_unit
    return [
        {
            "date": day.isoformat(),
            "id": training_set.id,
            "sets": [
                {**info.to_dict(), "weight_display": convert_weight(info.weight, unit)}
                for info in training_set.sets
            ],
        }
        for day, training_set in store.history_for_equipment(equipment_id)
    ]


@router.put("/{equipment_id}/image")
async def upload_image(
    equipment_id: str,
    request: Request,
    store: FitnessStore = Depends(get_store),
    images: ImageStore = Depends(get_images),
):
    """Replace the photo with the raw image bytes in the request body."""
    item = _require(store, equipment_id)
    try:
        name = images.import_bytes(await request.body())
    except ValueError as e:
        raise ValidationError("image", str(e)) from e

    previous = item.image_name
    item.image_name = name
    try:
        await store.update_equipment(item)
    except (ValidationError, NotFoundError):
        images.delete(name)
        raise
    if previous:
        images.delete(previous)
    return {"image_name": name}


@router.get("/{equipment_id}/image")
async def get_image(
    equipment_id: str,
    store: FitnessStore = Depends(get_store),
    images: ImageStore = Depends(get_images),
):
    item = _require(store, equipment_id)
    if not item.image_name or not images.exists(item.image_name):
        raise HTTPException(status_code=404, detail="No image")
    return FileResponse(images.path(item.image_name), media_type="image/jpeg")


@router.get("/{equipment_id}/thumbnail")
async def get_thumbnail(
    equipment_id: str,
    store: FitnessStore = Depends(get_store),
    loader: ImageLoader = Depends(get_loader),
):
    """Downscaled photo, decoded in a worker thread."""
    item = _require(store, equipment_id)
    img = await loader.load(equipment_id, item.image_name)
    if img is None:
        raise HTTPException(status_code=404, detail="No image")
    return Response(content=encode_jpeg(img), media_type="image/jpeg")
