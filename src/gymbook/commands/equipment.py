"""Equipment catalog commands."""

from pathlib import Path

import click

from ..errors import NotFoundError, ValidationError
from ..models.equipment import Equipment
from ..models.muscle import Muscle, normalize_name
from ..models.units import WeightUnit, format_weight, to_kilograms
from .base import (
    async_command,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_table,
    get_image_store,
    open_store,
    resolve_equipment,
    resolve_muscle,
    short_id,
)


def _resolve_sub_muscle_id(muscle: Muscle, ref: str) -> str:
    key = normalize_name(ref)
    for sub in muscle.sub_muscles:
        if sub.id.startswith(ref) or normalize_name(sub.name) == key:
            return sub.id
    raise ValidationError("sub_muscle", f"'{ref}' is not a sub-muscle of {muscle.name}")


def _import_image(ctx: click.Context, path: Path) -> str:
    try:
        return get_image_store(ctx).import_file(path)
    except ValueError as e:
        raise ValidationError("image", str(e)) from e


def _warn_unknown_location(location: str | None, known: tuple[str, ...]) -> None:
    if location and normalize_name(location) not in {normalize_name(k) for k in known}:
        echo_warning(f"'{location}' is not in your locations list")


@click.group()
@click.pass_context
def equipment(ctx):
    """Manage the equipment catalog.

    Equipment is classified by muscle group and sub-muscle, and can carry a
    location, a personal record and a photo.
    """
    ensure_initialized(ctx)


@equipment.command(name="list")
@click.option("--location", help="Only show equipment at this location")
@click.pass_context
@async_command
async def list_equipment(ctx, location: str | None):
    """List equipment."""
    store = await open_store(ctx)
    unit = store.preferred_weight_unit

    items = list(store.equipments)
    if location:
        items = [e for e in items if normalize_name(e.location) == normalize_name(location)]

    if not items:
        echo_info("No equipment found. Add some with 'gymbook equipment add'")
        return

    rows = []
    for item in items:
        muscle = store.muscle_for(item)
        sub = muscle.get_sub_muscle(item.sub_muscle_id) if muscle and item.sub_muscle_id else None
        rows.append([
            short_id(item.id),
            item.name,
            muscle.name if muscle else "-",
            sub.name if sub else "-",
            item.location or "-",
            format_weight(item.pr, unit) if item.pr is not None else "-",
            "yes" if item.image_name else "",
        ])

    click.echo()
    click.echo(format_table(["ID", "Name", "Muscle", "Sub", "Location", "PR", "Photo"], rows))
    click.echo()
    click.echo(f"Total: {len(items)} item(s)")


@equipment.command(name="show")
@click.argument("equipment_ref")
@click.pass_context
@async_command
async def show_equipment(ctx, equipment_ref: str):
    """Show one piece of equipment and its history."""
    store = await open_store(ctx)
    item = resolve_equipment(store, equipment_ref)
    unit = store.preferred_weight_unit

    click.echo()
    click.echo(item.get_summary(store.muscle_for(item), unit))

    history = store.history_for_equipment(item.id)
    if history:
        click.echo()
        click.echo(click.style("History:", bold=True))
        for day, training_set in history:
            for info in training_set.sets:
                click.echo(f"  {day.isoformat()}  {info.get_display(unit)}")


@equipment.command(name="add")
@click.argument("name")
@click.option("--muscle", "muscle_ref", help="Muscle group (name or id)")
@click.option("--sub", "sub_ref", help="Sub-muscle (name or id)")
@click.option("--location", default="", help="Where the equipment is")
@click.option("--pr", type=float, help="Personal record weight")
@click.option("--unit", type=click.Choice([u.value for u in WeightUnit]), help="Unit of --pr")
@click.option("--image", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Photo")
@click.pass_context
@async_command
async def add_equipment(
    ctx,
    name: str,
    muscle_ref: str | None,
    sub_ref: str | None,
    location: str,
    pr: float | None,
    unit: str | None,
    image: Path | None,
):
    """Add a piece of equipment."""
    store = await open_store(ctx)
    unit = WeightUnit(unit) if unit else store.preferred_weight_unit

    item = Equipment(name=name.strip(), location=location.strip())
    if muscle_ref:
        muscle = resolve_muscle(store, muscle_ref)
        item.muscle_id = muscle.id
        if sub_ref:
            item.sub_muscle_id = _resolve_sub_muscle_id(muscle, sub_ref)
    elif sub_ref:
        raise ValidationError("muscle", "Choose a muscle before a sub-muscle")
    if pr is not None:
        item.pr = to_kilograms(pr, unit)

    if image:
        item.image_name = _import_image(ctx, image)

    _warn_unknown_location(item.location, store.locations)
    try:
        item = await store.add_equipment(item)
    except ValidationError:
        if item.image_name:
            get_image_store(ctx).delete(item.image_name)
        raise
    echo_success(f"Added '{item.name}' ({short_id(item.id)})")


@equipment.command(name="edit")
@click.argument("equipment_ref")
@click.option("--name", help="New name")
@click.option("--muscle", "muscle_ref", help="Muscle group (name or id)")
@click.option("--sub", "sub_ref", help="Sub-muscle (name or id)")
@click.option("--location", help="Where the equipment is")
@click.option("--pr", type=float, help="Personal record weight")
@click.option("--unit", type=click.Choice([u.value for u in WeightUnit]), help="Unit of --pr")
@click.option("--clear-pr", is_flag=True, help="Remove the personal record")
@click.pass_context
@async_command
async def edit_equipment(
    ctx,
    equipment_ref: str,
    name: str | None,
    muscle_ref: str | None,
    sub_ref: str | None,
    location: str | None,
    pr: float | None,
    unit: str | None,
    clear_pr: bool,
):
    """Edit a piece of equipment."""
    store = await open_store(ctx)
    item = resolve_equipment(store, equipment_ref)
    unit = WeightUnit(unit) if unit else store.preferred_weight_unit

    if name is not None:
        item.name = name.strip()
    if muscle_ref:
        muscle = resolve_muscle(store, muscle_ref)
        if muscle.id != item.muscle_id:
            item.muscle_id = muscle.id
            item.sub_muscle_id = None
    if sub_ref:
        muscle = store.muscle_for(item)
        if muscle is None:
            raise ValidationError("muscle", "Choose a muscle before a sub-muscle")
        item.sub_muscle_id = _resolve_sub_muscle_id(muscle, sub_ref)
    if location is not None:
        item.location = location.strip()
        _warn_unknown_location(item.location, store.locations)
    if clear_pr:
        item.pr = None
    elif pr is not None:
        item.pr = to_kilograms(pr, unit)

    await store.update_equipment(item)
    echo_success(f"Updated '{item.name}'")


@equipment.command(name="set-image")
@click.argument("equipment_ref")
@click.argument("image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
@async_command
async def set_image(ctx, equipment_ref: str, image: Path):
    """Attach or replace an equipment photo."""
    store = await open_store(ctx)
    item = resolve_equipment(store, equipment_ref)
    images = get_image_store(ctx)

    previous = item.image_name
    item.image_name = _import_image(ctx, image)
    try:
        await store.update_equipment(item)
    except (ValidationError, NotFoundError):
        images.delete(item.image_name)
        raise
    if previous:
        images.delete(previous)
    echo_success(f"Photo saved for '{item.name}'")


@equipment.command(name="delete")
@click.argument("equipment_ref")
@click.confirmation_option(prompt="Delete this equipment?")
@click.pass_context
@async_command
async def delete_equipment(ctx, equipment_ref: str):
    """Delete a piece of equipment and its photo."""
    store = await open_store(ctx)
    try:
        item = resolve_equipment(store, equipment_ref)
    except NotFoundError:
        echo_warning(f"No equipment matches '{equipment_ref}'")
        ctx.exit(1)

    removed = await store.delete_equipment(item.id)
    if removed.image_name:
        get_image_store(ctx).delete(removed.image_name)
    echo_success(f"Deleted '{removed.name}'")
