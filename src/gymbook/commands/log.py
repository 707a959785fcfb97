"""Training log commands."""

import re
from datetime import date, datetime

import click
import questionary

from ..errors import NotFoundError, ValidationError
from ..models.training import SetInfo, TrainingSet
from ..models.units import WeightUnit, format_weight
from ..utils.dates import minutes_of_day, parse_minutes
from .base import (
    async_command,
    echo_info,
    echo_success,
    ensure_initialized,
    open_store,
    resolve_equipment,
    short_id,
)

SET_SPEC = re.compile(r"^\s*(\d+)\s*[xX*@]\s*(\d+(?:\.\d+)?)\s*$")


def parse_set_spec(spec: str) -> tuple[int, float]:
    """Parse ``REPSxWEIGHT`` (e.g. ``10x62.5``) into reps and weight."""
    match = SET_SPEC.match(spec)
    if not match:
        raise ValidationError("set", f"Invalid set '{spec}', expected REPSxWEIGHT")
    return int(match.group(1)), float(match.group(2))


@click.group()
@click.pass_context
def log(ctx):
    """Record and review training sets."""
    ensure_initialized(ctx)


@log.command(name="add")
@click.option("--date", "day", type=click.DateTime(formats=["%Y-%m-%d"]), help="Day (default: today)")
@click.option("--equipment", "-e", "equipment_ref", help="Equipment (name or id)")
@click.option("--set", "-s", "set_specs", multiple=True, help="REPSxWEIGHT, repeatable")
@click.option("--unit", type=click.Choice([u.value for u in WeightUnit]), help="Unit of the weights")
@click.option("--time", "time_str", help="Time of day HH:MM (default: now)")
@click.pass_context
@async_command
async def add_entry(
    ctx,
    day: datetime | None,
    equipment_ref: str | None,
    set_specs: tuple[str, ...],
    unit: str | None,
    time_str: str | None,
):
    """Log sets on one piece of equipment.

    Examples:

        # Three sets on the bench today
        gymbook log add -e "Bench Press" -s 10x60 -s 8x65 -s 6x70

        # Back-fill a day, in pounds
        gymbook log add --date 2026-10-01 -e Squat -s 5x225 --unit lb
    """
    store = await open_store(ctx)
    if not store.equipments:
        raise ValidationError("equipment", "Add equipment before logging sets")

    if equipment_ref:
        item = resolve_equipment(store, equipment_ref)
    else:
        equipment_id = await questionary.select(
            "Equipment",
            choices=[questionary.Choice(e.name, e.id) for e in store.equipments],
        ).ask_async()
        if equipment_id is None:
            raise ValidationError("equipment", "Select a piece of equipment")
        item = store.get_equipment(equipment_id)

    unit = WeightUnit(unit) if unit else (store.last_used_weight_unit or store.preferred_weight_unit)

    if time_str:
        try:
            minutes = parse_minutes(time_str)
        except ValueError as e:
            raise ValidationError("time", str(e)) from e
    else:
        minutes = minutes_of_day(datetime.now())

    if set_specs:
        pairs = [parse_set_spec(spec) for spec in set_specs]
    else:
        reps = click.prompt(
            "Reps", type=click.IntRange(1, 100), default=store.last_edited_reps or 1
        )
        weight = click.prompt(f"Weight ({unit.value})", type=float)
        pairs = [(reps, weight)]

    training_set = TrainingSet(
        equipment_id=item.id,
        sets=[SetInfo.from_input(reps, weight, unit, minutes) for reps, weight in pairs],
    )
    training_log = await store.add_training_set(training_set, day or date.today())
    await store.set_last_edited_reps(pairs[-1][0])
    await store.set_last_used_weight_unit(unit)

    echo_success(
        f"Logged {len(pairs)} set(s) of {item.name} on {training_log.date.isoformat()}"
    )
    updated = store.get_equipment(item.id)
    if updated and updated.pr != item.pr:
        echo_success(f"New personal record: {format_weight(updated.pr, unit)}")


@log.command(name="show")
@click.option("--date", "day", type=click.DateTime(formats=["%Y-%m-%d"]), help="Day (default: today)")
@click.pass_context
@async_command
async def show_day(ctx, day: datetime | None):
    """Show everything logged on a day."""
    store = await open_store(ctx)
    day = day.date() if day else date.today()
    unit = store.preferred_weight_unit

    training_log = store.log_for_day(day)
    if not training_log:
        echo_info(f"Nothing logged on {day.isoformat()}")
        return

    click.echo()
    click.echo(click.style(day.strftime("%A %Y-%m-%d"), bold=True))
    click.echo("=" * 40)
    for training_set in training_log.sets:
        item = store.resolve_equipment(training_set)
        name = item.name if item else "(deleted equipment)"
        click.echo(f"{name}  [{short_id(training_set.id)}]")
        for info in training_set.sets:
            click.echo(f"    {info.get_display(unit)}")
    click.echo()
    click.echo(f"Volume: {format_weight(training_log.total_volume, unit)}")


@log.command(name="delete")
@click.argument("entry_ref")
@click.pass_context
@async_command
async def delete_entry(ctx, entry_ref: str):
    """Delete a logged entry (by id or id prefix).

    Deleting the last entry of a day removes the day's log.
    """
    store = await open_store(ctx)
    matches = [
        training_set.id
        for training_log in store.training_logs
        for training_set in training_log.sets
        if training_set.id.startswith(entry_ref)
    ]
    if len(matches) != 1:
        raise NotFoundError("TrainingSet", entry_ref)

    remaining = await store.delete_training_set(matches[0])
    if remaining is None:
        echo_success("Deleted entry; no entries left that day")
    else:
        echo_success(f"Deleted entry; {len(remaining.sets)} left on {remaining.date.isoformat()}")
