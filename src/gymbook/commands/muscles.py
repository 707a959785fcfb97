"""Muscle taxonomy commands."""

import click

from ..errors import NotFoundError
from ..models.muscle import DEFAULT_COLOR, Muscle, SubMuscle, normalize_name
from .base import (
    async_command,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    open_store,
    resolve_muscle,
    short_id,
)


@click.group()
@click.pass_context
def muscles(ctx):
    """Manage muscle groups and sub-muscles."""
    ensure_initialized(ctx)


@muscles.command(name="list")
@click.pass_context
@async_command
async def list_muscles(ctx):
    """List muscle groups with their sub-muscles."""
    store = await open_store(ctx)

    if not store.muscles:
        echo_info("No muscles found. Add one with 'gymbook muscles add'")
        return

    rows = []
    for muscle in store.muscles:
        rows.append([short_id(muscle.id), muscle.name, muscle.color, ""])
        for sub in muscle.sub_muscles:
            rows.append([short_id(sub.id), "", sub.color, sub.name])

    click.echo()
    click.echo(format_table(["ID", "Muscle", "Color", "Sub-muscle"], rows))


@muscles.command(name="add")
@click.argument("name")
@click.option("--color", default=DEFAULT_COLOR, show_default=True, help="Hex color")
@click.pass_context
@async_command
async def add_muscle(ctx, name: str, color: str):
    """Add a muscle group."""
    store = await open_store(ctx)
    muscle = await store.add_muscle(Muscle(name=name.strip(), color=color))
    echo_success(f"Added muscle '{muscle.name}' ({short_id(muscle.id)})")


@muscles.command(name="edit")
@click.argument("muscle_ref")
@click.option("--name", help="New name")
@click.option("--color", help="New hex color")
@click.pass_context
@async_command
async def edit_muscle(ctx, muscle_ref: str, name: str | None, color: str | None):
    """Rename or recolor a muscle group.

    Equipment refers to muscles by id, so renaming keeps every link.
    """
    store = await open_store(ctx)
    muscle = resolve_muscle(store, muscle_ref)
    if name:
        muscle.name = name.strip()
    if color:
        muscle.color = color
    await store.update_muscle(muscle)
    echo_success(f"Updated muscle '{muscle.name}'")


@muscles.command(name="delete")
@click.argument("muscle_ref")
@click.confirmation_option(prompt="Delete this muscle group?")
@click.pass_context
@async_command
async def delete_muscle(ctx, muscle_ref: str):
    """Delete a muscle group."""
    store = await open_store(ctx)
    muscle = resolve_muscle(store, muscle_ref)
    await store.delete_muscle(muscle.id)
    echo_success(f"Deleted muscle '{muscle.name}'")


@muscles.command(name="add-sub")
@click.argument("muscle_ref")
@click.argument("name")
@click.option("--color", default=DEFAULT_COLOR, show_default=True, help="Hex color")
@click.pass_context
@async_command
async def add_sub_muscle(ctx, muscle_ref: str, name: str, color: str):
    """Add a sub-muscle under a muscle group."""
    store = await open_store(ctx)
    muscle = resolve_muscle(store, muscle_ref)
    sub = await store.add_sub_muscle(muscle.id, SubMuscle(name=name.strip(), color=color))
    echo_success(f"Added '{sub.name}' under '{muscle.name}'")


@muscles.command(name="delete-sub")
@click.argument("muscle_ref")
@click.argument("sub_ref")
@click.pass_context
@async_command
async def delete_sub_muscle(ctx, muscle_ref: str, sub_ref: str):
    """Delete a sub-muscle (by id, id prefix or name)."""
    store = await open_store(ctx)
    muscle = resolve_muscle(store, muscle_ref)
    key = normalize_name(sub_ref)
    matches = [
        s for s in muscle.sub_muscles
        if s.id.startswith(sub_ref) or normalize_name(s.name) == key
    ]
    if len(matches) != 1:
        raise NotFoundError("SubMuscle", sub_ref)

    await store.delete_sub_muscle(muscle.id, matches[0].id)
    echo_success(f"Deleted '{matches[0].name}' from '{muscle.name}'")
