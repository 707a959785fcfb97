"""Training location commands."""

import click

from .base import async_command, echo_info, echo_success, ensure_initialized, open_store


@click.group()
@click.pass_context
def locations(ctx):
    """Manage the list of training locations."""
    ensure_initialized(ctx)


@locations.command(name="list")
@click.pass_context
@async_command
async def list_locations(ctx):
    """List locations."""
    store = await open_store(ctx)
    if not store.locations:
        echo_info("No locations yet. Add one with 'gymbook locations add'")
        return
    for location in store.locations:
        click.echo(f"  - {location}")


@locations.command(name="add")
@click.argument("name")
@click.pass_context
@async_command
async def add_location(ctx, name: str):
    """Add a location."""
    store = await open_store(ctx)
    name = await store.add_location(name)
    echo_success(f"Added location '{name}'")


@locations.command(name="rename")
@click.argument("old_name")
@click.argument("new_name")
@click.pass_context
@async_command
async def rename_location(ctx, old_name: str, new_name: str):
    """Rename a location."""
    store = await open_store(ctx)
    new_name = await store.rename_location(old_name, new_name)
    echo_success(f"Renamed '{old_name}' to '{new_name}'")


@locations.command(name="delete")
@click.argument("name")
@click.pass_context
@async_command
async def delete_location(ctx, name: str):
    """Delete a location."""
    store = await open_store(ctx)
    removed = await store.delete_location(name)
    echo_success(f"Deleted location '{removed}'")
