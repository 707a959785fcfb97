"""Preference commands."""

import click

from ..models.units import WeightUnit
from .base import async_command, echo_success, ensure_initialized, get_settings, open_store


@click.group()
@click.pass_context
def settings(ctx):
    """View and change preferences."""
    ensure_initialized(ctx)


@settings.command(name="show")
@click.pass_context
@async_command
async def show_settings(ctx):
    """Show configuration and stored preferences."""
    config = get_settings(ctx)
    store = await open_store(ctx)

    click.echo()
    click.echo(click.style("Configuration", bold=True))
    for key, value in config.to_dict().items():
        click.echo(f"  {key}: {value}")

    click.echo()
    click.echo(click.style("Preferences", bold=True))
    click.echo(f"  Weight unit: {store.preferred_weight_unit.value}")
    last_unit = store.last_used_weight_unit
    click.echo(f"  Last used unit: {last_unit.value if last_unit else '-'}")
    click.echo(f"  Last reps: {store.last_edited_reps or '-'}")


@settings.command(name="unit")
@click.argument("unit", type=click.Choice([u.value for u in WeightUnit]))
@click.pass_context
@async_command
async def set_unit(ctx, unit: str):
    """Set the preferred display unit for weights."""
    store = await open_store(ctx)
    await store.set_preferred_weight_unit(WeightUnit(unit))
    echo_success(f"Weights will be shown in {unit}")
