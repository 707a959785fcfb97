"""Initialize project command."""

import click

from ..config import write_sample_config
from ..storage.kv import SQLiteKeyValueStore
from .base import async_command, echo_info, echo_success, get_settings, open_store


@click.command()
@click.option("--write-config", is_flag=True, help="Also write a gymbook.yaml with defaults")
@click.pass_context
@async_command
async def init(ctx: click.Context, write_config: bool):
    """Initialize the gymbook data directory and database.

    Creates the data and image directories, the key-value database, and
    the default muscle taxonomy.
    """
    settings = get_settings(ctx)
    echo_info(f"Initializing gymbook in {settings.data_dir}")

    settings.images_dir.mkdir(parents=True, exist_ok=True)
    await SQLiteKeyValueStore(settings.db_path).init()
    echo_success("Database initialized")

    store = await open_store(ctx)
    seeded = await store.seed_default_muscles()
    if seeded:
        echo_success(f"Muscle taxonomy populated ({seeded} muscle groups)")

    if write_config and write_sample_config():
        echo_success("Wrote gymbook.yaml")

    click.echo()
    click.echo("gymbook is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo('  gymbook equipment add "Bench Press" --muscle Chest')
    click.echo('  gymbook log add -e "Bench Press" -s 10x60')
    click.echo("  gymbook calendar")
