"""CLI entry point for gymbook."""

import logging
from pathlib import Path

import click

from . import __version__
from .commands import calendar, equipment, init, locations, log, muscles, serve, settings
from .config import load_settings


@click.group()
@click.version_option(version=__version__, prog_name="gymbook")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Settings file (default: gymbook.yaml or GYMBOOK_* variables)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_file: Path | None, verbose: bool):
    """gymbook: gym equipment catalog and training log.

    Catalog your equipment by muscle group, log sets per day, and browse
    your training on a month calendar.

    Example usage:

        # Initialize the data directory
        gymbook init

        # Add equipment and log a workout
        gymbook equipment add "Bench Press" --muscle Chest
        gymbook log add -e "Bench Press" -s 10x60 -s 8x65

        # See the month
        gymbook calendar
    """
    config = load_settings(config_file)
    level = logging.DEBUG if verbose else getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = config


# Register commands
main.add_command(init)
main.add_command(muscles)
main.add_command(equipment)
main.add_command(locations)
main.add_command(log)
main.add_command(calendar)
main.add_command(settings)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
