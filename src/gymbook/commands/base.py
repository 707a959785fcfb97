"""Shared CLI utilities."""

import asyncio
from functools import wraps

import click

from ..config import Settings, load_settings
from ..errors import NotFoundError, ValidationError
from ..models.equipment import Equipment
from ..models.muscle import Muscle, normalize_name
from ..storage.images import ImageStore
from ..storage.kv import SQLiteKeyValueStore
from ..store import FitnessStore


def async_command(f):
    """Decorator to run async Click commands.

    Validation and lookup failures are reported as errors and exit with
    status 1; nothing is saved in that case.
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return asyncio.run(f(*args, **kwargs))
        except ValidationError as e:
            echo_error(f"{e.message} ({e.field})")
            raise click.exceptions.Exit(1)
        except NotFoundError as e:
            echo_error(str(e))
            raise click.exceptions.Exit(1)

    return wrapper


def get_settings(ctx: click.Context) -> Settings:
    """Settings attached to the CLI context."""
    settings = ctx.find_object(Settings)
    if settings is None:
        settings = load_settings()
        ctx.obj = settings
    return settings


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_settings(ctx).db_path
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'gymbook init' first."
        )
        ctx.exit(1)


async def open_store(ctx: click.Context) -> FitnessStore:
    """Open and load the store configured for this invocation."""
    settings = get_settings(ctx)
    store = FitnessStore(
        SQLiteKeyValueStore(settings.db_path),
        default_weight_unit=settings.default_weight_unit,
    )
    await store.load()
    return store


def get_image_store(ctx: click.Context) -> ImageStore:
    return ImageStore(get_settings(ctx).images_dir)


def resolve_muscle(store: FitnessStore, ref: str) -> Muscle:
    """Find a muscle by id, id prefix or name."""
    muscle = store.get_muscle(ref) or store.find_muscle_by_name(ref)
    if muscle:
        return muscle
    matches = [m for m in store.muscles if m.id.startswith(ref)]
    if len(matches) == 1:
        return matches[0]
    raise NotFoundError("Muscle", ref)


def resolve_equipment(store: FitnessStore, ref: str) -> Equipment:
    """Find an equipment by id, id prefix or name."""
    equipment = store.get_equipment(ref)
    if equipment:
        return equipment
    key = normalize_name(ref)
    matches = [
        e for e in store.equipments
        if e.id.startswith(ref) or normalize_name(e.name) == key
    ]
    if len(matches) == 1:
        return matches[0]
    raise NotFoundError("Equipment", ref)


def short_id(value: str) -> str:
    """First eight characters of an id, for tables."""
    return value[:8]


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message, err=True)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(line.rstrip() for line in lines)
