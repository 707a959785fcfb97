"""Month calendar command."""

from datetime import date

import click

from ..calendar.grid import CalendarGridBuilder
from .base import async_command, ensure_initialized, get_settings, open_store

CELL_WIDTH = 4


def render_month(
    builder: CalendarGridBuilder,
    marked: set[date],
    today: date | None = None,
) -> str:
    """Render the builder's month as text.

    Days in ``marked`` get a ``*``; today is bracketed when it is shown.
    """
    lines = [builder.title.center(CELL_WIDTH * 7).rstrip()]
    lines.append("".join(h[:3].rjust(CELL_WIDTH) for h in builder.weekday_headers()))

    for week in builder.weeks():
        row = ""
        for cell in week:
            if cell.is_blank:
                row += " " * CELL_WIDTH
                continue
            text = f"{cell.day:>2}{'*' if cell.date in marked else ' '}"
            if cell.date == today:
                text = f"[{cell.day:>2}]" if cell.date not in marked else f"[{cell.day:>2}*"
            row += text.rjust(CELL_WIDTH)
        lines.append(row.rstrip())

    return "\n".join(lines)


@click.command(name="calendar")
@click.option("--year", type=click.IntRange(1, 9999), help="Year to show")
@click.option("--month", type=click.IntRange(1, 12), help="Month to show")
@click.option("--offset", type=int, default=0, help="Months to move back (<0) or forward (>0)")
@click.pass_context
@async_command
async def calendar(ctx, year: int | None, month: int | None, offset: int):
    """Show a month calendar marking days with training.

    Examples:

        gymbook calendar                # this month
        gymbook calendar --offset -1    # last month
        gymbook calendar --year 2026 --month 3
    """
    ensure_initialized(ctx)
    settings = get_settings(ctx)
    store = await open_store(ctx)

    today = date.today()
    builder = CalendarGridBuilder(today, first_weekday=settings.first_weekday)
    if year or month:
        builder.jump_to(year or today.year, month or today.month)
    for _ in range(abs(offset)):
        if offset > 0:
            builder.next_month()
        else:
            builder.previous_month()

    marked = store.days_with_entries(builder.year, builder.month)
    click.echo()
    click.echo(render_month(builder, marked, today))
    click.echo()
    click.echo(f"Training days: {len(marked)}")
