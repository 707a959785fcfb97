"""Month grid generation.

A month is laid out as rows of seven day cells. The grid starts with blank
cells so the 1st lands under its weekday column, and is padded with blanks
at the end to complete the last week.
"""

import calendar
import datetime
from dataclasses import dataclass

DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class DayCell:
    """One cell of a month grid. Blank cells carry no day and no date."""

    day: int | None = None
    date: datetime.date | None = None

    @property
    def is_blank(self) -> bool:
        return self.date is None


BLANK = DayCell()


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month."""
    return calendar.monthrange(year, month)[1]


def month_start(year: int, month: int) -> datetime.date:
    """First day of the given month."""
    return datetime.date(year, month, 1)


def shift_month(reference, months: int):
    """Move ``reference`` by whole calendar months.

    The day of month is kept where the target month has it and clamped to
    the target month's last day otherwise (Jan 31 + 1 month -> Feb 28/29).
    Works for both ``date`` and ``datetime`` values.
    """
    index = reference.year * 12 + (reference.month - 1) + months
    year, month_index = divmod(index, 12)
    month = month_index + 1
    day = min(reference.day, days_in_month(year, month))
    return reference.replace(year=year, month=month, day=day)


def build_month_grid(
    reference: datetime.date,
    first_weekday: int = calendar.SUNDAY,
) -> list[DayCell]:
    """Build the day cells for the month containing ``reference``.

    Args:
        reference: Any date (or datetime) within the month to lay out
        first_weekday: Weekday shown in the first column, using the
            ``calendar`` module numbering (Monday=0 ... Sunday=6)

    Returns:
        Cells in row-major order; the length is always a multiple of 7
    """
    first = month_start(reference.year, reference.month)
    leading = (first.weekday() - first_weekday) % DAYS_PER_WEEK

    cells = [BLANK] * leading
    cells.extend(
        DayCell(day=day, date=first.replace(day=day))
        for day in range(1, days_in_month(first.year, first.month) + 1)
    )
    cells.extend([BLANK] * (-len(cells) % DAYS_PER_WEEK))
    return cells


def weeks(grid: list[DayCell]) -> list[list[DayCell]]:
    """Split a grid into week rows."""
    return [grid[i:i + DAYS_PER_WEEK] for i in range(0, len(grid), DAYS_PER_WEEK)]


class CalendarGridBuilder:
    """Month grid with previous/next/jump navigation.

    Holds the reference date the calendar is showing; every navigation step
    moves it by calendar months, never by a fixed number of days.
    """

    def __init__(
        self,
        reference: datetime.date | None = None,
        first_weekday: int = calendar.SUNDAY,
    ):
        self.reference = reference or datetime.date.today()
        self.first_weekday = first_weekday

    @property
    def year(self) -> int:
        return self.reference.year

    @property
    def month(self) -> int:
        return self.reference.month

    @property
    def title(self) -> str:
        """Month heading, e.g. ``October 2026``."""
        return f"{calendar.month_name[self.month]} {self.year}"

    def weekday_headers(self) -> list[str]:
        """Abbreviated weekday names in column order."""
        return [
            calendar.day_abbr[(self.first_weekday + i) % DAYS_PER_WEEK]
            for i in range(DAYS_PER_WEEK)
        ]

    def grid(self) -> list[DayCell]:
        """Cells for the month currently shown."""
        return build_month_grid(self.reference, self.first_weekday)

    def weeks(self) -> list[list[DayCell]]:
        return weeks(self.grid())

    def previous_month(self) -> datetime.date:
        self.reference = shift_month(self.reference, -1)
        return self.reference

    def next_month(self) -> datetime.date:
        self.reference = shift_month(self.reference, 1)
        return self.reference

    def jump_to(self, year: int, month: int) -> datetime.date:
        """Show the given month, starting from its first day."""
        self.reference = month_start(year, month)
        return self.reference
