"""Month calendar layout and tap handling."""

from .grid import (
    BLANK,
    CalendarGridBuilder,
    DayCell,
    build_month_grid,
    days_in_month,
    month_start,
    shift_month,
    weeks,
)
from .selection import DateSelectionTracker, TapResult

__all__ = [
    "BLANK",
    "CalendarGridBuilder",
    "DateSelectionTracker",
    "DayCell",
    "TapResult",
    "build_month_grid",
    "days_in_month",
    "month_start",
    "shift_month",
    "weeks",
]
