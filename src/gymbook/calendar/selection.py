"""Single versus double tap detection on calendar days."""

import logging
import time
from datetime import date
from enum import Enum
from typing import Callable

from ..utils.dates import as_day
from .grid import DayCell

logger = logging.getLogger(__name__)

DOUBLE_TAP_INTERVAL = 0.5  # seconds


class TapResult(str, Enum):
    """Outcome of a tap."""

    SELECTED = "selected"
    DOUBLE_TAP = "double_tap"
    IGNORED = "ignored"


class DateSelectionTracker:
    """Distinguish a tap that selects a day from a double tap on it.

    A second tap on the same calendar day less than ``interval`` seconds
    after the first is a double tap: it fires ``on_double_tap`` and resets
    the tracker. Any other tap selects its day and arms the tracker. There
    is no timer; an armed tracker only expires when the next tap compares
    timestamps.
    """

    def __init__(
        self,
        interval: float = DOUBLE_TAP_INTERVAL,
        on_double_tap: Callable[[date], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.interval = interval
        self.on_double_tap = on_double_tap
        self._clock = clock
        self.selected_date: date | None = None
        self.last_tap_time: float | None = None
        self.last_tapped_date: date | None = None

    @property
    def armed(self) -> bool:
        """Whether the next tap could complete a double tap."""
        return self.last_tap_time is not None and self.last_tapped_date is not None

    def reset(self) -> None:
        """Forget the previous tap."""
        self.last_tap_time = None
        self.last_tapped_date = None

    def tap(self, day: date, now: float | None = None) -> TapResult:
        """Register a tap on ``day`` at time ``now`` (seconds)."""
        day = as_day(day)
        if now is None:
            now = self._clock()

        if (
            self.armed
            and now - self.last_tap_time < self.interval
            and self.last_tapped_date == day
        ):
            self.reset()
            logger.debug("Double tap on %s", day)
            if self.on_double_tap is not None:
                self.on_double_tap(day)
            return TapResult.DOUBLE_TAP

        self.last_tap_time = now
        self.last_tapped_date = day
        self.selected_date = day
        return TapResult.SELECTED

    def tap_cell(self, cell: DayCell, now: float | None = None) -> TapResult:
        """Register a tap on a grid cell. Blank cells are ignored."""
        if cell.is_blank:
            return TapResult.IGNORED
        return self.tap(cell.date, now)
