"""Calendar routes."""

from fastapi import APIRouter, Depends, Path, Query

from ...calendar.grid import CalendarGridBuilder, month_start, shift_month
from ...calendar.selection import DateSelectionTracker, TapResult
from ...config import Settings
from ...store import FitnessStore
from ..deps import get_settings, get_store, get_tracker
from ..schemas import TapIn

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/{year}/{month}")
async def month_view(
    year: int = Path(..., ge=1900, le=2999),
    month: int = Path(..., ge=1, le=12),
    first_weekday: int | None = Query(None, ge=0, le=6),
    store: FitnessStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Month grid with the days that have training marked."""
    first = month_start(year, month)
    builder = CalendarGridBuilder(
        first,
        first_weekday=settings.first_weekday if first_weekday is None else first_weekday,
    )
    marked = store.days_with_entries(year, month)

    return {
        "title": builder.title,
        "weekdays": builder.weekday_headers(),
        "previous": shift_month(first, -1).isoformat(),
        "next": shift_month(first, 1).isoformat(),
        "cells": [
            {
                "day": cell.day,
                "date": cell.date.isoformat() if cell.date else None,
                "has_entries": cell.date in marked,
            }
            for cell in builder.grid()
        ],
    }


@router.post("/taps")
async def tap_day(
    body: TapIn,
    store: FitnessStore = Depends(get_store),
    tracker: DateSelectionTracker = Depends(get_tracker),
):
    """Register a tap on a calendar day.

    A single tap selects the day. A second tap on the same day within the
    configured interval answers with the action to add an entry for it.
    """
    result = tracker.tap(body.date)
    day = body.date.isoformat()
    action = None
    if result == TapResult.DOUBLE_TAP:
        action = {"type": "add_entry", "date": day, "path": f"/logs/{day}/sets"}

    selected = tracker.selected_date
    return {
        "result": result.value,
        "selected_date": selected.isoformat() if selected else None,
        "has_entries": store.log_for_day(body.date) is not None,
        "action": action,
    }
