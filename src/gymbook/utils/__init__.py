"""Utility helpers for gymbook."""

from .dates import as_day, format_minutes, minutes_of_day, parse_day, parse_minutes
from .ids import new_id

__all__ = [
    "as_day",
    "format_minutes",
    "minutes_of_day",
    "new_id",
    "parse_day",
    "parse_minutes",
]
