"""CLI commands for gymbook."""

from .calendar_cmd import calendar
from .equipment import equipment
from .init import init
from .locations import locations
from .log import log
from .muscles import muscles
from .serve import serve
from .settings import settings

__all__ = [
    "calendar",
    "equipment",
    "init",
    "locations",
    "log",
    "muscles",
    "serve",
    "settings",
]
