"""Weight and time units."""

from enum import Enum

# 1 lb is exactly 0.45359237 kg (international avoirdupois pound).
KG_PER_LB = 0.45359237


class WeightUnit(str, Enum):
    """Display unit for weights. Stored weights are always kilograms."""

    KG = "kg"
    LB = "lb"


class TimeUnit(str, Enum):
    """Unit attached to a logged set's time value."""

    MINUTES = "min"
    SECONDS = "sec"


def convert_weight(kilograms: float, unit: WeightUnit) -> float:
    """Convert a canonical kilogram value to ``unit`` for display."""
    if WeightUnit(unit) == WeightUnit.LB:
        return kilograms / KG_PER_LB
    return kilograms


def to_kilograms(value: float, unit: WeightUnit) -> float:
    """Convert a value entered in ``unit`` to canonical kilograms."""
    if WeightUnit(unit) == WeightUnit.LB:
        return value * KG_PER_LB
    return value


def format_weight(kilograms: float, unit: WeightUnit) -> str:
    """Format a kilogram value in ``unit`` with one decimal."""
    unit = WeightUnit(unit)
    return f"{convert_weight(kilograms, unit):.1f} {unit.value}"
