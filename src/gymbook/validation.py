"""Input validation for records entering the store.

Each check raises :class:`~gymbook.errors.ValidationError` naming the field
that needs attention, so the caller can abort the save and tell the user.
"""

import re

from .errors import ValidationError
from .models.equipment import Equipment
from .models.muscle import Muscle, SubMuscle
from .models.training import SetInfo, TrainingSet
from .utils.dates import MINUTES_PER_DAY

HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


def _require_name(value: str, field: str, label: str) -> None:
    if not value or not value.strip():
        raise ValidationError(field, f"{label} name is required")


def validate_color(color: str, field: str = "color") -> None:
    if not HEX_COLOR.match(color or ""):
        raise ValidationError(field, f"Invalid color {color!r}, expected #RRGGBB")


def validate_sub_muscle(sub: SubMuscle) -> None:
    _require_name(sub.name, "name", "Sub-muscle")
    validate_color(sub.color)


def validate_muscle(muscle: Muscle) -> None:
    _require_name(muscle.name, "name", "Muscle")
    validate_color(muscle.color)
    for sub in muscle.sub_muscles:
        validate_sub_muscle(sub)


def validate_equipment(equipment: Equipment) -> None:
    _require_name(equipment.name, "name", "Equipment")
    if equipment.pr is not None and equipment.pr < 0:
        raise ValidationError("pr", "Personal record cannot be negative")


def validate_location(name: str) -> None:
    _require_name(name, "location", "Location")


def validate_set_info(info: SetInfo) -> None:
    if info.reps < 1:
        raise ValidationError("reps", "Reps must be at least 1")
    if info.weight <= 0:
        raise ValidationError("weight", "Enter a valid weight")
    if not 0 <= info.time < MINUTES_PER_DAY:
        raise ValidationError("time", "Time must be within the day")


def validate_training_set(training_set: TrainingSet) -> None:
    if not training_set.equipment_id:
        raise ValidationError("equipment", "Select a piece of equipment")
    if not training_set.sets:
        raise ValidationError("sets", "Add at least one set")
    for info in training_set.sets:
        validate_set_info(info)
