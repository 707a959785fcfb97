"""Request bodies for the JSON API."""

from datetime import date

from pydantic import BaseModel, Field

from ..models.muscle import DEFAULT_COLOR
from ..models.units import WeightUnit


class SubMuscleIn(BaseModel):
    name: str
    color: str = DEFAULT_COLOR


class MuscleIn(BaseModel):
    name: str
    color: str = DEFAULT_COLOR
    sub_muscles: list[SubMuscleIn] = Field(default_factory=list)


class EquipmentIn(BaseModel):
    name: str
    muscle_id: str | None = None
    sub_muscle_id: str | None = None
    location: str = ""
    pr: float | None = None
    unit: WeightUnit = WeightUnit.KG  # unit of ``pr``


class LocationIn(BaseModel):
    name: str


class SetIn(BaseModel):
    reps: int
    weight: float
    time: int = 0  # minutes since midnight


class TrainingSetIn(BaseModel):
    equipment_id: str
    unit: WeightUnit = WeightUnit.KG  # unit of every ``weight``
    sets: list[SetIn]


class PreferencesIn(BaseModel):
    preferred_weight_unit: WeightUnit


class TapIn(BaseModel):
    date: date
