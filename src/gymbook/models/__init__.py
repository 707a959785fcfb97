"""Data models for gymbook."""

from .equipment import Equipment
from .muscle import Muscle, SubMuscle, default_muscles
from .training import SetInfo, TrainingLog, TrainingSet
from .units import KG_PER_LB, TimeUnit, WeightUnit, convert_weight, to_kilograms

__all__ = [
    "Equipment",
    "KG_PER_LB",
    "Muscle",
    "SetInfo",
    "SubMuscle",
    "TimeUnit",
    "TrainingLog",
    "TrainingSet",
    "WeightUnit",
    "convert_weight",
    "default_muscles",
    "to_kilograms",
]
