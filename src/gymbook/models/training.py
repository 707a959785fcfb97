"""Training log models."""

from dataclasses import dataclass, field
from datetime import date

from ..utils.dates import as_day, format_minutes
from ..utils.ids import new_id
from .units import TimeUnit, WeightUnit, format_weight, to_kilograms


@dataclass
class SetInfo:
    """One rep/weight/time measurement."""

    reps: int
    weight: float  # in kg
    weight_unit: WeightUnit = WeightUnit.KG  # unit the set was entered in
    time: int = 0  # minutes since midnight
    time_unit: TimeUnit = TimeUnit.MINUTES

    @property
    def volume(self) -> float:
        """Total load moved in this set (kg)."""
        return self.reps * self.weight

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "reps": self.reps,
            "weight": self.weight,
            "weight_unit": self.weight_unit.value,
            "time": self.time,
            "time_unit": self.time_unit.value,
        }

    @classmethod
    def from_input(
        cls,
        reps: int,
        weight: float,
        unit: WeightUnit = WeightUnit.KG,
        time: int = 0,
    ) -> "SetInfo":
        """Build a set from user input given in ``unit``."""
        unit = WeightUnit(unit)
        return cls(
            reps=reps,
            weight=to_kilograms(weight, unit),
            weight_unit=unit,
            time=time,
        )

    @classmethod
    def from_dict(cls, data: dict) -> "SetInfo":
        """Create from dictionary."""
        return cls(
            reps=int(data["reps"]),
            weight=float(data["weight"]),
            weight_unit=WeightUnit(data.get("weight_unit", "kg")),
            time=int(data.get("time", 0)),
            time_unit=TimeUnit(data.get("time_unit", "min")),
        )

    def get_display(self, unit: WeightUnit | None = None) -> str:
        """Human-readable line, e.g. ``08:30  10 x 60.0 kg``."""
        return (
            f"{format_minutes(self.time)}  {self.reps} x "
            f"{format_weight(self.weight, unit or self.weight_unit)}"
        )


@dataclass
class TrainingSet:
    """One equipment's worth of sets within a day's log."""

    equipment_id: str
    sets: list[SetInfo] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    @property
    def best_weight(self) -> float | None:
        """Heaviest weight in this entry (kg)."""
        if not self.sets:
            return None
        return max(s.weight for s in self.sets)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "equipment_id": self.equipment_id,
            "sets": [s.to_dict() for s in self.sets],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TrainingSet":
        """Create from dictionary."""
        return cls(
            id=data.get("id") or new_id(),
            equipment_id=data["equipment_id"],
            sets=[SetInfo.from_dict(s) for s in data.get("sets", [])],
        )


@dataclass
class TrainingLog:
    """All training recorded for one calendar day."""

    date: date
    sets: list[TrainingSet] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        self.date = as_day(self.date)

    def get_set(self, training_set_id: str) -> TrainingSet | None:
        """Find an entry by id."""
        for training_set in self.sets:
            if training_set.id == training_set_id:
                return training_set
        return None

    @property
    def total_volume(self) -> float:
        """Sum of reps x weight over every set of the day (kg)."""
        return sum(s.volume for ts in self.sets for s in ts.sets)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "sets": [ts.to_dict() for ts in self.sets],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TrainingLog":
        """Create from dictionary."""
        return cls(
            id=data.get("id") or new_id(),
            date=as_day(data["date"]),
            sets=[TrainingSet.from_dict(ts) for ts in data.get("sets", [])],
        )
