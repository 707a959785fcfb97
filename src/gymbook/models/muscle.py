"""Muscle taxonomy models."""

from dataclasses import dataclass, field

from ..utils.ids import new_id

DEFAULT_COLOR = "#808080"


@dataclass
class SubMuscle:
    """A finer-grained region within a muscle group."""

    name: str
    color: str = DEFAULT_COLOR
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {"id": self.id, "name": self.name, "color": self.color}

    @classmethod
    def from_dict(cls, data: dict) -> "SubMuscle":
        """Create from dictionary."""
        return cls(
            id=data.get("id") or new_id(),
            name=data["name"],
            color=data.get("color", DEFAULT_COLOR),
        )


@dataclass
class Muscle:
    """A top-level muscle group used to classify equipment."""

    name: str
    color: str = DEFAULT_COLOR
    sub_muscles: list[SubMuscle] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def get_sub_muscle(self, sub_muscle_id: str) -> SubMuscle | None:
        """Find a sub-muscle by id."""
        for sub in self.sub_muscles:
            if sub.id == sub_muscle_id:
                return sub
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "sub_muscles": [sub.to_dict() for sub in self.sub_muscles],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Muscle":
        """Create from dictionary.

        Early saves stored sub-muscles as bare names; those are upgraded to
        :class:`SubMuscle` records with the default color.
        """
        sub_muscles = []
        for sub in data.get("sub_muscles", []):
            if isinstance(sub, str):
                sub_muscles.append(SubMuscle(name=sub))
            else:
                sub_muscles.append(SubMuscle.from_dict(sub))

        return cls(
            id=data.get("id") or new_id(),
            name=data["name"],
            color=data.get("color", DEFAULT_COLOR),
            sub_muscles=sub_muscles,
        )


def normalize_name(name: str) -> str:
    """Normalize a name for uniqueness comparison."""
    return " ".join(name.split()).casefold()


# First-run taxonomy
DEFAULT_MUSCLES = [
    ("Chest", "#E57373", [("Upper Chest", "#EF9A9A"), ("Mid Chest", "#E57373"), ("Lower Chest", "#C62828")]),
    ("Back", "#64B5F6", [("Upper Back", "#90CAF9"), ("Lower Back", "#1565C0")]),
]


def default_muscles() -> list[Muscle]:
    """Build the default muscle taxonomy."""
    return [
        Muscle(
            name=name,
            color=color,
            sub_muscles=[SubMuscle(name=sub, color=sub_color) for sub, sub_color in subs],
        )
        for name, color, subs in DEFAULT_MUSCLES
    ]
