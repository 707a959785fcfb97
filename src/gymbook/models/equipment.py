"""Equipment model."""

from dataclasses import dataclass, field

from ..utils.ids import new_id
from .muscle import Muscle
from .units import WeightUnit, format_weight


@dataclass
class Equipment:
    """A piece of gym apparatus.

    Muscle classification is held as identifier references into the
    store's muscle taxonomy, so renaming a muscle never breaks the link.
    The personal record is stored in kilograms.
    """

    name: str
    muscle_id: str | None = None
    sub_muscle_id: str | None = None
    image_name: str | None = None  # filename in the image area, never a path
    location: str = ""
    pr: float | None = None  # in kg
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "muscle_id": self.muscle_id,
            "sub_muscle_id": self.sub_muscle_id,
            "image_name": self.image_name,
            "location": self.location,
            "pr": self.pr,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Equipment":
        """Create from dictionary."""
        pr = data.get("pr")
        return cls(
            id=data.get("id") or new_id(),
            name=data["name"],
            muscle_id=data.get("muscle_id"),
            sub_muscle_id=data.get("sub_muscle_id"),
            image_name=data.get("image_name"),
            location=data.get("location", ""),
            pr=float(pr) if pr is not None else None,
        )

    def get_summary(
        self,
        muscle: Muscle | None = None,
        unit: WeightUnit = WeightUnit.KG,
    ) -> str:
        """Generate a summary for display."""
        lines = [self.name]

        if muscle:
            region = muscle.name
            sub = muscle.get_sub_muscle(self.sub_muscle_id) if self.sub_muscle_id else None
            if sub:
                region += f" / {sub.name}"
            lines.append(f"Muscle: {region}")

        if self.location:
            lines.append(f"Location: {self.location}")

        if self.pr is not None:
            lines.append(f"PR: {format_weight(self.pr, unit)}")

        if self.image_name:
            lines.append(f"Image: {self.image_name}")

        return "\n".join(lines)
