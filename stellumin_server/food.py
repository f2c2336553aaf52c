"""Food particle entity definition."""

from __future__ import annotations

from dataclasses import dataclass

from .utils import Vec2


@dataclass(frozen=True)
class FoodParticle:
    """A food particle that players consume to gain mass."""

    id: int
    position: Vec2
    radius: float

    def to_dict(self) -> dict[str, float | int]:
        """Serialise the particle to a JSON friendly dictionary."""

        return {"id": self.id, "x": self.position.x, "y": self.position.y, "r": self.radius}
