"""Player entity implementation."""

from __future__ import annotations

from dataclasses import dataclass, field

from .utils import Vec2


@dataclass
class Player:
    """Authoritative representation of a circle controlled by one client.

    ``intent`` is the only field written from outside the tick loop. It holds
    an immutable :class:`Vec2`, so replacing it is a single assignment and the
    step never sees one axis from an old intent and the other from a new one.
    """

    id: str
    name: str
    avatar: str
    position: Vec2
    mass: float
    velocity: Vec2 = field(default_factory=Vec2)
    experience: float = 0.0
    intent: Vec2 = field(default_factory=Vec2)

    def set_intent(self, dx: float, dy: float) -> None:
        """Replace the desired movement direction."""

        self.intent = Vec2(dx, dy)

    def feed(self, amount: float) -> None:
        """Credit consumed food to both mass and experience."""

        self.mass += amount
        self.experience += amount

    def to_snapshot(self) -> dict:
        """Return the public view of the player; velocity and intent stay private."""

        return {
            "id": self.id,
            "name": self.name,
            "avatar": self.avatar,
            "x": self.position.x,
            "y": self.position.y,
            "mass": self.mass,
            "xp": self.experience,
        }
