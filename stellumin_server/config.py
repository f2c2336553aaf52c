"""Runtime configuration for the game server."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from . import constants


@dataclass(frozen=True)
class GameConfig:
    """The complete set of tunables used by the world and the server loop.

    Every field defaults to the value in :mod:`constants`. Instances validate
    themselves on construction and raise :class:`ValueError` when a value
    would make the simulation meaningless (zero tick rate, drag outside
    ``(0, 1)``, and so on).
    """

    host: str = constants.HOST
    port: int = constants.PORT
    tick_hz: float = constants.TICK_HZ
    world_width: float = constants.WORLD_WIDTH
    world_height: float = constants.WORLD_HEIGHT
    food_target: int = constants.FOOD_TARGET
    food_radius: float = constants.FOOD_RADIUS
    food_mass: float = constants.FOOD_MASS
    initial_mass: float = constants.INITIAL_MASS
    base_radius: float = constants.BASE_RADIUS
    base_speed: float = constants.BASE_SPEED
    drag: float = constants.DRAG
    radius_growth_factor: float = constants.RADIUS_GROWTH_FACTOR
    mass_slowdown_factor: float = constants.MASS_SLOWDOWN_FACTOR
    spawn_half_extent: float = constants.SPAWN_HALF_EXTENT

    def __post_init__(self) -> None:
        positive = {
            "tick_hz": self.tick_hz,
            "world_width": self.world_width,
            "world_height": self.world_height,
            "food_radius": self.food_radius,
            "initial_mass": self.initial_mass,
            "base_radius": self.base_radius,
            "base_speed": self.base_speed,
        }
        for name, value in positive.items():
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value!r}")
        non_negative = {
            "food_target": self.food_target,
            "food_mass": self.food_mass,
            "radius_growth_factor": self.radius_growth_factor,
            "mass_slowdown_factor": self.mass_slowdown_factor,
            "spawn_half_extent": self.spawn_half_extent,
        }
        for name, value in non_negative.items():
            if value < 0:
                raise ValueError(f"{name} must not be negative, got {value!r}")
        if not 0 < self.drag < 1:
            raise ValueError(f"drag must lie strictly between 0 and 1, got {self.drag!r}")
        if not 0 <= self.port <= 65535:
            raise ValueError(f"port out of range: {self.port!r}")

    @property
    def tick_interval(self) -> float:
        """Seconds between two simulation steps."""

        return 1.0 / self.tick_hz

    def to_dict(self) -> dict:
        return asdict(self)
