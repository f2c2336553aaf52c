"""Motion and contact helpers for the simulation step."""

from __future__ import annotations

import math

from .config import GameConfig
from .utils import Vec2, clamp


def radius_for_mass(mass: float, config: GameConfig) -> float:
    """Collision radius of a player; grows with the square root of mass."""

    return config.base_radius + math.sqrt(mass) * config.radius_growth_factor


def speed_for_mass(mass: float, config: GameConfig) -> float:
    """Top speed of a player in world units per second; shrinks as mass grows."""

    return config.base_speed / (1 + math.sqrt(mass) * config.mass_slowdown_factor)


def steer(velocity: Vec2, intent: Vec2, top_speed: float, drag: float) -> Vec2:
    """Exponentially smooth ``velocity`` toward ``intent * top_speed``."""

    target = intent * top_speed
    return velocity * drag + target * (1 - drag)


def clamp_to_bounds(position: Vec2, width: float, height: float) -> Vec2:
    """Clamp ``position`` into the world rectangle centred at the origin."""

    half_w = width / 2
    half_h = height / 2
    return Vec2(clamp(position.x, -half_w, half_w), clamp(position.y, -half_h, half_h))


def circles_touch(a: Vec2, ar: float, b: Vec2, br: float) -> bool:
    """Return ``True`` if two circles overlap or touch."""

    radius_sum = ar + br
    return a.distance_sq_to(b) <= radius_sum * radius_sum
