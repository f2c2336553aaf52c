"""Utility primitives used by the authoritative game server."""

from __future__ import annotations

from dataclasses import dataclass
import math
import random
import secrets


@dataclass(frozen=True)
class Vec2:
    """An immutable two dimensional vector.

    Positions, velocities and intents are all stored as ``Vec2`` values and
    replaced wholesale rather than mutated axis by axis, so a reader always
    sees both components from the same write.
    """

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def length(self) -> float:
        """Return the Euclidean length of the vector."""

        return math.hypot(self.x, self.y)

    def distance_sq_to(self, other: "Vec2") -> float:
        """Return the squared distance between this vector and ``other``."""

        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def to_tuple(self) -> tuple[float, float]:
        """Return the vector as an ``(x, y)`` tuple."""

        return self.x, self.y


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into the closed interval ``[low, high]``."""

    return max(low, min(high, value))


def coerce_axis(value: object) -> float:
    """Turn an untrusted intent component into a float in ``[-1, 1]``.

    Only real JSON numbers are accepted. Strings, booleans, ``None`` and NaN
    all become ``0.0``; infinities and integers too large for a float clamp to
    the nearest bound.
    """

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    try:
        number = float(value)
    except OverflowError:
        return 1.0 if value > 0 else -1.0
    if math.isnan(number):
        return 0.0
    return clamp(number, -1.0, 1.0)


def sanitize_text(value: object, max_length: int, default: str) -> str:
    """Return a printable, length limited version of ``value``.

    Non-string values and strings that are empty after stripping fall back to
    ``default``.
    """

    if not isinstance(value, str):
        return default
    cleaned = "".join(ch for ch in value if ch.isprintable()).strip()
    if not cleaned:
        return default
    return cleaned[:max_length]


def random_point_in_box(half_width: float, half_height: float, rng: random.Random) -> Vec2:
    """Return a uniformly random point in ``[-hw, hw] x [-hh, hh]``."""

    return Vec2(rng.uniform(-half_width, half_width), rng.uniform(-half_height, half_height))


def new_player_id() -> str:
    """Return a fresh opaque player id.

    Ids are 96 bit tokens from :mod:`secrets`; collisions are treated as
    impossible and are not checked for.
    """

    return secrets.token_urlsafe(12)
