"""Authoritative game world simulation."""

from __future__ import annotations

import itertools
import random
import threading
from typing import Dict, Optional

from . import physics, protocol, utils
from .config import GameConfig
from .food import FoodParticle
from .player import Player
from .utils import Vec2


class World:
    """Holds all entities and advances the simulation on every tick.

    :meth:`step` is the only code path that moves players, changes mass or
    adds and removes food. Connection tasks reach the world through
    :meth:`add_player`, :meth:`remove_player` and :meth:`set_player_intent`
    only; those share one lock with :meth:`step` and :meth:`snapshot`, so a
    tick never observes a half-applied join, leave or input.
    """

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or GameConfig()
        self.tick: int = 0
        self.players: Dict[str, Player] = {}
        self.food: Dict[int, FoodParticle] = {}
        self._rng = rng or random.Random()
        self._food_ids = itertools.count(1)
        self._lock = threading.Lock()
        self._maintain_food_population()

    @property
    def width(self) -> float:
        return self.config.world_width

    @property
    def height(self) -> float:
        return self.config.world_height

    def _maintain_food_population(self) -> None:
        while len(self.food) < self.config.food_target:
            self._spawn_food(utils.random_point_in_box(self.width / 2, self.height / 2, self._rng))

    def _spawn_food(self, position: Vec2, radius: Optional[float] = None) -> FoodParticle:
        particle = FoodParticle(
            id=next(self._food_ids),
            position=position,
            radius=self.config.food_radius if radius is None else radius,
        )
        self.food[particle.id] = particle
        return particle

    def spawn_food(self, position: Vec2, radius: Optional[float] = None) -> FoodParticle:
        """Place a food particle at ``position``, clamped into the world."""

        with self._lock:
            return self._spawn_food(physics.clamp_to_bounds(position, self.width, self.height), radius)

    def add_player(self, name: str, avatar: str, position: Optional[Vec2] = None) -> Player:
        """Create a player and register it.

        Without an explicit ``position`` the player spawns uniformly inside
        the central spawn square, intersected with the world bounds.
        """

        if position is None:
            extent = self.config.spawn_half_extent
            position = utils.random_point_in_box(
                min(extent, self.width / 2), min(extent, self.height / 2), self._rng
            )
        player = Player(
            id=utils.new_player_id(),
            name=name,
            avatar=avatar,
            position=physics.clamp_to_bounds(position, self.width, self.height),
            mass=self.config.initial_mass,
        )
        with self._lock:
            self.players[player.id] = player
        return player

    def remove_player(self, player_id: str) -> Optional[Player]:
        with self._lock:
            return self.players.pop(player_id, None)

    def set_player_intent(self, player_id: str, dx: float, dy: float) -> bool:
        """Overwrite a player's intent; returns ``False`` if the player is gone."""

        with self._lock:
            player = self.players.get(player_id)
            if player is None:
                return False
            player.set_intent(dx, dy)
            return True

    def step(self) -> None:
        """Advance the world by one tick.

        Phases run in a fixed order: replenish food, integrate every player,
        then resolve consumption.
        """

        with self._lock:
            self.tick += 1
            self._maintain_food_population()
            dt = self.config.tick_interval
            for player in self.players.values():
                self._integrate(player, dt)
            self._handle_food_collisions()

    def _integrate(self, player: Player, dt: float) -> None:
        top_speed = physics.speed_for_mass(player.mass, self.config)
        player.velocity = physics.steer(player.velocity, player.intent, top_speed, self.config.drag)
        moved = player.position + player.velocity * dt
        player.position = physics.clamp_to_bounds(moved, self.width, self.height)

    def _handle_food_collisions(self) -> None:
        # Particles are removed as soon as they match, so each one is credited
        # to the first player in iteration order that reaches it.
        for player in self.players.values():
            radius = physics.radius_for_mass(player.mass, self.config)
            consumed = [
                food.id
                for food in self.food.values()
                if physics.circles_touch(player.position, radius, food.position, food.radius)
            ]
            for food_id in consumed:
                del self.food[food_id]
                player.feed(self.config.food_mass)

    def snapshot(self, timestamp_ms: int) -> str:
        """Encode the current world state as a ``state`` message."""

        with self._lock:
            players = [player.to_snapshot() for player in self.players.values()]
            foods = [food.to_dict() for food in self.food.values()]
        return protocol.encode_state(timestamp_ms, self.width, self.height, players, foods)
