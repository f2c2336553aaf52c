"""Entry point for the asyncio based game server."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from typing import Optional, Sequence

import websockets
from websockets.asyncio.server import ServerConnection, serve

from . import constants, protocol
from .broadcast import SnapshotBroadcaster
from .config import GameConfig
from .scheduler import TickScheduler
from .session import Sessions
from .world import World


class GameServer:
    """High level orchestration of the world simulation and websocket IO."""

    def __init__(self, config: Optional[GameConfig] = None, world: Optional[World] = None) -> None:
        self.config = config or GameConfig()
        self.world = world or World(self.config)
        self.sessions = Sessions(self.world)
        self.broadcaster = SnapshotBroadcaster(self.world)
        self.scheduler = TickScheduler(self.config.tick_interval, self.tick)

    async def start(self) -> None:
        """Start the websocket server and the world update loop."""

        async with serve(self.handle_client, self.config.host, self.config.port):
            logging.info("Server listening on %s:%s", self.config.host, self.config.port)
            await self.scheduler.run()

    def stop(self) -> None:
        self.scheduler.stop()

    async def tick(self) -> None:
        """One simulation step followed by one broadcast pass."""

        self.world.step()
        self.broadcaster.tick()

    async def handle_client(self, websocket: ServerConnection) -> None:
        try:
            await websocket.send(protocol.encode_hello())
            self.broadcaster.register(websocket)
            async for message in websocket:
                await self.handle_message(websocket, message)
        except websockets.ConnectionClosed:
            pass
        finally:
            self.broadcaster.unregister(websocket)
            self.sessions.on_leave(websocket)
            logging.debug("Connection %s closed", websocket.remote_address)

    async def handle_message(self, websocket, message) -> None:
        """Dispatch one inbound message; anything unexpected is dropped."""

        try:
            payload = protocol.parse_client_message(message)
        except ValueError:
            logging.debug("Dropped malformed message from %s", websocket.remote_address)
            return
        message_type = payload.get("type")
        if message_type == "join":
            player_id = self.sessions.on_join(websocket, payload.get("name"), payload.get("avatar"))
            await websocket.send(protocol.encode_joined(player_id))
        elif message_type == "input":
            self.sessions.on_input(websocket, payload.get("dx"), payload.get("dy"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the Stellumin game server")
    parser.add_argument("--host", default=constants.HOST, help="Host interface to bind to")
    parser.add_argument(
        "--port",
        type=int,
        default=os.environ.get("PORT", str(constants.PORT)),
        help="Port to listen on (defaults to $PORT)",
    )
    parser.add_argument("--tick-hz", type=float, default=constants.TICK_HZ, help="Simulation steps per second")
    parser.add_argument("--world-width", type=float, default=constants.WORLD_WIDTH)
    parser.add_argument("--world-height", type=float, default=constants.WORLD_HEIGHT)
    parser.add_argument("--food-target", type=int, default=constants.FOOD_TARGET, help="Food particles kept in the world")
    parser.add_argument("--food-radius", type=float, default=constants.FOOD_RADIUS)
    parser.add_argument("--food-mass", type=float, default=constants.FOOD_MASS, help="Mass gained per particle")
    parser.add_argument("--initial-mass", type=float, default=constants.INITIAL_MASS)
    parser.add_argument("--base-radius", type=float, default=constants.BASE_RADIUS)
    parser.add_argument("--base-speed", type=float, default=constants.BASE_SPEED, help="Top speed at zero mass, units/s")
    parser.add_argument("--drag", type=float, default=constants.DRAG, help="Velocity smoothing factor in (0, 1)")
    parser.add_argument("--radius-growth-factor", type=float, default=constants.RADIUS_GROWTH_FACTOR)
    parser.add_argument("--mass-slowdown-factor", type=float, default=constants.MASS_SLOWDOWN_FACTOR)
    parser.add_argument("--spawn-half-extent", type=float, default=constants.SPAWN_HALF_EXTENT)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def config_from_args(args: argparse.Namespace) -> GameConfig:
    return GameConfig(
        host=args.host,
        port=args.port,
        tick_hz=args.tick_hz,
        world_width=args.world_width,
        world_height=args.world_height,
        food_target=args.food_target,
        food_radius=args.food_radius,
        food_mass=args.food_mass,
        initial_mass=args.initial_mass,
        base_radius=args.base_radius,
        base_speed=args.base_speed,
        drag=args.drag,
        radius_growth_factor=args.radius_growth_factor,
        mass_slowdown_factor=args.mass_slowdown_factor,
        spawn_half_extent=args.spawn_half_extent,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="[%(levelname)s] %(message)s")
    try:
        config = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))
    server = GameServer(config)
    asyncio.run(server.start())


if __name__ == "__main__":
    main()
