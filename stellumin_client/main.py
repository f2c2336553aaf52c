"""Entry point for the headless bot swarm."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Optional, Sequence

from .network import NetworkClient
from .steering import BotSteering


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run Stellumin bots against a server")
    parser.add_argument("--host", default="127.0.0.1", help="Server host")
    parser.add_argument("--port", type=int, default=8080, help="Server port")
    parser.add_argument("--count", type=int, default=4, help="Number of bots to spawn")
    parser.add_argument("--name", default="Bot", help="Name prefix for the bots")
    return parser.parse_args(argv)


async def run_bot(uri: str, name: str) -> None:
    network = NetworkClient(uri, name)
    player_id = await network.connect()
    logging.info("Bot %s joined as %s", name, player_id)
    steering = BotSteering(player_id)
    try:
        while True:
            state = await network.next_state()
            if state.get("type") == "disconnect":
                logging.info("Bot %s disconnected", name)
                return
            dx, dy = steering.update(state)
            await network.send_input(dx, dy)
    finally:
        await network.close()


async def run_bots(args: argparse.Namespace) -> None:
    uri = f"ws://{args.host}:{args.port}"
    await asyncio.gather(*(run_bot(uri, f"{args.name}{index + 1}") for index in range(args.count)))


def main(argv: Optional[Sequence[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    args = parse_args(argv)
    asyncio.run(run_bots(args))


if __name__ == "__main__":
    main()
