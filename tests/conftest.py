import json
import random

import pytest

from stellumin_server.config import GameConfig
from stellumin_server.session import Sessions
from stellumin_server.world import World


class FakeConnection:
    """Stands in for a websocket connection: records sends, replays an inbox."""

    remote_address = ("127.0.0.1", 50000)

    def __init__(self, inbox=()):
        self.inbox = list(inbox)
        self.sent = []

    async def send(self, message):
        self.sent.append(json.loads(message))

    def __aiter__(self):
        return self._replay()

    async def _replay(self):
        for message in self.inbox:
            yield message

    def sent_of_type(self, message_type):
        return [message for message in self.sent if message["type"] == message_type]


@pytest.fixture
def empty_config() -> GameConfig:
    """Config with food spawning disabled."""
    return GameConfig(food_target=0)


@pytest.fixture
def world(empty_config) -> World:
    return World(empty_config, rng=random.Random(7))


@pytest.fixture
def sessions(world) -> Sessions:
    return Sessions(world)


def deliver_to_fakes(connections, payload):
    """Fan-out for in-memory connections: hands each one the payload synchronously."""
    for connection in connections:
        connection.sent.append(json.loads(payload))
