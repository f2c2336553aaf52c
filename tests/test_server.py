"""
End-to-end tests of the connection handler and the broadcast pass, driven
through in-memory connections instead of real sockets. The real websocket
transport is covered in test_transport.py.
"""

import asyncio
import json
import random

import pytest

from stellumin_server.broadcast import SnapshotBroadcaster
from stellumin_server.config import GameConfig
from stellumin_server.main import GameServer, build_parser, config_from_args
from stellumin_server.utils import Vec2
from stellumin_server.world import World

from tests.conftest import FakeConnection, deliver_to_fakes


@pytest.fixture
def server(empty_config):
    game = GameServer(empty_config, World(empty_config, rng=random.Random(11)))
    game.broadcaster = SnapshotBroadcaster(game.world, fanout=deliver_to_fakes)
    return game


def test_handshake_join_and_input(server):
    connection = FakeConnection(
        [
            json.dumps({"type": "join", "name": "Alice", "avatar": "a.png"}),
            json.dumps({"type": "input", "dx": 5, "dy": -0.5}),
        ]
    )

    async def scenario():
        await server.handle_message(connection, connection.inbox[0])
        await server.handle_message(connection, connection.inbox[1])

    asyncio.run(scenario())
    assert connection.sent[0]["type"] == "joined"
    player = server.world.players[connection.sent[0]["id"]]
    assert player.name == "Alice"
    assert player.intent.to_tuple() == (1.0, -0.5)


def test_full_connection_lifecycle_removes_player(server):
    connection = FakeConnection([json.dumps({"type": "join", "name": "Alice"})])
    asyncio.run(server.handle_client(connection))
    assert connection.sent[0] == {"type": "hello", "msg": "stellumin-server"}
    assert connection.sent[1]["type"] == "joined"
    assert server.world.players == {}
    assert connection not in server.broadcaster.connections


@pytest.mark.parametrize(
    "raw",
    [
        "garbage",
        "[]",
        json.dumps({"type": "dance"}),
        json.dumps({"no": "type"}),
        json.dumps({"type": "input", "dx": 1, "dy": 1}),
    ],
)
def test_junk_and_out_of_protocol_messages_are_ignored(server, raw):
    connection = FakeConnection([raw])
    asyncio.run(server.handle_message(connection, raw))
    assert connection.sent == []
    assert server.world.players == {}


def test_tick_broadcasts_identical_state_to_everyone(server):
    joined = FakeConnection()
    lurker = FakeConnection()

    async def scenario():
        server.broadcaster.register(joined)
        server.broadcaster.register(lurker)
        await server.handle_message(joined, json.dumps({"type": "join", "name": "Alice"}))
        await server.tick()

    asyncio.run(scenario())
    [joined_state] = joined.sent_of_type("state")
    [lurker_state] = lurker.sent_of_type("state")
    assert joined_state == lurker_state
    assert [player["name"] for player in joined_state["players"]] == ["Alice"]


def test_unregistered_connection_gets_no_more_snapshots(server):
    staying = FakeConnection()
    leaving = FakeConnection()
    server.broadcaster.register(staying)
    server.broadcaster.register(leaving)
    asyncio.run(server.tick())
    server.broadcaster.unregister(leaving)
    asyncio.run(server.tick())
    assert len(staying.sent_of_type("state")) == 2
    assert len(leaving.sent_of_type("state")) == 1


def test_broadcaster_stamps_wall_clock():
    config = GameConfig(food_target=3)
    world = World(config, rng=random.Random(12))
    broadcaster = SnapshotBroadcaster(world, clock=lambda: 99, fanout=deliver_to_fakes)
    connection = FakeConnection()
    broadcaster.register(connection)
    broadcaster.tick()
    [state] = connection.sent
    assert state["t"] == 99
    assert len(state["foods"]) == 3


def test_scenario_one_tick_consumes_adjacent_food(server):
    player = server.world.add_player("p", "", position=Vec2(0, 0))
    server.world.spawn_food(Vec2(5, 0), radius=6)
    asyncio.run(server.tick())
    assert player.mass == 11
    assert server.world.food == {}


def test_parser_builds_config(monkeypatch):
    monkeypatch.setenv("PORT", "9100")
    args = build_parser().parse_args(["--tick-hz", "30", "--food-target", "10", "--drag", "0.5"])
    config = config_from_args(args)
    assert config.port == 9100
    assert config.tick_hz == 30
    assert config.food_target == 10
    assert config.drag == 0.5
    assert config.tick_interval == pytest.approx(1 / 30)


def test_parser_rejects_bad_drag():
    args = build_parser().parse_args(["--drag", "1.5"])
    with pytest.raises(ValueError):
        config_from_args(args)


def test_connection_survives_oversized_and_deeply_nested_input(server):
    huge = "1" + "0" * 400
    connection = FakeConnection(
        [
            "[" * 200000 + "]" * 200000,
            json.dumps({"type": "join", "name": "Alice"}),
            '{"type": "input", "dx": %s, "dy": -%s}' % (huge, huge),
        ]
    )
    seen = []

    async def scenario():
        original = server.handle_message

        async def spy(websocket, message):
            await original(websocket, message)
            player_id = server.sessions.player_id_for(websocket)
            if player_id is not None:
                seen.append(server.world.players[player_id].intent)

        server.handle_message = spy
        await server.handle_client(connection)

    asyncio.run(scenario())
    assert [message["type"] for message in connection.sent] == ["hello", "joined"]
    assert seen[-1] == Vec2(1.0, -1.0)


def test_bad_port_environment_is_a_usage_error(monkeypatch):
    monkeypatch.setenv("PORT", "eighty")
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
