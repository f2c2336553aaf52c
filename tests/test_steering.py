import math

import pytest

from stellumin_client.steering import BotSteering


def state(players, foods):
    return {"type": "state", "t": 0, "world": {"w": 100, "h": 100}, "players": players, "foods": foods}


def test_steers_toward_nearest_food():
    steering = BotSteering("me")
    dx, dy = steering.update(
        state(
            [{"id": "me", "x": 0, "y": 0}, {"id": "other", "x": 5, "y": 5}],
            [{"id": 1, "x": 30, "y": 40, "r": 6}, {"id": 2, "x": 0, "y": -10, "r": 6}],
        )
    )
    assert (dx, dy) == pytest.approx((0.0, -1.0))
    assert math.hypot(dx, dy) == pytest.approx(1.0)


def test_keeps_last_intent_when_not_in_state():
    steering = BotSteering("me")
    steering.update(state([{"id": "me", "x": 0, "y": 0}], [{"id": 1, "x": 3, "y": 4, "r": 6}]))
    assert steering.update(state([], [])) == pytest.approx((0.6, 0.8))


def test_stops_when_no_food():
    steering = BotSteering("me")
    assert steering.update(state([{"id": "me", "x": 0, "y": 0}], [])) == (0.0, 0.0)
