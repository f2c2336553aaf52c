"""JSON protocol helpers for the websocket transport."""

from __future__ import annotations

import json
from typing import List, Union

from . import constants


def parse_client_message(message: Union[str, bytes]) -> dict:
    """Parse a raw client ``message`` into a Python dictionary.

    Raises :class:`ValueError` for payloads that are not a JSON object.
    """

    try:
        payload = json.loads(message)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise ValueError("Invalid client message") from exc
    if not isinstance(payload, dict):
        raise ValueError("Client message must be a JSON object")
    return payload


def encode_hello() -> str:
    """Encode the greeting sent as soon as a connection is accepted."""

    return json.dumps({"type": "hello", "msg": constants.HELLO_MESSAGE})


def encode_joined(player_id: str) -> str:
    """Encode the reply to a successful ``join``."""

    return json.dumps({"type": "joined", "id": player_id})


def encode_state(timestamp_ms: int, width: float, height: float, players: List[dict], foods: List[dict]) -> str:
    """Encode a world snapshot for broadcasting to clients."""

    return json.dumps(
        {
            "type": "state",
            "t": timestamp_ms,
            "world": {"w": width, "h": height},
            "players": players,
            "foods": foods,
        }
    )
