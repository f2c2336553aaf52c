"""Websocket networking client."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional

import websockets
from websockets.asyncio.client import ClientConnection, connect


class NetworkClient:
    """Asynchronous websocket client that exchanges state messages with the server."""

    def __init__(self, uri: str, name: str, avatar: str = "") -> None:
        self.uri = uri
        self.name = name
        self.avatar = avatar
        self.player_id: Optional[str] = None
        self.websocket: Optional[ClientConnection] = None
        self._incoming: asyncio.Queue[Dict[str, Any]] = asyncio.Queue()
        self._receiver_task: Optional[asyncio.Task[None]] = None

    async def connect(self) -> str:
        """Connect, join the game and return the assigned player id."""

        self.websocket = await connect(self.uri)
        hello = await self._recv_json()
        if hello.get("type") != "hello":
            raise RuntimeError(f"Unexpected greeting: {hello!r}")
        await self._send_json({"type": "join", "name": self.name, "avatar": self.avatar})
        # State broadcasts may arrive before the join reply.
        while True:
            reply = await self._recv_json()
            if reply.get("type") == "joined":
                break
        self.player_id = reply["id"]
        self._receiver_task = asyncio.create_task(self._receiver_loop())
        return self.player_id

    async def _receiver_loop(self) -> None:
        assert self.websocket is not None
        try:
            async for message in self.websocket:
                try:
                    payload = json.loads(message)
                except json.JSONDecodeError:
                    continue
                await self._incoming.put(payload)
        except websockets.ConnectionClosed:
            pass
        finally:
            await self._incoming.put({"type": "disconnect"})

    async def _send_json(self, payload: Dict[str, Any]) -> None:
        if self.websocket is None:
            raise RuntimeError("Client is not connected")
        await self.websocket.send(json.dumps(payload))

    async def _recv_json(self) -> Dict[str, Any]:
        if self.websocket is None:
            raise RuntimeError("Client is not connected")
        message = await self.websocket.recv()
        return json.loads(message)

    async def send_input(self, dx: float, dy: float) -> None:
        await self._send_json({"type": "input", "dx": dx, "dy": dy})

    async def next_state(self) -> Dict[str, Any]:
        """Return the next ``state`` message, or a ``disconnect`` marker."""

        while True:
            payload = await self._incoming.get()
            if payload.get("type") in ("state", "disconnect"):
                return payload

    async def close(self) -> None:
        if self.websocket is not None:
            await self.websocket.close()
        if self._receiver_task is not None:
            await self._receiver_task
