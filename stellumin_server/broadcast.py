"""Fan-out of world snapshots to every connected client."""

from __future__ import annotations

import time
from typing import Callable, Iterable, Set

from websockets.asyncio.server import broadcast

from .world import World


def wall_clock_ms() -> int:
    """Milliseconds since the epoch, as stamped on ``state`` messages."""

    return int(time.time() * 1000)


class SnapshotBroadcaster:
    """Sends the same ``state`` payload to every registered connection.

    Connections are registered as soon as they are greeted, so clients that
    have not joined yet still receive snapshots. The fan-out writes to each
    connection without awaiting, so a client that stops reading never holds
    up the tick; closed connections are skipped by the fan-out itself.
    """

    def __init__(
        self,
        world: World,
        clock: Callable[[], int] = wall_clock_ms,
        fanout: Callable[[Iterable, str], None] = broadcast,
    ) -> None:
        self.world = world
        self.connections: Set = set()
        self._clock = clock
        self._fanout = fanout

    def register(self, connection) -> None:
        self.connections.add(connection)

    def unregister(self, connection) -> None:
        self.connections.discard(connection)

    def tick(self) -> str:
        """Encode one snapshot and hand it to all connections in a single pass."""

        payload = self.world.snapshot(self._clock())
        if self.connections:
            self._fanout(list(self.connections), payload)
        return payload
