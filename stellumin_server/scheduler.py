"""Fixed-rate tick scheduling for the simulation loop."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable


class TickScheduler:
    """Runs ``on_tick`` once per ``interval`` seconds on a fixed grid.

    Ticks never overlap: the next one only starts after the previous
    ``on_tick`` call has returned. When a tick runs past one or more
    deadlines, those deadlines are skipped and the schedule realigns to the
    next future one; ``overruns`` counts the skipped ticks. An exception
    raised by ``on_tick`` is logged and the loop carries on.
    """

    def __init__(
        self,
        interval: float,
        on_tick: Callable[[], Awaitable[None]],
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.ticks: int = 0
        self.overruns: int = 0
        self._on_tick = on_tick
        self._clock = clock
        self._sleep = sleep
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Ask the loop to exit after the tick in progress."""

        self._running = False

    async def run(self) -> None:
        self._running = True
        next_deadline = self._clock()
        while self._running:
            try:
                await self._on_tick()
            except Exception:
                logging.exception("Tick %s failed", self.ticks + 1)
            self.ticks += 1
            next_deadline += self.interval
            now = self._clock()
            if now > next_deadline:
                missed = int((now - next_deadline) // self.interval) + 1
                next_deadline += missed * self.interval
                self.overruns += missed
                logging.warning("Tick %s overran; skipping %s tick(s)", self.ticks, missed)
            if not self._running:
                break
            await self._sleep(next_deadline - now)
