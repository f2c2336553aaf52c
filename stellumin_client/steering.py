"""Turn world state into movement intents for bots."""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Tuple


class BotSteering:
    """Steer toward the nearest food particle in the latest ``state`` message."""

    def __init__(self, player_id: str) -> None:
        self.player_id = player_id
        self._last_intent: Tuple[float, float] = (0.0, 0.0)

    def update(self, state: Dict[str, Any]) -> Tuple[float, float]:
        me = self._find_self(state)
        if me is None:
            return self._last_intent
        foods = state.get("foods") or []
        if not foods:
            self._last_intent = (0.0, 0.0)
            return self._last_intent
        target = min(foods, key=lambda f: (f["x"] - me["x"]) ** 2 + (f["y"] - me["y"]) ** 2)
        dx = target["x"] - me["x"]
        dy = target["y"] - me["y"]
        distance = math.hypot(dx, dy)
        if distance == 0:
            self._last_intent = (0.0, 0.0)
        else:
            self._last_intent = (dx / distance, dy / distance)
        return self._last_intent

    def _find_self(self, state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for player in state.get("players") or []:
            if player.get("id") == self.player_id:
                return player
        return None
