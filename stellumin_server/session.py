"""Join, leave and input handling for connected clients."""

from __future__ import annotations

import logging
import threading
from typing import Dict, Hashable, Optional

from . import constants, utils
from .world import World


class Sessions:
    """Binds transport connections to players in the :class:`World`.

    A connection is any hashable object. It is *unbound* until :meth:`on_join`
    and *bound* afterwards; :meth:`on_leave` ends the session for good. A
    connection that drops and comes back is a new session with a new player.
    """

    def __init__(self, world: World) -> None:
        self.world = world
        self._bindings: Dict[Hashable, str] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._bindings)

    def player_id_for(self, connection: Hashable) -> Optional[str]:
        return self._bindings.get(connection)

    def on_join(self, connection: Hashable, name: object = None, avatar: object = None) -> str:
        """Create a player for ``connection`` and return its id.

        Malformed names and avatars are coerced rather than rejected. A
        connection that is already bound keeps its player and gets the same
        id back.
        """

        with self._lock:
            existing = self._bindings.get(connection)
            if existing is not None:
                return existing
            player = self.world.add_player(
                utils.sanitize_text(name, constants.MAX_NAME_LENGTH, constants.DEFAULT_NAME),
                avatar[: constants.MAX_AVATAR_LENGTH] if isinstance(avatar, str) else "",
            )
            self._bindings[connection] = player.id
        logging.info("Player %r joined as %s", player.name, player.id)
        return player.id

    def on_leave(self, connection: Hashable) -> None:
        """Drop the binding and the player for ``connection``; safe to repeat."""

        with self._lock:
            player_id = self._bindings.pop(connection, None)
            if player_id is None:
                return
            self.world.remove_player(player_id)
        logging.info("Player %s left", player_id)

    def on_input(self, connection: Hashable, dx: object, dy: object) -> None:
        """Record the latest movement intent sent by ``connection``.

        Input from a connection that never joined, or has already left, is
        discarded.
        """

        player_id = self._bindings.get(connection)
        if player_id is None:
            return
        self.world.set_player_intent(player_id, utils.coerce_axis(dx), utils.coerce_axis(dy))
