"""
Player store for the battle engine.

Keeps the canonical player records for the lifetime of the process. The
hosting process creates one store, injects it into the battle manager and
the service, and tears it down when it stops.
"""

import threading

from catchery import log_debug

from skirmish.core.error_handling import InvalidStateError, NotFoundError
from skirmish.core.rules import GameRules
from skirmish.entities.player import Player, new_player


class PlayerStore:
    """
    Keyed store of canonical players, indexed by id and by name.

    Every player has its own re-entrant lock; callers hold it while
    mutating the record so concurrent actions never interleave.

    Attributes:
        rules (GameRules):
            The rules used to create and reset players.

    """

    def __init__(self, rules: GameRules | None = None) -> None:
        self.rules = rules or GameRules()
        self._players: dict[str, Player] = {}
        self._ids_by_name: dict[str, str] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._players

    def create_or_fetch(self, name: str, reset: bool = False) -> tuple[Player, bool, bool]:
        """
        Returns the player with the given name, creating it if needed.

        Args:
            name (str):
                The player's name.
            reset (bool):
                Replace an existing player with fresh stats, keeping its id.

        Returns:
            tuple[Player, bool, bool]:
                The player, whether it was created, and whether it was reset.

        Raises:
            InvalidStateError: If the name is empty.

        """
        name = name.strip() if isinstance(name, str) else ""
        if not name:
            raise InvalidStateError("A player name is required", {"name": name})

        with self._registry_lock:
            player_id = self._ids_by_name.get(name)
            if player_id is None:
                player = new_player(name, self.rules)
                self._players[player.id] = player
                self._ids_by_name[name] = player.id
                self._locks[player.id] = threading.RLock()
                log_debug(f"Created player {name}", {"player_id": player.id})
                return player, True, False
            lock = self._locks[player_id]

        if not reset:
            return self._players[player_id], False, False

        with lock:
            player = new_player(name, self.rules, player_id=player_id)
            self._players[player_id] = player
        log_debug(f"Reset player {name}", {"player_id": player_id})
        return player, False, True

    def get(self, player_id: str) -> Player:
        """
        Returns the canonical player with the given id.

        Raises:
            NotFoundError: If the player is unknown.
        """
        player = self._players.get(player_id)
        if player is None:
            raise NotFoundError(
                f"Player {player_id} not found",
                {"player_id": player_id},
            )
        return player

    def find_by_name(self, name: str) -> Player | None:
        """Returns the player with the given name, or None."""
        player_id = self._ids_by_name.get(name)
        if player_id is None:
            return None
        return self._players.get(player_id)

    def lock_for(self, player_id: str) -> threading.RLock:
        """
        Returns the lock guarding a player's record.

        Raises:
            NotFoundError: If the player is unknown.
        """
        lock = self._locks.get(player_id)
        if lock is None:
            raise NotFoundError(
                f"Player {player_id} not found",
                {"player_id": player_id},
            )
        return lock

    def all(self) -> list[Player]:
        """Returns every stored player."""
        return list(self._players.values())

    def clear(self) -> None:
        """Drops every player. Used by the host on shutdown and by tests."""
        with self._registry_lock:
            self._players.clear()
            self._ids_by_name.clear()
            self._locks.clear()
