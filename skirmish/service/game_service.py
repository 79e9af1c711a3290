"""
Game service for the battle engine.

The interface a host (HTTP layer, terminal front-end, tests) talks to. Every
call returns an ``ActionResult`` carrying either a value or a ``GameError``;
domain exceptions never escape, so the host only maps error kinds to its own
status codes.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Generic, Optional, TypeVar

from pydantic import BaseModel

from skirmish.combat.battle_manager import BattleManager
from skirmish.combat.battle_session import BattleSession, TurnResult
from skirmish.core.constants import AttackType
from skirmish.core.dice import RandomSource
from skirmish.core.error_handling import ErrorHandler, ErrorKind, GameError
from skirmish.core.rules import GameRules
from skirmish.entities.catalog import MonsterCatalog
from skirmish.entities.monster import MonsterTemplate
from skirmish.entities.player import Player
from skirmish.entities.serialization import player_to_dict
from skirmish.service import town
from skirmish.store.player_store import PlayerStore

T = TypeVar("T")


@dataclass
class ActionResult(Generic[T]):
    """Outcome of a service call: a value, or the error that prevented it."""

    value: Optional[T] = None
    error: Optional[GameError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error else None

    def unwrap(self) -> T:
        """Returns the value, raising if the call failed."""
        if self.error is not None:
            raise RuntimeError(f"{self.error.kind.value}: {self.error.message}")
        return self.value  # type: ignore[return-value]


class PlayerProfile(BaseModel):
    """A player as returned by create-or-fetch."""

    player: Player
    is_new_player: bool
    was_reset: bool


class HealthReport(BaseModel):
    """Liveness information for the host."""

    status: str
    timestamp: datetime
    players: int
    active_battles: int


class GameService:
    """
    Facade over the player store, monster catalog and battle manager.

    Attributes:
        rules (GameRules):
            The balance rules shared by every component.
        store (PlayerStore):
            The canonical players.
        catalog (MonsterCatalog):
            The monster templates.
        battles (BattleManager):
            The active battles.
        errors (ErrorHandler):
            Records and logs every failed call.

    """

    def __init__(
        self,
        store: PlayerStore | None = None,
        catalog: MonsterCatalog | None = None,
        rules: GameRules | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self.rules = rules or (store.rules if store else GameRules())
        self.store = store or PlayerStore(self.rules)
        self.catalog = catalog or MonsterCatalog.load()
        self.battles = BattleManager(self.store, self.catalog, self.rules, rng)
        self.errors = ErrorHandler()

    def _run(self, action: str, operation: Callable[[], T], **context: Any) -> ActionResult[T]:
        value, error = self.errors.run(operation, {"action": action, **context})
        return ActionResult(value=value, error=error)

    # ============================================================================
    # PLAYERS
    # ============================================================================

    def create_or_fetch_player(self, name: str, reset: bool = False) -> ActionResult[PlayerProfile]:
        """Returns the player with this name, creating or resetting it as asked."""

        def operation() -> PlayerProfile:
            player, is_new, was_reset = self.store.create_or_fetch(name, reset)
            return PlayerProfile(player=player, is_new_player=is_new, was_reset=was_reset)

        return self._run("create_or_fetch_player", operation, name=name, reset=reset)

    def get_player(self, player_id: str) -> ActionResult[Player]:
        """Returns a canonical player."""
        return self._run("get_player", lambda: self.store.get(player_id), player_id=player_id)

    def export_player(self, player_id: str, legacy_inventory: bool = False) -> ActionResult[dict[str, Any]]:
        """Returns a player as a JSON-compatible dict, optionally with the legacy inventory list."""
        return self._run(
            "export_player",
            lambda: player_to_dict(self.store.get(player_id), legacy_inventory),
            player_id=player_id,
        )

    def heal_player_in_town(self, player_id: str) -> ActionResult[Player]:
        """Full heal for a fixed price in gold."""
        return self._run(
            "heal_player_in_town",
            lambda: town.heal_in_town(self.store, player_id, self.rules),
            player_id=player_id,
        )

    def buy_potion(self, player_id: str) -> ActionResult[Player]:
        """Buys one life potion for a fixed price in gold."""
        return self._run(
            "buy_potion",
            lambda: town.buy_potion(self.store, player_id, self.rules),
            player_id=player_id,
        )

    # ============================================================================
    # MONSTERS
    # ============================================================================

    def list_monster_templates(self) -> ActionResult[list[MonsterTemplate]]:
        """Returns the whole monster catalog."""
        return self._run("list_monster_templates", self.catalog.all)

    def suggest_monster(self, player_id: str) -> ActionResult[MonsterTemplate]:
        """Returns a random monster suited to the player's level."""

        def operation() -> MonsterTemplate:
            player = self.store.get(player_id)
            return self.catalog.pick_for_level(
                player.level, self.battles.rng, self.rules.monster_level_range
            )

        return self._run("suggest_monster", operation, player_id=player_id)

    # ============================================================================
    # BATTLES
    # ============================================================================

    def start_battle(self, player_id: str, monster_id: int | None = None) -> ActionResult[BattleSession]:
        """Starts a battle against the given or a random monster."""
        return self._run(
            "start_battle",
            lambda: self.battles.start_battle(player_id, monster_id),
            player_id=player_id,
            monster_id=monster_id,
        )

    def submit_attack(
        self,
        session_id: str,
        attack_type: AttackType | str = AttackType.NORMAL,
    ) -> ActionResult[TurnResult]:
        """Attacks the monster; the monster strikes back if it survives."""
        return self._run(
            "submit_attack",
            lambda: self.battles.attack(session_id, attack_type),  # type: ignore[arg-type]
            session_id=session_id,
            attack_type=str(attack_type),
        )

    def use_potion(self, session_id: str, player_id: str) -> ActionResult[TurnResult]:
        """Drinks a life potion mid-battle; the monster strikes back."""
        return self._run(
            "use_potion",
            lambda: self.battles.use_potion(session_id, player_id),
            session_id=session_id,
            player_id=player_id,
        )

    def flee_battle(self, session_id: str) -> ActionResult[TurnResult]:
        """Runs away from a battle."""
        return self._run(
            "flee_battle",
            lambda: self.battles.flee(session_id),
            session_id=session_id,
        )

    # ============================================================================
    # HOST
    # ============================================================================

    def health(self) -> HealthReport:
        """Returns liveness information."""
        return HealthReport(
            status="OK",
            timestamp=datetime.now(timezone.utc),
            players=len(self.store),
            active_battles=self.battles.active_count(),
        )
