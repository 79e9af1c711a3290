"""
Battle manager for the battle engine.

Owns every active battle session: creation, per-turn resolution (player
action followed by the monster's counter-attack), potion use, fleeing, and
the commit of rewards and penalties to the canonical player record.
"""

import math
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from catchery import log_debug, log_warning

from skirmish.combat.battle_session import (
    AttackReport,
    BattleSession,
    DefeatReport,
    PlayerSnapshot,
    PotionReport,
    TurnResult,
    VictoryReport,
)
from skirmish.combat.damage import compute_attack
from skirmish.combat.progression import apply_level_ups, roll_victory_rewards
from skirmish.core.constants import AttackType, BattleOutcome, ItemKind, Turn
from skirmish.core.dice import RandomSource
from skirmish.core.error_handling import (
    InvalidStateError,
    InvalidTurnError,
    NotFoundError,
    require_in_range,
)
from skirmish.core.rules import GameRules
from skirmish.entities.catalog import MonsterCatalog
from skirmish.entities.monster import MonsterInstance
from skirmish.entities.player import Player
from skirmish.store.player_store import PlayerStore


class BattleManager:
    """
    Manages the lifecycle of battle sessions.

    Each session has its own lock, so actions on one session are resolved
    one at a time while distinct sessions proceed independently. When a
    canonical player is touched, its store lock is taken after the session
    lock. A session is removed in the same critical section that commits
    its terminal outcome, so rewards are applied exactly once.

    Attributes:
        store (PlayerStore):
            The canonical players.
        catalog (MonsterCatalog):
            The monster templates.
        rules (GameRules):
            The balance rules.
        rng (RandomSource):
            The randomness source for damage, rewards and monster selection.

    """

    def __init__(
        self,
        store: PlayerStore,
        catalog: MonsterCatalog,
        rules: GameRules | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.rules = rules or store.rules
        self.rng = rng or RandomSource()
        self._sessions: dict[str, BattleSession] = {}
        self._session_locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    # ============================================================================
    # SESSION REGISTRY
    # ============================================================================

    def active_count(self) -> int:
        """Returns the number of active sessions."""
        return len(self._sessions)

    def is_active(self, session_id: str) -> bool:
        """Returns True if the session exists."""
        return session_id in self._sessions

    def get_session(self, session_id: str) -> BattleSession:
        """
        Returns an active session.

        Raises:
            NotFoundError: If the session does not exist.
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise NotFoundError(
                f"Battle {session_id} not found",
                {"session_id": session_id},
            )
        return session

    @contextmanager
    def _locked_session(self, session_id: str) -> Iterator[BattleSession]:
        """Holds a session's lock for the duration of one action."""
        with self._registry_lock:
            lock = self._session_locks.get(session_id)
        if lock is None:
            raise NotFoundError(
                f"Battle {session_id} not found",
                {"session_id": session_id},
            )
        with lock:
            # A concurrent action may have ended the battle while we waited.
            session = self.get_session(session_id)
            yield session

    def _register(self, session: BattleSession) -> None:
        with self._registry_lock:
            self._sessions[session.id] = session
            self._session_locks[session.id] = threading.Lock()

    def _remove(self, session_id: str) -> None:
        with self._registry_lock:
            self._sessions.pop(session_id, None)
            self._session_locks.pop(session_id, None)
        log_debug("Battle removed", {"session_id": session_id})

    # ============================================================================
    # OPERATIONS
    # ============================================================================

    def start_battle(self, player_id: str, monster_id: int | None = None) -> BattleSession:
        """
        Starts a battle between a player and a monster.

        When no monster is given, or the id is unknown, a monster is picked
        at random within the configured level range of the player.

        Args:
            player_id (str):
                The canonical player.
            monster_id (int | None):
                The monster template to fight.

        Returns:
            BattleSession:
                The new session; the player acts first.

        Raises:
            NotFoundError: If the player is unknown.
            InvalidStateError: If the player has no hp left.

        """
        with self.store.lock_for(player_id):
            player = self.store.get(player_id)
            if not player.is_alive:
                raise InvalidStateError(
                    f"{player.name} is too weak to fight, heal in town first",
                    {"player_id": player_id, "hp": player.hp},
                )
            template = self.catalog.find(monster_id)
            if template is None:
                if monster_id is not None:
                    log_warning(
                        f"Monster {monster_id} not found, picking a random one",
                        {"player_id": player_id, "monster_id": monster_id},
                    )
                template = self.catalog.pick_for_level(
                    player.level, self.rng, self.rules.monster_level_range
                )
            session = BattleSession(
                player=PlayerSnapshot.from_player(player),
                monster=MonsterInstance.from_template(template),
            )

        session.add_log(f"A wild {template.name} (level {template.level}) appears!")
        self._register(session)
        log_debug(
            f"Battle started: {player.name} vs {template.name}",
            {"session_id": session.id, "player_id": player_id, "monster_id": template.id},
        )
        return session

    def attack(self, session_id: str, attack_type: AttackType = AttackType.NORMAL) -> TurnResult:
        """
        Resolves a player attack and the monster's counter-attack.

        Args:
            session_id (str):
                The active session.
            attack_type (AttackType):
                The kind of attack.

        Returns:
            TurnResult:
                The lines logged this turn, both hp values and the terminal
                outcome with its rewards or penalty, if any.

        Raises:
            NotFoundError: If the session or its player does not exist.
            InvalidTurnError: If it is not the player's turn.
            InvalidStateError: If the attack type is unknown.

        """
        if isinstance(attack_type, str):
            attack_type = attack_type.strip().lower()
        try:
            attack_type = AttackType(attack_type)
        except ValueError as e:
            raise InvalidStateError(
                f"Unknown attack type '{attack_type}'",
                {"session_id": session_id, "attack_type": str(attack_type)},
            ) from e

        with self._locked_session(session_id) as session:
            self._require_player_turn(session)
            player_lock = self.store.lock_for(session.player.player_id)

            with player_lock:
                lines: list[str] = []
                result = TurnResult(session_id=session.id)
                snapshot, monster = session.player, session.monster

                outcome = compute_attack(
                    snapshot, monster, attack_type, self.rng, self.rules
                )
                monster.take_damage(outcome.damage)

                snapshot.battle_stats.damage_dealt += outcome.damage
                snapshot.battle_stats.attacks_launched += 1
                if outcome.is_critical:
                    snapshot.battle_stats.critical_hits += 1

                lines.append(f"You hit the {monster.name} with {attack_type.description}")
                lines.append(f"You deal {outcome.describe()}")
                result.player_attack = AttackReport(
                    attacker=snapshot.name,
                    damage=outcome.damage,
                    is_critical=outcome.is_critical,
                    attack_type=attack_type,
                    remaining_hp=monster.current_hp,
                )

                if not monster.is_alive:
                    self._resolve_victory(session, lines, result)
                else:
                    self._monster_turn(session, lines, result)

                return self._finish_turn(session, lines, result)

    def use_potion(self, session_id: str, player_id: str) -> TurnResult:
        """
        Drinks a life potion during battle, then lets the monster strike back.

        The potion heals half of the player's max hp, capped at max hp. The
        new hp is written to the canonical player right away.

        Args:
            session_id (str):
                The active session.
            player_id (str):
                The canonical player holding the potion.

        Returns:
            TurnResult:
                The lines logged this turn and the resulting hp values.

        Raises:
            NotFoundError: If the session or the player does not exist.
            InvalidStateError: If the player has no potion or is not in this battle.

        """
        with self._locked_session(session_id) as session:
            self._require_player_turn(session)
            player_lock = self.store.lock_for(player_id)

            with player_lock:
                player = self.store.get(player_id)
                context = {"session_id": session_id, "player_id": player_id}
                if player.id != session.player.player_id:
                    raise InvalidStateError(
                        f"{player.name} is not part of this battle", context
                    )
                if not player.has_item(ItemKind.LIFE_POTION):
                    raise InvalidStateError("You have no life potions left", context)

                lines: list[str] = []
                result = TurnResult(session_id=session.id)
                snapshot = session.player

                heal_amount = math.floor(player.max_hp * self.rules.potion_heal_ratio)
                healed = snapshot.heal(heal_amount)
                potions_left = player.remove_item(ItemKind.LIFE_POTION)
                player.stats.potions_used += 1
                snapshot.battle_stats.potions_used += 1
                player.set_hp(snapshot.current_hp)

                lines.append("You drink a Life Potion")
                lines.append(f"You recover {healed} hit points")
                result.potion = PotionReport(healed=healed, potions_left=potions_left)

                self._monster_turn(session, lines, result)
                return self._finish_turn(session, lines, result)

    def flee(self, session_id: str) -> TurnResult:
        """
        Ends a battle without rewards or penalties.

        Raises:
            NotFoundError: If the session does not exist.
        """
        with self._locked_session(session_id) as session:
            lines = [f"You flee from the {session.monster.name}"]
            session.add_log(*lines)
            self._remove(session.id)
            return TurnResult(
                session_id=session.id,
                log=lines,
                battle_log=list(session.log),
                turn_count=session.turn_count,
                player_hp=session.player.current_hp,
                monster_hp=session.monster.current_hp,
                outcome=BattleOutcome.FLED,
            )

    # ============================================================================
    # TURN RESOLUTION
    # ============================================================================

    @staticmethod
    def _require_player_turn(session: BattleSession) -> None:
        if session.turn != Turn.PLAYER:
            raise InvalidTurnError(
                "It is not the player's turn",
                {"session_id": session.id, "turn": session.turn.value},
            )

    def _monster_turn(
        self,
        session: BattleSession,
        lines: list[str],
        result: TurnResult,
    ) -> None:
        """Resolves the monster's counter-attack, including a possible defeat."""
        session.turn = Turn.MONSTER
        snapshot, monster = session.player, session.monster

        outcome = compute_attack(monster, snapshot, AttackType.NORMAL, self.rng, self.rules)
        damage = max(self.rules.minimum_damage, outcome.damage)
        snapshot.take_damage(damage)

        lines.append(f"The {monster.name} attacks you")
        lines.append(f"You take {damage} damage" + (" (CRITICAL!)" if outcome.is_critical else ""))
        result.monster_attack = AttackReport(
            attacker=monster.name,
            damage=damage,
            is_critical=outcome.is_critical,
            attack_type=AttackType.NORMAL,
            remaining_hp=snapshot.current_hp,
        )

        if not snapshot.is_alive:
            self._resolve_defeat(session, lines, result)
        else:
            session.turn = Turn.PLAYER

    def _resolve_victory(
        self,
        session: BattleSession,
        lines: list[str],
        result: TurnResult,
    ) -> None:
        """Commits rewards to the canonical player and ends the battle."""
        monster = session.monster
        experience, gold = roll_victory_rewards(monster, self.rng, self.rules)

        player = self.store.get(session.player.player_id)
        self._commit_snapshot(session, player)
        player.experience += experience
        player.gold += gold
        player.stats.battles_won += 1
        player.monsters_defeated[monster.name] = (
            player.monsters_defeated.get(monster.name, 0) + 1
        )
        level_ups = apply_level_ups(player, self.rules)
        player.check_invariants()
        self._remove(session.id)

        lines.append(f"You defeated the {monster.name}!")
        lines.append(f"You gain {experience} experience and {gold} gold")
        for rewards in level_ups:
            lines.extend(rewards.describe())

        result.outcome = BattleOutcome.VICTORY
        result.victory = VictoryReport(
            experience_gained=experience,
            gold_gained=gold,
            leveled_up=bool(level_ups),
            new_level=player.level,
            new_stats=(
                {"max_hp": player.max_hp, "attack": player.attack, "defense": player.defense}
                if level_ups
                else None
            ),
            level_ups=level_ups,
        )
        log_debug(
            f"{player.name} defeated {monster.name}",
            {"session_id": session.id, "experience": experience, "gold": gold},
        )

    def _resolve_defeat(
        self,
        session: BattleSession,
        lines: list[str],
        result: TurnResult,
    ) -> None:
        """Revives the canonical player with a fraction of max hp and ends the battle."""
        player = self.store.get(session.player.player_id)
        self._commit_snapshot(session, player)
        player.stats.battles_lost += 1
        player.set_hp(math.floor(player.max_hp * self.rules.defeat_revive_ratio))
        player.check_invariants()
        self._remove(session.id)

        lines.append("You have been defeated!")
        result.outcome = BattleOutcome.DEFEAT
        result.defeat = DefeatReport(revived_hp=player.hp)
        log_debug(
            f"{player.name} was defeated by {session.monster.name}",
            {"session_id": session.id, "revived_hp": player.hp},
        )

    @staticmethod
    def _commit_snapshot(session: BattleSession, player: Player) -> None:
        """Writes the snapshot's hp and battle statistics to the canonical player."""
        stats = session.player.battle_stats
        committed = player.set_hp(session.player.current_hp)
        if committed != session.player.current_hp:
            # The record changed under the battle, e.g. a reset lowered max hp.
            log_warning(
                f"Clamped {player.name}'s hp from {session.player.current_hp} to {committed}",
                {
                    "session_id": session.id,
                    "player_id": player.id,
                    "snapshot_hp": session.player.current_hp,
                    "max_hp": player.max_hp,
                },
            )
        player.stats.total_damage_dealt += stats.damage_dealt
        player.stats.total_damage_received += stats.damage_received
        player.stats.critical_hits += stats.critical_hits

    def _finish_turn(
        self,
        session: BattleSession,
        lines: list[str],
        result: TurnResult,
    ) -> TurnResult:
        """Closes the turn: bookkeeping, log and invariant checks."""
        session.turn_count += 1
        session.add_log(*lines)
        context = {"session_id": session.id}
        require_in_range(
            session.player.current_hp, 0, session.player.max_hp, "player hp", context
        )
        require_in_range(
            session.monster.current_hp, 0, session.monster.max_hp, "monster hp", context
        )
        result.log = lines
        result.battle_log = list(session.log)
        result.turn_count = session.turn_count
        result.player_hp = session.player.current_hp
        result.monster_hp = session.monster.current_hp
        return result
