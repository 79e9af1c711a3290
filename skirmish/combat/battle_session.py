"""
Battle session module for the battle engine.

Defines the ephemeral state of one encounter: the private player snapshot,
the monster instance, the turn bookkeeping and the battle log, plus the
result models returned for each resolved action.
"""

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, Field

from skirmish.combat.progression import LevelUpRewards
from skirmish.core.constants import AttackType, BattleOutcome, Turn
from skirmish.entities.monster import MonsterInstance
from skirmish.entities.player import Player


class BattleStats(BaseModel):
    """Statistics accumulated during a single battle."""

    damage_dealt: int = Field(0, ge=0)
    damage_received: int = Field(0, ge=0)
    critical_hits: int = Field(0, ge=0)
    attacks_launched: int = Field(0, ge=0)
    potions_used: int = Field(0, ge=0)


class PlayerSnapshot(BaseModel):
    """
    Session-scoped copy of a player's combat stats.

    Changes to the snapshot reach the canonical player only when the battle
    manager commits them.
    """

    player_id: str
    name: str
    level: int = Field(ge=1)
    max_hp: int = Field(ge=1)
    current_hp: int = Field(ge=0)
    attack: int = Field(ge=0)
    defense: int = Field(ge=0)
    critical_chance: float = Field(ge=0.0, le=1.0)
    critical_multiplier: float = Field(ge=1.0)
    battle_stats: BattleStats = Field(default_factory=BattleStats)

    @classmethod
    def from_player(cls, player: Player) -> "PlayerSnapshot":
        """Copies the combat-relevant stats of a canonical player."""
        return cls(
            player_id=player.id,
            name=player.name,
            level=player.level,
            max_hp=player.max_hp,
            current_hp=player.hp,
            attack=player.attack,
            defense=player.defense,
            critical_chance=player.critical_chance,
            critical_multiplier=player.critical_multiplier,
        )

    @property
    def is_alive(self) -> bool:
        return self.current_hp > 0

    def take_damage(self, amount: int) -> int:
        """Reduces current hp, floored at zero, and returns the remaining hp."""
        self.current_hp = max(0, self.current_hp - amount)
        self.battle_stats.damage_received += amount
        return self.current_hp

    def heal(self, amount: int) -> int:
        """Heals up to max hp and returns the amount actually restored."""
        previous = self.current_hp
        self.current_hp = min(self.max_hp, self.current_hp + amount)
        return self.current_hp - previous


class BattleSession(BaseModel):
    """One active encounter between a player snapshot and a monster."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    player: PlayerSnapshot
    monster: MonsterInstance
    turn: Turn = Turn.PLAYER
    turn_count: int = Field(0, ge=0)
    log: list[str] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def add_log(self, *lines: str) -> None:
        """Appends lines to the battle log."""
        self.log.extend(lines)


class AttackReport(BaseModel):
    """One attack as reported to the caller."""

    attacker: str
    damage: int
    is_critical: bool
    attack_type: AttackType
    remaining_hp: int = Field(description="Defender's hp after the attack.")


class VictoryReport(BaseModel):
    """Rewards committed to the player when a battle is won."""

    experience_gained: int
    gold_gained: int
    leveled_up: bool
    new_level: int
    new_stats: dict[str, int] | None = Field(
        None,
        description="Max hp, attack and defense after leveling, if leveled.",
    )
    level_ups: list[LevelUpRewards] = Field(default_factory=list)


class DefeatReport(BaseModel):
    """Penalty applied to the player when a battle is lost."""

    revived_hp: int


class PotionReport(BaseModel):
    """Effect of a potion used during battle."""

    healed: int
    potions_left: int


class TurnResult(BaseModel):
    """
    Result of one resolved action.

    ``log`` holds the lines produced by this action; ``battle_log`` is the
    complete session log up to and including them.
    """

    session_id: str
    log: list[str] = Field(default_factory=list)
    battle_log: list[str] = Field(default_factory=list)
    turn_count: int = 0
    player_hp: int = 0
    monster_hp: int = 0
    outcome: BattleOutcome | None = None
    player_attack: AttackReport | None = None
    monster_attack: AttackReport | None = None
    potion: PotionReport | None = None
    victory: VictoryReport | None = None
    defeat: DefeatReport | None = None

    @property
    def battle_ended(self) -> bool:
        return self.outcome is not None
