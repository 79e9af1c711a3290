"""
Player module for the battle engine.

Defines the canonical Player record owned by the player store, together with
its lifetime statistics and the helpers that keep its invariants.
"""

from uuid import uuid4

from pydantic import BaseModel, Field

from skirmish.core.constants import EquipmentSlot, ItemKind
from skirmish.core.error_handling import require_in_range, require_non_negative
from skirmish.core.rules import GameRules


class PlayerStatistics(BaseModel):
    """Cumulative statistics of a player across all battles."""

    total_damage_dealt: int = Field(0, ge=0)
    total_damage_received: int = Field(0, ge=0)
    critical_hits: int = Field(0, ge=0)
    potions_used: int = Field(0, ge=0)
    battles_won: int = Field(0, ge=0)
    battles_lost: int = Field(0, ge=0)


class Player(BaseModel):
    """
    Canonical record of a player.

    Only the battle manager and the town services mutate a player; every
    mutation keeps ``0 <= hp <= max_hp`` and non-negative inventory counts.
    """

    id: str = Field(
        default_factory=lambda: uuid4().hex,
        description="Unique identifier of the player.",
    )
    name: str = Field(min_length=1, description="Display name, unique in the store.")
    level: int = Field(1, ge=1)
    hp: int = Field(ge=0, description="Current hit points.")
    max_hp: int = Field(ge=1, description="Maximum hit points.")
    attack: int = Field(ge=0)
    defense: int = Field(ge=0)
    experience: int = Field(0, ge=0)
    experience_to_next_level: int = Field(ge=1)
    gold: int = Field(ge=0)
    critical_chance: float = Field(ge=0.0, le=1.0)
    critical_multiplier: float = Field(ge=1.0)
    inventory: dict[ItemKind, int] = Field(
        default_factory=dict,
        description="Item counts by item kind.",
    )
    equipment: dict[EquipmentSlot, ItemKind | None] = Field(
        default_factory=lambda: {slot: None for slot in EquipmentSlot},
    )
    monsters_defeated: dict[str, int] = Field(
        default_factory=dict,
        description="Victories per monster name.",
    )
    stats: PlayerStatistics = Field(default_factory=PlayerStatistics)

    # === Inventory ===

    def item_count(self, item: ItemKind) -> int:
        """Returns how many units of an item the player holds."""
        return self.inventory.get(item, 0)

    def has_item(self, item: ItemKind, amount: int = 1) -> bool:
        """Returns True if the player holds at least ``amount`` of an item."""
        return self.item_count(item) >= amount

    def add_item(self, item: ItemKind, amount: int = 1) -> int:
        """Adds units of an item and returns the new count."""
        require_non_negative(amount, "amount", {"item": item.value})
        self.inventory[item] = self.item_count(item) + amount
        return self.inventory[item]

    def remove_item(self, item: ItemKind, amount: int = 1) -> int:
        """
        Removes units of an item and returns the new count.

        Callers check ``has_item`` first; removing more than held is a bug.
        """
        remaining = self.item_count(item) - amount
        require_non_negative(
            remaining, f"inventory[{item.value}]", {"player_id": self.id}
        )
        self.inventory[item] = remaining
        return remaining

    # === Hit points ===

    def set_hp(self, value: int) -> int:
        """Sets current hp, clamped to [0, max_hp], and returns it."""
        self.hp = max(0, min(self.max_hp, value))
        return self.hp

    def heal_full(self) -> None:
        """Restores hp to the maximum."""
        self.hp = self.max_hp

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    def check_invariants(self) -> None:
        """
        Verifies the record's invariants.

        Raises:
            InvariantViolationError: If hp, gold or inventory are out of bounds.
        """
        context = {"player_id": self.id, "player": self.name}
        require_in_range(self.hp, 0, self.max_hp, "hp", context)
        require_non_negative(self.gold, "gold", context)
        for item, count in self.inventory.items():
            require_non_negative(count, f"inventory[{item.value}]", context)


def new_player(name: str, rules: GameRules, player_id: str | None = None) -> Player:
    """
    Creates a player with the starting stats of the rules.

    Args:
        name (str):
            The player's name.
        rules (GameRules):
            The rules providing the starting stats.
        player_id (str | None):
            Keep an existing id (used when resetting a player).

    Returns:
        Player:
            The fresh player.

    """
    start = rules.starting
    equipment: dict[EquipmentSlot, ItemKind | None] = {
        slot: None for slot in EquipmentSlot
    }
    equipment[EquipmentSlot.WEAPON] = start.weapon
    player = Player(
        name=name,
        level=start.level,
        hp=start.hp,
        max_hp=start.hp,
        attack=start.attack,
        defense=start.defense,
        experience=0,
        experience_to_next_level=start.experience_to_next_level,
        gold=start.gold,
        critical_chance=start.critical_chance,
        critical_multiplier=start.critical_multiplier,
        inventory=dict(start.inventory),
        equipment=equipment,
    )
    if player_id is not None:
        player.id = player_id
    return player
