"""
Constants and enumerations for the battle engine.

Defines the enumerations for attack types, turns, battle outcomes, monster
categories and inventory items used throughout the engine.
"""

from enum import Enum


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().replace("_", " ").capitalize()


class AttackType(NiceEnum):
    """Defines the kind of attack a combatant can perform."""

    NORMAL = "normal"
    HEAVY = "heavy"
    QUICK = "quick"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this attack type."""
        return {
            AttackType.NORMAL: "🗡️",
            AttackType.HEAVY: "🔨",
            AttackType.QUICK: "⚡",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this attack type."""
        return {
            AttackType.NORMAL: "bold white",
            AttackType.HEAVY: "bold red",
            AttackType.QUICK: "bold yellow",
        }.get(self, "dim white")

    @property
    def description(self) -> str:
        """Returns the narrative label used in the battle log."""
        return {
            AttackType.NORMAL: "a normal attack",
            AttackType.HEAVY: "a heavy attack",
            AttackType.QUICK: "a quick attack",
        }[self]

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies attack type color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class Turn(NiceEnum):
    """Whose action is pending in a battle session."""

    PLAYER = "player"
    MONSTER = "monster"


class BattleOutcome(NiceEnum):
    """Terminal outcomes of a battle session."""

    VICTORY = "victory"
    DEFEAT = "defeat"
    FLED = "fled"

    @property
    def color(self) -> str:
        """Returns the color string associated with this outcome."""
        return {
            BattleOutcome.VICTORY: "bold green",
            BattleOutcome.DEFEAT: "bold red",
            BattleOutcome.FLED: "bold yellow",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies outcome color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class MonsterCategory(NiceEnum):
    """Category tag of a monster template."""

    BASIC = "basic"
    WARRIOR = "warrior"
    TANK = "tank"
    UNDEAD = "undead"
    MAGE = "mage"
    BOSS = "boss"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this monster category."""
        return {
            MonsterCategory.BASIC: "👺",
            MonsterCategory.WARRIOR: "🪓",
            MonsterCategory.TANK: "🛡️",
            MonsterCategory.UNDEAD: "💀",
            MonsterCategory.MAGE: "🔮",
            MonsterCategory.BOSS: "🐉",
        }.get(self, "❔")


class ItemKind(NiceEnum):
    """Kinds of items a player can carry in the inventory."""

    LIFE_POTION = "life_potion"
    MANA_POTION = "mana_potion"
    IRON_SWORD = "iron_sword"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this item."""
        return {
            ItemKind.LIFE_POTION: "🧪",
            ItemKind.MANA_POTION: "🔷",
            ItemKind.IRON_SWORD: "⚔️",
        }.get(self, "❔")


class EquipmentSlot(NiceEnum):
    """Equipment slots of a player."""

    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"
