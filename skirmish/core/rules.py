"""
Balance rules for the battle engine.

Collects every tunable number of the game (starting stats, damage variance,
attack type modifiers, rewards, level-up increments and town prices) in a
single pydantic model, optionally overridden from a JSON file.
"""

import json
from pathlib import Path
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, Field

from skirmish.core.constants import AttackType, ItemKind


class AttackModifier(BaseModel):
    """Scaling applied to base damage and to the damage multiplier."""

    base_scale: float = Field(
        1.0,
        description="Factor applied to the base damage (result is floored).",
    )
    multiplier_scale: float = Field(
        1.0,
        description="Factor applied to the running damage multiplier.",
    )


class StartingStats(BaseModel):
    """Stats a freshly created player starts with."""

    level: int = Field(1, ge=1)
    hp: int = Field(120, ge=1)
    attack: int = Field(20, ge=0)
    defense: int = Field(8, ge=0)
    experience_to_next_level: int = Field(100, ge=1)
    gold: int = Field(100, ge=0)
    critical_chance: float = Field(0.15, ge=0.0, le=1.0)
    critical_multiplier: float = Field(1.8, ge=1.0)
    inventory: dict[ItemKind, int] = Field(
        default_factory=lambda: {
            ItemKind.LIFE_POTION: 3,
            ItemKind.MANA_POTION: 2,
            ItemKind.IRON_SWORD: 1,
        },
        description="Initial item counts.",
    )
    weapon: ItemKind | None = Field(
        ItemKind.IRON_SWORD,
        description="Initially equipped weapon.",
    )


class GameRules(BaseModel):
    """
    All balance constants of the game.

    The defaults reproduce the live game; tests and hosts may override any
    field.
    """

    starting: StartingStats = Field(default_factory=StartingStats)

    # Damage.
    damage_variance: float = Field(
        0.20,
        ge=0.0,
        lt=1.0,
        description="Base damage varies uniformly in [-variance, +variance].",
    )
    default_critical_multiplier: float = Field(
        2.0,
        description="Critical multiplier for attackers that do not set one.",
    )
    minimum_damage: int = Field(1, ge=1)
    attack_modifiers: dict[AttackType, AttackModifier] = Field(
        default_factory=lambda: {
            AttackType.NORMAL: AttackModifier(),
            AttackType.HEAVY: AttackModifier(base_scale=1.3, multiplier_scale=1.5),
            AttackType.QUICK: AttackModifier(base_scale=0.8, multiplier_scale=0.7),
        },
    )

    # Encounters.
    monster_level_range: int = Field(
        2,
        ge=0,
        description="Random monsters are picked within this many levels.",
    )

    # Victory rewards.
    experience_per_level: int = 10
    experience_bonus_range: float = 0.5
    gold_per_level: int = 5
    gold_bonus_range: float = 0.3

    # Defeat and potions.
    defeat_revive_ratio: float = Field(0.10, ge=0.0, le=1.0)
    potion_heal_ratio: float = Field(0.5, ge=0.0, le=1.0)

    # Level ups.
    hp_increase_base: int = 25
    hp_increase_per_level: int = 5
    attack_increase_base: int = 4
    attack_increase_divisor: int = Field(2, ge=1)
    defense_increase_base: int = 3
    defense_increase_divisor: int = Field(3, ge=1)
    critical_chance_interval: int = Field(3, ge=1)
    critical_chance_increase: float = 0.05
    critical_chance_cap: float = Field(0.40, ge=0.0, le=1.0)
    level_gold_reward: int = 50
    potion_reward_interval: int = Field(2, ge=1)
    experience_curve_base: int = 100
    experience_curve_growth: float = 1.5

    # Town.
    heal_cost: int = Field(20, ge=0)
    potion_cost: int = Field(30, ge=0)

    def modifier_for(self, attack_type: AttackType) -> AttackModifier:
        """Returns the modifier for an attack type, neutral if unset."""
        return self.attack_modifiers.get(attack_type, AttackModifier())


def load_rules(path: Path | None) -> GameRules:
    """
    Loads game rules from a JSON object file, falling back to defaults.

    Args:
        path (Path | None):
            The JSON file with overrides. Missing keys keep their default.

    Returns:
        GameRules:
            The loaded rules.

    """
    if path is None:
        return GameRules()
    if not path.is_file():
        log_warning(
            f"Rules file '{path}' not found, using default rules.",
            {"path": str(path), "context": "load_rules"},
        )
        return GameRules()
    with open(path, encoding="utf-8") as f:
        data: Any = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected object in {path}, got {type(data).__name__}")
    return GameRules.model_validate(data)
