"""
Progression module for the battle engine.

Rolls victory rewards and resolves level ups, including multi-level jumps
from a single large experience gain and the milestones granted every few
levels.
"""

import math

from catchery import log_debug
from pydantic import BaseModel, Field

from skirmish.core.constants import ItemKind
from skirmish.core.dice import RandomSource
from skirmish.core.rules import GameRules
from skirmish.entities.monster import MonsterInstance
from skirmish.entities.player import Player


class LevelUpRewards(BaseModel):
    """Breakdown of what a single level up granted."""

    new_level: int = Field(ge=2)
    hp_increase: int = Field(ge=0)
    attack_increase: int = Field(ge=0)
    defense_increase: int = Field(ge=0)
    gold_reward: int = Field(ge=0)
    critical_chance_increase: float = Field(
        0.0,
        description="Critical chance actually gained (zero once capped).",
    )
    potion_reward: bool = Field(False, description="Whether a life potion was granted.")

    def describe(self) -> list[str]:
        """Returns battle log lines narrating the level up."""
        lines = [f"Level up! You are now level {self.new_level}"]
        lines.append(
            f"Max HP +{self.hp_increase}, attack +{self.attack_increase}, "
            f"defense +{self.defense_increase}, {self.gold_reward} gold"
        )
        if self.critical_chance_increase > 0:
            lines.append(
                f"Critical chance +{round(self.critical_chance_increase * 100)}%"
            )
        if self.potion_reward:
            lines.append("You receive a bonus Life Potion")
        return lines


def experience_for_level(level: int, rules: GameRules) -> int:
    """
    Returns the experience needed to advance past ``level``.

    Args:
        level (int):
            The current level.
        rules (GameRules):
            The balance rules.

    Returns:
        int:
            ``floor(base * growth ** (level - 1))``.

    """
    return math.floor(
        rules.experience_curve_base * rules.experience_curve_growth ** (level - 1)
    )


def roll_victory_rewards(
    monster: MonsterInstance,
    rng: RandomSource,
    rules: GameRules,
) -> tuple[int, int]:
    """
    Rolls the experience and gold granted for defeating a monster.

    Experience is ``floor(level * 10 * (1 + r * 0.5))``. Gold is the
    monster's fixed reward when it has one, otherwise
    ``floor(level * 5 * (1 + r * 0.3))``.

    Args:
        monster (MonsterInstance):
            The defeated monster.
        rng (RandomSource):
            The randomness source.
        rules (GameRules):
            The balance rules.

    Returns:
        tuple[int, int]:
            The experience and gold gained.

    """
    experience = math.floor(
        monster.level
        * rules.experience_per_level
        * (1 + rng.random() * rules.experience_bonus_range)
    )
    if monster.gold_reward:
        gold = monster.gold_reward
    else:
        gold = math.floor(
            monster.level
            * rules.gold_per_level
            * (1 + rng.random() * rules.gold_bonus_range)
        )
    return experience, gold


def level_up(player: Player, rules: GameRules) -> LevelUpRewards:
    """
    Advances a player by one level.

    Raises max hp, attack and defense, heals to full, grants gold, and on
    milestone levels raises the critical chance (capped) or grants a life
    potion. The experience threshold grows geometrically.

    Args:
        player (Player):
            The canonical player; modified in place.
        rules (GameRules):
            The balance rules.

    Returns:
        LevelUpRewards:
            What the level up granted.

    """
    player.level += 1
    level = player.level

    hp_increase = rules.hp_increase_base + rules.hp_increase_per_level * level
    attack_increase = rules.attack_increase_base + level // rules.attack_increase_divisor
    defense_increase = rules.defense_increase_base + level // rules.defense_increase_divisor

    player.max_hp += hp_increase
    player.heal_full()
    player.attack += attack_increase
    player.defense += defense_increase

    critical_increase = 0.0
    if level % rules.critical_chance_interval == 0:
        previous = player.critical_chance
        player.critical_chance = min(
            rules.critical_chance_cap,
            player.critical_chance + rules.critical_chance_increase,
        )
        critical_increase = max(0.0, player.critical_chance - previous)

    gold_reward = rules.level_gold_reward * level
    player.gold += gold_reward

    potion_reward = level % rules.potion_reward_interval == 0
    if potion_reward:
        player.add_item(ItemKind.LIFE_POTION)

    player.experience_to_next_level = experience_for_level(level, rules)

    log_debug(
        f"{player.name} reached level {level}",
        {"player_id": player.id, "hp": player.max_hp, "attack": player.attack},
    )

    return LevelUpRewards(
        new_level=level,
        hp_increase=hp_increase,
        attack_increase=attack_increase,
        defense_increase=defense_increase,
        gold_reward=gold_reward,
        critical_chance_increase=critical_increase,
        potion_reward=potion_reward,
    )


def apply_level_ups(player: Player, rules: GameRules) -> list[LevelUpRewards]:
    """
    Resolves every level up the player's experience allows.

    Each iteration subtracts the current threshold before leveling, so a
    single large reward can advance several levels, each applying its own
    increments.

    Args:
        player (Player):
            The canonical player; modified in place.
        rules (GameRules):
            The balance rules.

    Returns:
        list[LevelUpRewards]:
            One entry per level gained, in order.

    """
    rewards: list[LevelUpRewards] = []
    while player.experience >= player.experience_to_next_level:
        player.experience -= player.experience_to_next_level
        rewards.append(level_up(player, rules))
    return rewards
