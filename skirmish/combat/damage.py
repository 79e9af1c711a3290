"""
Damage module for the battle engine.

Computes the outcome of a single attack: damage variance, critical hits,
attack type modifiers and defense mitigation. The computation is pure apart
from the randomness it draws from the injected source.
"""

import math
from typing import Any, Protocol

from catchery import log_debug
from pydantic import BaseModel, Field

from skirmish.core.constants import AttackType
from skirmish.core.dice import RandomSource
from skirmish.core.rules import GameRules


class Attacker(Protocol):
    """Anything that can attack: a player snapshot or a monster instance."""

    name: str
    attack: int
    critical_chance: float
    critical_multiplier: Any


class Defender(Protocol):
    """Anything that can be attacked."""

    name: str
    defense: int


class AttackOutcome(BaseModel):
    """The result of one attack."""

    damage: int = Field(ge=1, description="Damage dealt, never below one.")
    is_critical: bool = Field(False, description="Whether the attack was critical.")
    attack_type: AttackType = AttackType.NORMAL
    base_damage: int = Field(
        0,
        description="Base damage after variance and attack type scaling.",
    )
    damage_multiplier: float = Field(
        1.0,
        description="Final multiplier after critical and attack type scaling.",
    )

    def describe(self) -> str:
        """Returns the damage as displayed in the battle log."""
        text = f"{self.damage} damage"
        if self.is_critical:
            text += " (CRITICAL!)"
        return text


def roll_base_damage(attack: int, rng: RandomSource, variance: float) -> int:
    """
    Applies the random variance to an attack value.

    Args:
        attack (int):
            The attacker's attack stat.
        rng (RandomSource):
            The randomness source.
        variance (float):
            The maximum relative deviation, e.g. 0.2 for +/-20%.

    Returns:
        int:
            ``floor(attack * (1 + v))`` with ``v`` uniform in [-variance, variance].

    """
    roll = rng.uniform(-variance, variance)
    return math.floor(attack * (1 + roll))


def compute_attack(
    attacker: Attacker,
    defender: Defender,
    attack_type: AttackType,
    rng: RandomSource,
    rules: GameRules,
) -> AttackOutcome:
    """
    Computes the outcome of an attack.

    The base damage is the attacker's attack with random variance. A critical
    hit, rolled with the attacker's critical chance, sets the multiplier to
    the attacker's critical multiplier. The attack type then scales both the
    base damage and the multiplier. Defense is subtracted last and the result
    is never less than the minimum damage, so every attack makes progress.

    Args:
        attacker (Attacker):
            The attacking combatant.
        defender (Defender):
            The defending combatant.
        attack_type (AttackType):
            The kind of attack.
        rng (RandomSource):
            The randomness source.
        rules (GameRules):
            The balance rules.

    Returns:
        AttackOutcome:
            The damage dealt and how it was obtained.

    """
    base = roll_base_damage(attacker.attack, rng, rules.damage_variance)

    is_critical = False
    multiplier = 1.0
    if rng.chance(attacker.critical_chance or 0.0):
        is_critical = True
        multiplier = attacker.critical_multiplier or rules.default_critical_multiplier

    modifier = rules.modifier_for(attack_type)
    multiplier *= modifier.multiplier_scale
    base = math.floor(base * modifier.base_scale)

    damage = math.floor(max(rules.minimum_damage, base * multiplier - defender.defense))

    log_debug(
        f"{attacker.name} -> {defender.name}: {damage} damage",
        {
            "attack_type": attack_type.value,
            "base": base,
            "multiplier": multiplier,
            "defense": defender.defense,
            "critical": is_critical,
        },
    )

    return AttackOutcome(
        damage=damage,
        is_critical=is_critical,
        attack_type=attack_type,
        base_damage=base,
        damage_multiplier=multiplier,
    )
