"""
Tests for the balance rules and the random number source.
"""

import json

import pytest

from skirmish.core.constants import AttackType
from skirmish.core.dice import RandomSource
from skirmish.core.rules import AttackModifier, GameRules, load_rules


def test_default_rules():
    rules = GameRules()
    assert rules.damage_variance == pytest.approx(0.20)
    assert rules.minimum_damage == 1
    assert rules.heal_cost == 20
    assert rules.potion_cost == 30
    assert rules.modifier_for(AttackType.HEAVY).base_scale == pytest.approx(1.3)
    assert rules.modifier_for(AttackType.QUICK).multiplier_scale == pytest.approx(0.7)
    assert rules.modifier_for(AttackType.NORMAL) == AttackModifier()


def test_missing_modifier_is_neutral():
    rules = GameRules(attack_modifiers={})
    modifier = rules.modifier_for(AttackType.HEAVY)
    assert modifier.base_scale == 1.0
    assert modifier.multiplier_scale == 1.0


def test_load_rules_without_path():
    assert load_rules(None) == GameRules()


def test_load_rules_missing_file(tmp_path):
    assert load_rules(tmp_path / "absent.json") == GameRules()


def test_load_rules_overrides(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text(
        json.dumps(
            {
                "heal_cost": 5,
                "damage_variance": 0.0,
                "starting": {"gold": 1000},
                "attack_modifiers": {"heavy": {"base_scale": 2.0, "multiplier_scale": 1.0}},
            }
        ),
        encoding="utf-8",
    )
    rules = load_rules(path)
    assert rules.heal_cost == 5
    assert rules.damage_variance == 0.0
    assert rules.starting.gold == 1000
    assert rules.starting.hp == 120
    assert rules.potion_cost == 30
    assert rules.modifier_for(AttackType.HEAVY).base_scale == 2.0


def test_load_rules_rejects_non_object(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_rules(path)


def test_seeded_sources_repeat():
    a, b = RandomSource(42), RandomSource(42)
    assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]
    assert a.uniform(-0.2, 0.2) == b.uniform(-0.2, 0.2)


def test_chance_edges():
    rng = RandomSource(1)
    assert not any(rng.chance(0.0) for _ in range(100))
    assert all(rng.chance(1.0) for _ in range(100))


def test_choice(make_rng):
    assert make_rng(randoms=[0.0]).choice(["a", "b", "c"]) == "a"
    assert make_rng(randoms=[0.5]).choice(["a", "b", "c"]) == "b"
    assert make_rng(randoms=[0.99]).choice(["a", "b", "c"]) == "c"
    with pytest.raises(ValueError):
        RandomSource().choice([])
