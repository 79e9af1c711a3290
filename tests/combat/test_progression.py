"""
Tests for victory rewards and level ups.
"""

import pytest

from skirmish.combat.progression import (
    apply_level_ups,
    experience_for_level,
    level_up,
    roll_victory_rewards,
)
from skirmish.core.constants import ItemKind
from skirmish.core.dice import RandomSource
from skirmish.entities.monster import MonsterInstance, MonsterTemplate
from skirmish.entities.player import new_player


@pytest.fixture
def player(rules):
    return new_player("Aria", rules)


def make_monster(level=2, gold_reward=25):
    template = MonsterTemplate(
        id=9, name="Orc", level=level, hp=60, attack=18, defense=6, gold_reward=gold_reward
    )
    return MonsterInstance.from_template(template)


def test_experience_curve(rules):
    assert experience_for_level(1, rules) == 100
    assert experience_for_level(2, rules) == 150
    assert experience_for_level(3, rules) == 225
    assert experience_for_level(4, rules) == 337


def test_single_level_up(player, rules):
    """
    Reaching level 2 adds 35 max hp, 5 attack, 3 defense, 100 gold and a potion.
    """
    rewards = level_up(player, rules)
    assert rewards.new_level == 2
    assert player.level == 2
    assert player.max_hp == 155
    assert player.hp == 155
    assert player.attack == 25
    assert player.defense == 11
    assert player.gold == 200
    assert player.item_count(ItemKind.LIFE_POTION) == 4
    assert player.critical_chance == pytest.approx(0.15)
    assert player.experience_to_next_level == 150
    assert rewards.potion_reward
    assert rewards.critical_chance_increase == 0.0


def test_level_up_heals_wounded_player(player, rules):
    player.hp = 3
    level_up(player, rules)
    assert player.hp == player.max_hp


def test_multi_level_jump_applies_each_level(player, rules):
    """
    250 experience at level 1 passes both the 100 and 150 thresholds.
    """
    player.experience = 250
    rewards = apply_level_ups(player, rules)

    assert [r.new_level for r in rewards] == [2, 3]
    assert player.level == 3
    assert player.experience == 0
    assert player.experience_to_next_level == 225
    # Level 2: +35 hp, +5 atk, +3 def. Level 3: +40 hp, +5 atk, +4 def.
    assert player.max_hp == 120 + 35 + 40
    assert player.attack == 20 + 5 + 5
    assert player.defense == 8 + 3 + 4
    assert player.gold == 100 + 100 + 150
    assert player.critical_chance == pytest.approx(0.20)
    assert rewards[1].critical_chance_increase == pytest.approx(0.05)
    # Only level 2 grants a potion.
    assert player.item_count(ItemKind.LIFE_POTION) == 4


def test_leftover_experience_carries_over(player, rules):
    player.experience = 130
    rewards = apply_level_ups(player, rules)
    assert len(rewards) == 1
    assert player.experience == 30
    assert player.experience < player.experience_to_next_level


def test_no_level_up_below_threshold(player, rules):
    player.experience = 99
    assert apply_level_ups(player, rules) == []
    assert player.level == 1
    assert player.experience == 99


def test_critical_chance_is_capped(player, rules):
    player.level = 2
    player.critical_chance = 0.38
    rewards = level_up(player, rules)
    assert player.level == 3
    assert player.critical_chance == pytest.approx(0.40)
    assert rewards.critical_chance_increase == pytest.approx(0.02)

    player.level = 5
    rewards = level_up(player, rules)
    assert player.critical_chance == pytest.approx(0.40)
    assert rewards.critical_chance_increase == 0.0


def test_level_up_description(player, rules):
    player.level = 2
    lines = level_up(player, rules).describe()
    assert lines[0] == "Level up! You are now level 3"
    assert any("Critical chance +5%" in line for line in lines)
    assert not any("Life Potion" in line for line in lines)


def test_victory_rewards_use_fixed_gold(rules, make_rng):
    rng = make_rng(randoms=[0.5])
    experience, gold = roll_victory_rewards(make_monster(level=2, gold_reward=25), rng, rules)
    assert experience == 25
    assert gold == 25


def test_victory_rewards_roll_gold_without_fixed_reward(rules, make_rng):
    rng = make_rng(randoms=[0.0, 0.5])
    experience, gold = roll_victory_rewards(make_monster(level=2, gold_reward=0), rng, rules)
    assert experience == 20
    assert gold == 11


def test_victory_rewards_bounds(rules):
    """
    Experience stays within [level * 10, level * 15) for any roll.
    """
    monster = make_monster(level=3, gold_reward=0)
    for seed in range(100):
        experience, gold = roll_victory_rewards(monster, RandomSource(seed), rules)
        assert 30 <= experience < 45
        assert 15 <= gold < 20
