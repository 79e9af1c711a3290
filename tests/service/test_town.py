"""
Tests for the town services.
"""

import pytest

from skirmish.core.constants import ItemKind
from skirmish.core.error_handling import InvalidStateError, NotFoundError
from skirmish.service.town import buy_potion, heal_in_town


@pytest.fixture
def player(store):
    player, _, _ = store.create_or_fetch("Aria")
    return player


def test_heal_restores_full_hp_for_a_fee(store, rules, player):
    player.hp = 10
    healed = heal_in_town(store, player.id, rules)
    assert healed is player
    assert player.hp == player.max_hp
    assert player.gold == 80


def test_heal_charges_even_at_full_hp(store, rules, player):
    heal_in_town(store, player.id, rules)
    assert player.gold == 80


def test_heal_without_enough_gold(store, rules, player):
    player.gold = 19
    player.hp = 10
    with pytest.raises(InvalidStateError):
        heal_in_town(store, player.id, rules)
    assert player.gold == 19
    assert player.hp == 10


def test_heal_revives_defeated_player(store, rules, player):
    player.hp = 0
    heal_in_town(store, player.id, rules)
    assert player.is_alive


def test_buy_potion(store, rules, player):
    buy_potion(store, player.id, rules)
    assert player.gold == 70
    assert player.item_count(ItemKind.LIFE_POTION) == 4


def test_buy_potion_with_exact_gold(store, rules, player):
    player.gold = 30
    buy_potion(store, player.id, rules)
    assert player.gold == 0


def test_buy_potion_without_enough_gold(store, rules, player):
    player.gold = 29
    with pytest.raises(InvalidStateError):
        buy_potion(store, player.id, rules)
    assert player.gold == 29
    assert player.item_count(ItemKind.LIFE_POTION) == 3


def test_unknown_player(store, rules):
    with pytest.raises(NotFoundError):
        heal_in_town(store, "nobody", rules)
    with pytest.raises(NotFoundError):
        buy_potion(store, "nobody", rules)


@pytest.fixture
def reset_before_lock(store, monkeypatch):
    """Makes every lock acquisition race with a reset of the player."""
    lock_for = store.lock_for

    def reset_then_lock(player_id):
        store.create_or_fetch("Aria", reset=True)
        return lock_for(player_id)

    monkeypatch.setattr(store, "lock_for", reset_then_lock)


def test_heal_charges_the_current_record(store, rules, player, reset_before_lock):
    player.gold = 5
    healed = heal_in_town(store, player.id, rules)
    assert healed is store.get(player.id)
    assert healed is not player
    assert healed.gold == 80
    assert player.gold == 5


def test_buy_potion_charges_the_current_record(store, rules, player, reset_before_lock):
    player.gold = 5
    bought = buy_potion(store, player.id, rules)
    assert bought is store.get(player.id)
    assert bought.gold == 70
    assert bought.item_count(ItemKind.LIFE_POTION) == 4
