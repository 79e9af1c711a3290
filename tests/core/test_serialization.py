"""
Tests for player serialization and the legacy inventory shape.
"""

import pytest

from skirmish.core.constants import ItemKind
from skirmish.core.error_handling import InvariantViolationError
from skirmish.entities.player import new_player
from skirmish.entities.serialization import (
    inventory_from_legacy,
    inventory_to_legacy,
    player_from_dict,
    player_to_dict,
)


def test_inventory_from_legacy_counts_entries():
    counts = inventory_from_legacy(
        ["Life Potion", "Life Potion", "Iron Sword", "Mystery Box", "mana_potion"]
    )
    assert counts == {
        ItemKind.LIFE_POTION: 2,
        ItemKind.IRON_SWORD: 1,
        ItemKind.MANA_POTION: 1,
    }


def test_inventory_to_legacy():
    items = inventory_to_legacy({ItemKind.LIFE_POTION: 2, ItemKind.MANA_POTION: 0})
    assert items == ["Life Potion", "Life Potion"]


def test_player_dict_with_legacy_inventory(rules):
    player = new_player("Aria", rules)
    data = player_to_dict(player, legacy_inventory=True)
    assert sorted(data["inventory"]) == sorted(
        ["Life Potion"] * 3 + ["Mana Potion"] * 2 + ["Iron Sword"]
    )

    restored = player_from_dict(data)
    assert restored.id == player.id
    assert restored.inventory == player.inventory


def test_player_dict_with_counts(rules):
    player = new_player("Aria", rules)
    player.monsters_defeated["Goblin"] = 2
    restored = player_from_dict(player_to_dict(player))
    assert restored == player


def test_player_from_dict_accepts_display_name_keys(rules):
    data = player_to_dict(new_player("Aria", rules))
    data["inventory"] = {"Life Potion": 1, "Unknown": 4}
    restored = player_from_dict(data)
    assert restored.inventory == {ItemKind.LIFE_POTION: 1}


def test_player_from_dict_rejects_hp_above_max(rules):
    data = player_to_dict(new_player("Aria", rules))
    data["hp"] = 500
    with pytest.raises(InvariantViolationError):
        player_from_dict(data)


def test_player_from_dict_rejects_negative_item_count(rules):
    data = player_to_dict(new_player("Aria", rules))
    data["inventory"] = {"life_potion": -4}
    with pytest.raises(InvariantViolationError):
        player_from_dict(data)
