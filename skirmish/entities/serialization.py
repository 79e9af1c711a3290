"""
Player serialization and deserialization functions.

This module converts players to and from plain JSON-compatible dictionaries.
It is also the only place where the legacy inventory shape (a list of item
names, one entry per unit) is understood.
"""

from collections import Counter
from typing import Any

from catchery import log_warning

from skirmish.core.constants import ItemKind
from skirmish.entities.player import Player

# Display names used by the legacy client for inventory entries.
LEGACY_ITEM_NAMES: dict[ItemKind, str] = {
    ItemKind.LIFE_POTION: "Life Potion",
    ItemKind.MANA_POTION: "Mana Potion",
    ItemKind.IRON_SWORD: "Iron Sword",
}


def _item_from_name(name: str) -> ItemKind | None:
    """Resolves an item kind from either its value or its legacy display name."""
    for item, display in LEGACY_ITEM_NAMES.items():
        if name == display:
            return item
    try:
        return ItemKind(name)
    except ValueError:
        return None


def inventory_from_legacy(items: list[str]) -> dict[ItemKind, int]:
    """
    Converts a legacy list of item names into item counts.

    Unknown names are skipped with a warning.

    Args:
        items (list[str]):
            One entry per unit held, e.g. ``["Life Potion", "Life Potion"]``.

    Returns:
        dict[ItemKind, int]:
            The item counts.

    """
    counts: Counter[ItemKind] = Counter()
    for name in items:
        item = _item_from_name(name)
        if item is None:
            log_warning(
                f"Unknown legacy inventory entry '{name}', skipping",
                {"entry": name, "context": "inventory_from_legacy"},
            )
            continue
        counts[item] += 1
    return dict(counts)


def inventory_to_legacy(inventory: dict[ItemKind, int]) -> list[str]:
    """Converts item counts into the legacy list of item names."""
    items: list[str] = []
    for item, count in inventory.items():
        items.extend([LEGACY_ITEM_NAMES.get(item, item.value)] * count)
    return items


def player_to_dict(player: Player, legacy_inventory: bool = False) -> dict[str, Any]:
    """
    Serializes a player into a JSON-compatible dictionary.

    Args:
        player (Player):
            The player to serialize.
        legacy_inventory (bool):
            Emit the inventory as a list of item names.

    Returns:
        dict[str, Any]:
            The serialized player.

    """
    data = player.model_dump(mode="json")
    if legacy_inventory:
        data["inventory"] = inventory_to_legacy(player.inventory)
    return data


def player_from_dict(data: dict[str, Any]) -> Player:
    """
    Creates a Player from a dictionary, accepting either inventory shape.

    Args:
        data (dict[str, Any]):
            The serialized player.

    Returns:
        Player:
            The deserialized player.

    Raises:
        InvariantViolationError: If hp exceeds max hp or an item count is
            negative.

    """
    data = dict(data)
    inventory = data.get("inventory", {})
    if isinstance(inventory, list):
        data["inventory"] = inventory_from_legacy(inventory)
    elif isinstance(inventory, dict):
        converted: dict[ItemKind, int] = {}
        for name, count in inventory.items():
            item = _item_from_name(name) if isinstance(name, str) else name
            if item is None:
                log_warning(
                    f"Unknown inventory entry '{name}', skipping",
                    {"entry": name, "context": "player_from_dict"},
                )
                continue
            converted[item] = converted.get(item, 0) + count
        data["inventory"] = converted
    player = Player.model_validate(data)
    player.check_invariants()
    return player
