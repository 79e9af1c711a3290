"""
Town services for the battle engine.

City actions that spend gold outside of battle: a full heal at the temple
and buying life potions at the shop.
"""

from catchery import log_debug

from skirmish.core.constants import ItemKind
from skirmish.core.error_handling import InvalidStateError
from skirmish.core.rules import GameRules
from skirmish.entities.player import Player
from skirmish.store.player_store import PlayerStore


def _spend_gold(player: Player, cost: int, action: str) -> None:
    """Deducts gold, refusing when the player cannot afford it."""
    if player.gold < cost:
        raise InvalidStateError(
            f"Not enough gold to {action}: {cost} needed, {player.gold} held",
            {"player_id": player.id, "cost": cost, "gold": player.gold},
        )
    player.gold -= cost


def heal_in_town(store: PlayerStore, player_id: str, rules: GameRules) -> Player:
    """
    Restores a player's hp to the maximum for a fixed price.

    Raises:
        NotFoundError: If the player is unknown.
        InvalidStateError: If the player cannot afford it.
    """
    with store.lock_for(player_id):
        player = store.get(player_id)
        _spend_gold(player, rules.heal_cost, "heal")
        player.heal_full()
        player.check_invariants()
    log_debug(f"{player.name} healed in town", {"player_id": player_id, "gold": player.gold})
    return player


def buy_potion(store: PlayerStore, player_id: str, rules: GameRules) -> Player:
    """
    Sells one life potion to a player for a fixed price.

    Raises:
        NotFoundError: If the player is unknown.
        InvalidStateError: If the player cannot afford it.
    """
    with store.lock_for(player_id):
        player = store.get(player_id)
        _spend_gold(player, rules.potion_cost, "buy a potion")
        player.add_item(ItemKind.LIFE_POTION)
        player.check_invariants()
    log_debug(
        f"{player.name} bought a Life Potion",
        {"player_id": player_id, "potions": player.item_count(ItemKind.LIFE_POTION)},
    )
    return player
