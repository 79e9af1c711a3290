"""
Entity module for the battle engine.

This module defines the canonical player record, the monster templates and
instances, the monster catalog and the player serialization boundary.
"""

from .catalog import MonsterCatalog
from .monster import MonsterInstance, MonsterTemplate
from .player import Player, PlayerStatistics, new_player

__all__ = [
    # Import from catalog.py
    "MonsterCatalog",
    # Import from monster.py
    "MonsterInstance",
    "MonsterTemplate",
    # Import from player.py
    "Player",
    "PlayerStatistics",
    "new_player",
]
