"""
Combat system module for the battle engine.

This module handles all combat mechanics including damage calculation,
battle session management, turn resolution and player progression.
"""

from .battle_manager import BattleManager
from .battle_session import BattleSession, PlayerSnapshot, TurnResult
from .damage import AttackOutcome, compute_attack
from .progression import LevelUpRewards, apply_level_ups, level_up

__all__ = [
    # Import from battle_manager.py
    "BattleManager",
    # Import from battle_session.py
    "BattleSession",
    "PlayerSnapshot",
    "TurnResult",
    # Import from damage.py
    "AttackOutcome",
    "compute_attack",
    # Import from progression.py
    "LevelUpRewards",
    "apply_level_ups",
    "level_up",
]
