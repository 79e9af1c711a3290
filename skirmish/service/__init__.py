"""
Service module for the battle engine.

Exposes the game service used by hosts and the town actions.
"""

from .game_service import ActionResult, GameService, HealthReport, PlayerProfile

__all__ = [
    # Import from game_service.py
    "ActionResult",
    "GameService",
    "HealthReport",
    "PlayerProfile",
]
