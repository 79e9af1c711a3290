"""
Storage module for the battle engine.
"""

from .player_store import PlayerStore

__all__ = ["PlayerStore"]
