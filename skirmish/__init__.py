"""
Skirmish: a turn-based battle engine for a browser role-playing game.

The engine holds authoritative player and monster state and resolves attack,
potion and flee actions during battle sessions.
"""

__version__ = "0.1.0"
