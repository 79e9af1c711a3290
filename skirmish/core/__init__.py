"""
Core system module for the battle engine.

This module contains the fundamental components shared by the rest of the
engine: constants, balance rules, the random number source, error handling
and console display utilities.
"""

from .constants import (
    AttackType,
    BattleOutcome,
    EquipmentSlot,
    ItemKind,
    MonsterCategory,
    Turn,
)
from .dice import RandomSource
from .error_handling import (
    ErrorHandler,
    ErrorKind,
    ErrorSeverity,
    GameError,
    GameException,
    InvalidStateError,
    InvalidTurnError,
    InvariantViolationError,
    NotFoundError,
)
from .rules import GameRules, load_rules

__all__ = [
    # Import from constants.py
    "AttackType",
    "BattleOutcome",
    "EquipmentSlot",
    "ItemKind",
    "MonsterCategory",
    "Turn",
    # Import from dice.py
    "RandomSource",
    # Import from error_handling.py
    "ErrorHandler",
    "ErrorKind",
    "ErrorSeverity",
    "GameError",
    "GameException",
    "InvalidStateError",
    "InvalidTurnError",
    "InvariantViolationError",
    "NotFoundError",
    # Import from rules.py
    "GameRules",
    "load_rules",
]
