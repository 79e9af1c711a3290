"""
Centralized error handling for the battle engine.

Domain code raises the exceptions defined here; the service layer runs each
operation through an ``ErrorHandler`` which turns them into ``GameError``
records that callers can map to their own status codes.
"""

import logging
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


class ErrorSeverity(Enum):
    """Enumeration of error severity levels for the game's error handling system."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorKind(Enum):
    """Kinds of failures an operation can report."""
    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    INVARIANT_VIOLATION = "invariant_violation"


class GameException(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.INVALID_STATE
    severity: ErrorSeverity = ErrorSeverity.MEDIUM

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}


class NotFoundError(GameException):
    """Unknown player, session or monster."""

    kind = ErrorKind.NOT_FOUND
    severity = ErrorSeverity.LOW


class InvalidStateError(GameException):
    """The action is illegal in the current state (no potions, no gold, ...)."""

    kind = ErrorKind.INVALID_STATE
    severity = ErrorSeverity.MEDIUM


class InvalidTurnError(InvalidStateError):
    """The action was submitted while it is not the player's turn."""


class InvariantViolationError(GameException):
    """A state invariant does not hold. Always a bug."""

    kind = ErrorKind.INVARIANT_VIOLATION
    severity = ErrorSeverity.CRITICAL


@dataclass
class GameError:
    """Represents a game error with kind, severity, context, and optional exception information."""
    message: str
    kind: ErrorKind
    severity: ErrorSeverity
    context: dict[str, Any] = field(default_factory=dict)
    exception: Optional[Exception] = None


class ErrorHandler:
    """Converts domain exceptions into logged ``GameError`` records."""

    def __init__(self) -> None:
        """Initialize the ErrorHandler with a logger and empty error history."""
        self.logger = logging.getLogger("skirmish.errors")
        self.error_history: list[GameError] = []

    def handle(self, error: GameError) -> None:
        """Record an error and log it according to its severity."""
        self.error_history.append(error)

        # Prefix context keys to avoid conflicts with logging system reserved keys
        safe_context = (
            {f"ctx_{key}": value for key, value in error.context.items()}
            if error.context
            else {}
        )

        if error.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(f"CRITICAL: {error.message}", extra=safe_context)
            if error.exception:
                self.logger.critical(
                    "".join(traceback.format_exception(error.exception))
                )
        elif error.severity == ErrorSeverity.HIGH:
            self.logger.error(f"ERROR: {error.message}", extra=safe_context)
        elif error.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(f"WARNING: {error.message}", extra=safe_context)
        else:
            self.logger.info(f"INFO: {error.message}", extra=safe_context)

    def run(
        self,
        operation: Callable[[], T],
        context: Optional[dict[str, Any]] = None,
    ) -> tuple[Optional[T], Optional[GameError]]:
        """
        Execute an operation, capturing domain errors.

        Args:
            operation (Callable[[], T]):
                The operation to run.
            context (dict[str, Any] | None):
                Context recorded with any error (ids, action name, ...).

        Returns:
            tuple[T | None, GameError | None]:
                The operation's value and no error, or no value and the error.

        """
        try:
            return operation(), None
        except GameException as e:
            error = GameError(
                message=e.message,
                kind=e.kind,
                severity=e.severity,
                context={**(context or {}), **e.context},
                exception=e,
            )
            self.handle(error)
            return None, error


def require_non_negative(value: int, name: str, context: Optional[dict[str, Any]] = None) -> int:
    """
    Validates that a counter is non-negative.

    Raises:
        InvariantViolationError: If the value is negative.
    """
    if value < 0:
        raise InvariantViolationError(
            f"{name} must be non-negative, got: {value}",
            {**(context or {}), "name": name, "value": value},
        )
    return value


def require_in_range(
    value: int,
    low: int,
    high: int,
    name: str,
    context: Optional[dict[str, Any]] = None,
) -> int:
    """
    Validates that a value lies in [low, high].

    Raises:
        InvariantViolationError: If the value is out of range.
    """
    if value < low or value > high:
        raise InvariantViolationError(
            f"{name} must be between {low} and {high}, got: {value}",
            {**(context or {}), "name": name, "value": value, "low": low, "high": high},
        )
    return value
