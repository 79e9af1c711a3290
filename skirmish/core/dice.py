"""
Random number source for the battle engine.

Wraps a seedable ``random.Random`` so damage variance, critical hits,
rewards and monster selection can be made deterministic in tests.
"""

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


class RandomSource:
    """
    Seedable source of uniform randomness.

    Attributes:
        seed (int | None):
            The seed used to initialize the generator, if any.

    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def random(self) -> float:
        """Returns a float uniformly drawn from [0.0, 1.0)."""
        return self._rng.random()

    def uniform(self, low: float, high: float) -> float:
        """Returns a float uniformly drawn from [low, high]."""
        return self._rng.uniform(low, high)

    def chance(self, probability: float) -> bool:
        """
        Returns True with the given probability.

        Args:
            probability (float):
                Probability in [0.0, 1.0]. Zero or negative never succeeds.

        Returns:
            bool:
                Whether the event happened.

        """
        if probability <= 0:
            return False
        return self.random() < probability

    def choice(self, items: Sequence[T]) -> T:
        """Returns an element drawn uniformly from a non-empty sequence."""
        if not items:
            raise ValueError("Cannot choose from an empty sequence")
        return items[int(self.random() * len(items)) % len(items)]
