"""
Shared fixtures for the battle engine tests.
"""

import pytest

from skirmish.core.dice import RandomSource
from skirmish.core.rules import GameRules
from skirmish.entities.catalog import MonsterCatalog
from skirmish.entities.monster import MonsterTemplate
from skirmish.store.player_store import PlayerStore


class ScriptedRandom(RandomSource):
    """
    Random source returning scripted values.

    Queued values are consumed first; afterwards the defaults are returned.
    The default ``random()`` of 0.99 never triggers a critical hit below a
    99% chance, and the default ``uniform()`` of 0.0 disables damage variance.
    """

    def __init__(
        self,
        uniforms: list[float] | None = None,
        randoms: list[float] | None = None,
        default_uniform: float = 0.0,
        default_random: float = 0.99,
    ) -> None:
        super().__init__(seed=0)
        self.uniforms = list(uniforms or [])
        self.randoms = list(randoms or [])
        self.default_uniform = default_uniform
        self.default_random = default_random

    def uniform(self, low: float, high: float) -> float:
        return self.uniforms.pop(0) if self.uniforms else self.default_uniform

    def random(self) -> float:
        return self.randoms.pop(0) if self.randoms else self.default_random


@pytest.fixture
def rules():
    return GameRules()


@pytest.fixture
def rng():
    return ScriptedRandom()


@pytest.fixture
def store(rules):
    return PlayerStore(rules)


@pytest.fixture
def dummy_template():
    """A weak monster the default player beats in three normal attacks."""
    return MonsterTemplate(
        id=1,
        name="Dummy",
        level=1,
        hp=35,
        attack=12,
        defense=3,
        experience_reward=20,
        gold_reward=15,
        category="basic",
    )


@pytest.fixture
def brute_template():
    """A monster that knocks the default player out in one hit."""
    return MonsterTemplate(
        id=2,
        name="Brute",
        level=1,
        hp=1000,
        attack=500,
        defense=0,
        category="boss",
    )


@pytest.fixture
def feeble_template():
    """A monster that only ever deals the minimum damage."""
    return MonsterTemplate(
        id=3,
        name="Slime",
        level=1,
        hp=500,
        attack=0,
        defense=0,
        category="basic",
    )


@pytest.fixture
def catalog(dummy_template, brute_template, feeble_template):
    return MonsterCatalog([dummy_template, brute_template, feeble_template])


@pytest.fixture
def make_rng():
    """Factory for scripted random sources."""
    return ScriptedRandom
