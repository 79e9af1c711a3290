"""
Monster module for the battle engine.

Defines the immutable monster templates of the catalog and the mutable
per-battle monster instances created from them.
"""

from pydantic import BaseModel, ConfigDict, Field

from skirmish.core.constants import MonsterCategory


class MonsterTemplate(BaseModel):
    """Immutable catalog entry describing a monster."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Catalog identifier.")
    name: str = Field(min_length=1)
    level: int = Field(ge=1)
    hp: int = Field(ge=1, description="Starting and maximum hit points.")
    attack: int = Field(ge=0)
    defense: int = Field(ge=0)
    experience_reward: int = Field(0, ge=0)
    gold_reward: int = Field(
        0,
        ge=0,
        description="Fixed gold reward; zero means a level-based roll.",
    )
    category: MonsterCategory = MonsterCategory.BASIC

    @property
    def max_hp(self) -> int:
        return self.hp

    @property
    def colored_name(self) -> str:
        return f"[bold red]{self.name}[/]"


class MonsterInstance(BaseModel):
    """A monster taking part in one battle."""

    template_id: int
    name: str
    level: int = Field(ge=1)
    max_hp: int = Field(ge=1)
    current_hp: int = Field(ge=0)
    attack: int = Field(ge=0)
    defense: int = Field(ge=0)
    experience_reward: int = Field(0, ge=0)
    gold_reward: int = Field(0, ge=0)
    category: MonsterCategory = MonsterCategory.BASIC

    # Monsters never land critical hits.
    critical_chance: float = 0.0
    critical_multiplier: float | None = None

    @classmethod
    def from_template(cls, template: MonsterTemplate) -> "MonsterInstance":
        """Creates a fresh instance with full hit points."""
        return cls(
            template_id=template.id,
            name=template.name,
            level=template.level,
            max_hp=template.hp,
            current_hp=template.hp,
            attack=template.attack,
            defense=template.defense,
            experience_reward=template.experience_reward,
            gold_reward=template.gold_reward,
            category=template.category,
        )

    @property
    def is_alive(self) -> bool:
        return self.current_hp > 0

    def take_damage(self, amount: int) -> int:
        """Reduces current hp, floored at zero, and returns the remaining hp."""
        self.current_hp = max(0, self.current_hp - amount)
        return self.current_hp
