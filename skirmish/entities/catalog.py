"""
Monster catalog for the battle engine.

Loads the read-only monster templates and provides lookup by id and the
level-based random selection used when a battle starts without a monster.
"""

from pathlib import Path

from catchery import log_debug, log_warning

from skirmish.core.content import DATA_DIR, _load_json_file
from skirmish.core.dice import RandomSource
from skirmish.core.error_handling import NotFoundError
from skirmish.entities.monster import MonsterTemplate


class MonsterCatalog:
    """
    Registry of every monster template, keyed by id.

    Attributes:
        templates (dict[int, MonsterTemplate]):
            The templates by id, in catalog order.

    """

    templates: dict[int, MonsterTemplate]

    def __init__(self, templates: list[MonsterTemplate]) -> None:
        if not templates:
            raise ValueError("A monster catalog needs at least one template")
        self.templates = {}
        for template in templates:
            if template.id in self.templates:
                raise ValueError(f"Duplicate monster id: {template.id}")
            self.templates[template.id] = template

    @classmethod
    def load(cls, path: Path | None = None) -> "MonsterCatalog":
        """
        Loads the catalog from a JSON file.

        Args:
            path (Path | None):
                The JSON file; defaults to the bundled ``monsters.json``.

        Returns:
            MonsterCatalog:
                The loaded catalog.

        """
        templates = _load_json_file(
            path or DATA_DIR / "monsters.json",
            cls._load_templates,
            "monster templates",
        )
        return cls(list(templates.values()))

    @staticmethod
    def _load_templates(data: list[dict]) -> dict[int, MonsterTemplate]:
        """
        Load monster templates from JSON data.

        Raises:
            ValueError: If duplicate monster ids are found.

        """
        templates: dict[int, MonsterTemplate] = {}
        for entry in data:
            template = MonsterTemplate(**entry)
            if template.id in templates:
                raise ValueError(f"Duplicate monster id: {template.id}")
            templates[template.id] = template
        return templates

    def __len__(self) -> int:
        return len(self.templates)

    def all(self) -> list[MonsterTemplate]:
        """Returns every template in catalog order."""
        return list(self.templates.values())

    def find(self, monster_id: int | None) -> MonsterTemplate | None:
        """Returns the template with the given id, or None."""
        if monster_id is None:
            return None
        return self.templates.get(monster_id)

    def get(self, monster_id: int) -> MonsterTemplate:
        """
        Returns the template with the given id.

        Raises:
            NotFoundError: If no template has that id.
        """
        template = self.find(monster_id)
        if template is None:
            raise NotFoundError(
                f"Monster {monster_id} not found",
                {"monster_id": monster_id},
            )
        return template

    def candidates_for_level(self, level: int, level_range: int) -> list[MonsterTemplate]:
        """Returns templates whose level is within ``level_range`` of ``level``."""
        return [
            template
            for template in self.templates.values()
            if abs(template.level - level) <= level_range
        ]

    def pick_for_level(
        self,
        level: int,
        rng: RandomSource,
        level_range: int = 2,
    ) -> MonsterTemplate:
        """
        Picks a random monster appropriate for a player level.

        Picks uniformly among templates within ``level_range`` levels; when
        none qualify, picks uniformly among all templates.

        Args:
            level (int):
                The player's level.
            rng (RandomSource):
                The randomness source.
            level_range (int):
                Maximum level difference.

        Returns:
            MonsterTemplate:
                The selected template.

        """
        candidates = self.candidates_for_level(level, level_range)
        if not candidates:
            log_warning(
                "No monster within level range, picking from the whole catalog",
                {"level": level, "level_range": level_range},
            )
            candidates = self.all()
        template = rng.choice(candidates)
        log_debug(
            f"Selected {template.name} for level {level}",
            {"candidates": len(candidates), "monster_id": template.id},
        )
        return template
