"""
User interface module for the battle engine.

Provides console-based menus for the terminal front-end: town actions,
monster selection and battle actions.
"""

from typing import Any

from prompt_toolkit import ANSI, PromptSession
from rich.table import Table

from skirmish.core.constants import AttackType
from skirmish.core.sheets import monster_table
from skirmish.core.utils import ccapture
from skirmish.entities.monster import MonsterTemplate

# Town menu entries.
TOWN_FIGHT = "Fight a monster"
TOWN_CHOOSE = "Choose a monster"
TOWN_HEAL = "Heal at the temple"
TOWN_BUY = "Buy a Life Potion"
TOWN_SHEET = "Show character sheet"

# Battle menu entries besides the attack types.
BATTLE_POTION = "Drink a Life Potion"
BATTLE_FLEE = "Flee"


class PlayerInterface:
    """
    Command-line interface for player interactions.

    Renders Rich tables as menus and reads the answer with prompt_toolkit,
    accepting numeric shortcuts for entries and 'q' for the exit entry.
    """

    def __init__(self, session: PromptSession | None = None) -> None:
        # One session keeps the input history.
        self.session: PromptSession = session or PromptSession(erase_when_done=True)

    def choose_from(
        self,
        title: str,
        entries: list[str],
        exit_entry: str | None = "Back",
        prompt_label: str = "Choice",
    ) -> str | None:
        """
        Choose an entry from a list of labels.

        Args:
            title (str): Title of the menu table.
            entries (list[str]): The labels to choose from.
            exit_entry (str | None): Text for the exit option; None hides it.
            prompt_label (str): Text shown before the input cursor.

        Returns:
            str | None: The selected label, or None if the user exited.

        """
        table = Table(title=title, pad_edge=False)
        table.add_column("#", style="cyan", no_wrap=True)
        table.add_column("Action", style="bold")
        for i, entry in enumerate(entries, 1):
            table.add_row(str(i), entry)
        if exit_entry:
            table.add_row()
            table.add_row("q", exit_entry)
        index = self._ask(ccapture(table), prompt_label, len(entries), exit_entry is not None)
        return None if index is None else entries[index]

    def choose_town_action(self) -> str | None:
        """Choose what to do in town; None means quit the game."""
        return self.choose_from(
            "Town",
            [TOWN_FIGHT, TOWN_CHOOSE, TOWN_HEAL, TOWN_BUY, TOWN_SHEET],
            exit_entry="Quit",
            prompt_label="Town",
        )

    def choose_monster(self, templates: list[MonsterTemplate]) -> MonsterTemplate | None:
        """Choose a monster from the catalog; None means go back."""
        if not templates:
            return None
        index = self._ask(ccapture(monster_table(templates)), "Monster", len(templates), True)
        return None if index is None else templates[index]

    def choose_battle_action(self, potions: int) -> AttackType | str:
        """
        Choose a battle action.

        Args:
            potions (int): Life potions held, shown next to the potion entry.

        Returns:
            AttackType | str: The attack type, or the potion or flee entry.

        """
        attacks = list(AttackType)
        entries: list[str] = [
            f"{attack.emoji} {attack.display_name} attack" for attack in attacks
        ]
        entries.append(f"{BATTLE_POTION} ({potions} left)")
        entries.append(BATTLE_FLEE)
        choice = self.choose_from("Battle", entries, exit_entry=None, prompt_label="Action")
        assert choice is not None, "The battle menu has no exit entry."
        index = entries.index(choice)
        if index < len(attacks):
            return attacks[index]
        if index == len(attacks):
            return BATTLE_POTION
        return BATTLE_FLEE

    def _ask(self, rendered: str, label: str, count: int, allow_exit: bool) -> int | None:
        """Prompts until the user picks a valid entry index, or exits."""
        prompt = "\n" + rendered + f"\n{label} > "
        while True:
            # Prompt the user for input.
            answer = self.session.prompt(ANSI(prompt))

            # Keep asking until the user provides a valid input.
            if not answer:
                continue

            # If the user typed a number, return the corresponding entry.
            index = self.get_number_choice(answer) - 1
            if 0 <= index < count:
                return index

            # If the user typed 'q', signal the exit.
            if allow_exit and answer.strip().lower() == "q":
                return None

    @staticmethod
    def get_number_choice(answer: Any) -> int:
        """
        Convert a numeric string input to its integer value.

        Args:
            answer (Any): User input to parse.

        Returns:
            int: The integer value, or -1 if invalid input.

        """
        if isinstance(answer, str) and answer.strip().isdigit():
            return int(answer.strip())
        return -1
