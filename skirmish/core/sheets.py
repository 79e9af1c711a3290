"""
Module for printing player sheets, monster lists and battle status in a
formatted way.
"""

from rich.padding import Padding
from rich.table import Table

from skirmish.combat.battle_session import BattleSession, TurnResult
from skirmish.core.constants import EquipmentSlot
from skirmish.core.utils import cprint, hp_color, make_bar
from skirmish.entities.monster import MonsterTemplate
from skirmish.entities.player import Player


def hp_bar(current: int, maximum: int, length: int = 20) -> str:
    """Returns a colored hp bar followed by the numbers."""
    color = hp_color(current, maximum)
    return f"{make_bar(current, maximum, length, color)} [{color}]{current}/{maximum}[/]"


def print_player_sheet(player: Player) -> None:
    """
    Prints the details of a player in a formatted way.

    Args:
        player (Player): The player to display.

    """
    cprint(f"👤 [bold blue]{player.name}[/], level [green]{player.level}[/]")
    cprint(f"  HP: {hp_bar(player.hp, player.max_hp)}")
    cprint(
        f"  Attack: [red]{player.attack}[/], Defense: [yellow]{player.defense}[/], "
        f"Critical: [magenta]{round(player.critical_chance * 100)}% "
        f"x{player.critical_multiplier}[/]"
    )
    cprint(
        f"  Experience: [cyan]{player.experience}/{player.experience_to_next_level}[/], "
        f"Gold: [gold1]{player.gold}[/]"
    )

    items = [
        f"{item.emoji} {item.display_name} x{count}"
        for item, count in player.inventory.items()
        if count > 0
    ]
    if items:
        cprint(f"  [blue]Inventory[/]: {', '.join(items)}")

    weapon = player.equipment.get(EquipmentSlot.WEAPON)
    if weapon:
        cprint(f"  [blue]Weapon[/]: {weapon.display_name}")

    stats = player.stats
    cprint(
        f"  [dim]Battles won {stats.battles_won}, lost {stats.battles_lost}, "
        f"damage dealt {stats.total_damage_dealt}, received {stats.total_damage_received}, "
        f"critical hits {stats.critical_hits}, potions used {stats.potions_used}[/]"
    )
    if player.monsters_defeated:
        for name, count in sorted(player.monsters_defeated.items()):
            cprint(Padding(f"[red]{name}[/]: {count}", (0, 4)))


def monster_table(templates: list[MonsterTemplate], title: str = "Monsters") -> Table:
    """Builds a table listing monster templates."""
    table = Table(title=title, pad_edge=False)
    table.add_column("#", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Lvl", justify="right")
    table.add_column("HP", justify="right")
    table.add_column("Atk", justify="right")
    table.add_column("Def", justify="right")
    table.add_column("Gold", justify="right")
    for i, template in enumerate(templates, 1):
        table.add_row(
            str(i),
            f"{template.category.emoji} {template.name}",
            str(template.level),
            str(template.hp),
            str(template.attack),
            str(template.defense),
            str(template.gold_reward),
        )
    return table


def print_battle_status(session: BattleSession) -> None:
    """Prints both combatants' hp bars."""
    player, monster = session.player, session.monster
    cprint(f"  👤 [bold blue]{player.name:<18}[/] {hp_bar(player.current_hp, player.max_hp)}")
    cprint(f"  {monster.category.emoji} [bold red]{monster.name:<18}[/] {hp_bar(monster.current_hp, monster.max_hp)}")


def print_turn_result(result: TurnResult) -> None:
    """Prints the log lines of a resolved action."""
    for line in result.log:
        style = "bold yellow" if "CRITICAL" in line else ""
        cprint(Padding(f"[{style}]{line}[/]" if style else line, (0, 4)))
    if result.outcome is not None:
        cprint(result.outcome.colorize(f"Battle over: {result.outcome.display_name}"))
