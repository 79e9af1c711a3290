"""
Main entry point for the Skirmish terminal front-end.

Creates the player store, monster catalog and game service once, then lets
the user walk between the town and battles until they quit. It is a sample
host for the engine: every action goes through the ``GameService``.
"""

import argparse
import logging
from pathlib import Path

from skirmish.core.constants import ItemKind
from skirmish.core.dice import RandomSource
from skirmish.core.logging import setup_logging
from skirmish.core.rules import load_rules
from skirmish.core.sheets import print_battle_status, print_player_sheet, print_turn_result
from skirmish.core.utils import cprint, crule
from skirmish.entities.catalog import MonsterCatalog
from skirmish.service.game_service import ActionResult, GameService
from skirmish.store.player_store import PlayerStore
from skirmish.ui.cli_interface import (
    BATTLE_FLEE,
    BATTLE_POTION,
    TOWN_BUY,
    TOWN_CHOOSE,
    TOWN_FIGHT,
    TOWN_HEAL,
    TOWN_SHEET,
    PlayerInterface,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parses the command-line options."""
    parser = argparse.ArgumentParser(description="Turn-based battles in the terminal.")
    parser.add_argument("--name", default=None, help="Player name (asked if omitted).")
    parser.add_argument("--reset", action="store_true", help="Start the player from scratch.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible battles.")
    parser.add_argument("--rules", type=Path, default=None, help="JSON file with rule overrides.")
    parser.add_argument("--monsters", type=Path, default=None, help="JSON monster catalog.")
    parser.add_argument("--verbose", action="store_true", help="Show debug logging.")
    return parser.parse_args(argv)


def report_error(result: ActionResult) -> bool:
    """Prints the error of a failed call; returns True if the call failed."""
    if result.error is None:
        return False
    cprint(f"[bold red]{result.error.message}[/]")
    return True


def run_battle(service: GameService, ui: PlayerInterface, player_id: str, monster_id: int | None) -> None:
    """Plays one battle to its end."""
    started = service.start_battle(player_id, monster_id)
    if report_error(started):
        return
    session = started.unwrap()
    crule(f"⚔ {session.monster.name}", style="bold red")
    for line in session.log:
        cprint(f"    {line}")

    while True:
        print_battle_status(session)
        player = service.get_player(player_id).unwrap()
        choice = ui.choose_battle_action(player.item_count(ItemKind.LIFE_POTION))
        if choice == BATTLE_FLEE:
            result = service.flee_battle(session.id)
        elif choice == BATTLE_POTION:
            result = service.use_potion(session.id, player_id)
        else:
            result = service.submit_attack(session.id, choice)
        if report_error(result):
            continue
        turn = result.unwrap()
        print_turn_result(turn)
        if turn.battle_ended:
            return
        session = service.battles.get_session(session.id)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    rules = load_rules(args.rules)
    service = GameService(
        store=PlayerStore(rules),
        catalog=MonsterCatalog.load(args.monsters),
        rules=rules,
        rng=RandomSource(args.seed),
    )
    ui = PlayerInterface()

    crule("Skirmish", style="bold green")
    name = args.name or ui.session.prompt("Your name > ")
    created = service.create_or_fetch_player(name, reset=args.reset)
    if report_error(created):
        return
    player_id = created.unwrap().player.id
    print_player_sheet(created.unwrap().player)

    while True:
        action = ui.choose_town_action()
        if action is None:
            break
        if action == TOWN_FIGHT:
            run_battle(service, ui, player_id, None)
        elif action == TOWN_CHOOSE:
            monster = ui.choose_monster(service.list_monster_templates().unwrap())
            if monster is not None:
                run_battle(service, ui, player_id, monster.id)
        elif action == TOWN_HEAL:
            if not report_error(service.heal_player_in_town(player_id)):
                cprint("[green]You feel fully rested.[/]")
        elif action == TOWN_BUY:
            if not report_error(service.buy_potion(player_id)):
                cprint("[green]You bought a Life Potion.[/]")
        elif action == TOWN_SHEET:
            print_player_sheet(service.get_player(player_id).unwrap())

    crule("Farewell", style="bold green")


if __name__ == "__main__":
    main()
