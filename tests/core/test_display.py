"""
Tests for console display helpers and sheets.
"""

import logging

from rich.logging import RichHandler

from skirmish.combat.battle_manager import BattleManager
from skirmish.core.logging import setup_logging
from skirmish.core.sheets import monster_table, print_battle_status, print_player_sheet
from skirmish.core.utils import ccapture, hp_color, make_bar
from skirmish.ui.cli_interface import PlayerInterface


def test_make_bar_fills_proportionally():
    bar = make_bar(5, 10, length=10, color="green")
    assert bar.count("▮") == 5
    assert bar.count("▯") == 5


def test_make_bar_clamps_overflow_and_zero_max():
    assert make_bar(20, 10, length=4).count("▮") == 4
    assert make_bar(-3, 10, length=4).count("▯") == 4
    assert make_bar(1, 0, length=4).count("▯") == 4


def test_hp_color_thresholds():
    assert hp_color(100, 100) == "green"
    assert hp_color(50, 100) == "yellow"
    assert hp_color(10, 100) == "red"


def test_monster_table_lists_templates(catalog):
    rendered = ccapture(monster_table(catalog.all()))
    for name in ("Dummy", "Brute", "Slime"):
        assert name in rendered


def test_sheets_print_without_errors(store, catalog, rules, rng, dummy_template, capsys):
    player, _, _ = store.create_or_fetch("Aria")
    session = BattleManager(store, catalog, rules, rng).start_battle(player.id, dummy_template.id)
    print_player_sheet(player)
    print_battle_status(session)
    out = capsys.readouterr().out
    assert "Aria" in out
    assert "Dummy" in out


def test_number_choice_parsing():
    assert PlayerInterface.get_number_choice("3") == 3
    assert PlayerInterface.get_number_choice(" 12 ") == 12
    assert PlayerInterface.get_number_choice("q") == -1
    assert PlayerInterface.get_number_choice(None) == -1


def test_setup_logging_installs_rich_handler():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    try:
        setup_logging(logging.DEBUG)
        assert root.level == logging.DEBUG
        assert any(isinstance(handler, RichHandler) for handler in root.handlers)
    finally:
        root.handlers = handlers
        root.setLevel(level)
