"""
Tests for the terminal shell.
"""

import argparse

import pytest

from ..cli import HELP_TEXT, build_settings, handle_command, parse_faces, render_board, render_status
from ..engine_core.state import Player
from ..settings import ConfigurationError
from .conftest import EXPRESSION_LAYOUT


def make_args(**overrides) -> argparse.Namespace:
    values = {
        "width": None,
        "height": None,
        "board_dice": None,
        "move_length_dice": None,
        "move_total_dice": None,
        "player1": None,
        "player2": None,
        "settings": None,
        "seed": None,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


class TestBuildSettings:

    def test_defaults(self):
        settings = build_settings(make_args())

        assert settings.width == 12
        assert settings.height == 12
        assert settings.player_names == ("player 1", "player 2")

    def test_flags(self):
        settings = build_settings(make_args(
            width=5,
            board_dice=["1,2", "3"],
            player2="Bea",
        ))

        assert settings.width == 5
        assert settings.height == 12
        assert settings.board_dice == ((1, 2), (3,))
        assert settings.player_names == ("player 1", "Bea")

    def test_flags_override_query_string(self):
        settings = build_settings(make_args(
            settings="width=8&height=6&player1=Ann",
            width=4,
        ))

        assert settings.width == 4
        assert settings.height == 6
        assert settings.player_names == ("Ann", "player 2")

    def test_bad_faces(self):
        with pytest.raises(ConfigurationError):
            parse_faces("1,x")

    def test_parse_faces_ignores_blanks(self):
        assert parse_faces("1, 2,,3") == [1, 2, 3]


class TestHandleCommand:

    def test_select_and_deselect(self, make_game):
        game = make_game(EXPRESSION_LAYOUT, target=8)

        assert handle_command(game, "s 0 1") == ("", True)
        assert handle_command(game, "select 0 2") == ("", True)
        assert game.current_selection.cell_ids() == [(0, 1), (0, 2)]

        assert handle_command(game, "d 0 2") == ("", True)
        assert game.current_selection.cell_ids() == [(0, 1)]

    def test_illegal_select(self, make_game):
        game = make_game(EXPRESSION_LAYOUT)

        message, keep_going = handle_command(game, "s 0 3")

        assert message == "Cannot select 0,3"
        assert keep_going

    def test_deselect_unselected(self, make_game):
        game = make_game(EXPRESSION_LAYOUT)

        assert handle_command(game, "d 0 1") == ("0,1 is not selected", True)

    def test_bad_usage(self, make_game):
        game = make_game(EXPRESSION_LAYOUT)

        assert handle_command(game, "s 0") == ("Usage: s ROW COL", True)
        assert handle_command(game, "s a b") == ("Usage: s ROW COL", True)

    def test_confirm_invalid(self, make_game):
        game = make_game(EXPRESSION_LAYOUT)

        assert handle_command(game, "c") == ("Selection is not valid.", True)

    def test_confirm_valid(self, make_game):
        game = make_game(EXPRESSION_LAYOUT, target=8)
        for line in ("s 0 1", "s 0 2", "s 0 3"):
            handle_command(game, line)

        message, keep_going = handle_command(game, "c")

        assert message == "Claimed 2 tile(s) with 5+3."
        assert keep_going
        assert game.board[(0, 3)].owner == Player.FIRST

    def test_reset(self, make_game):
        game = make_game(EXPRESSION_LAYOUT)
        handle_command(game, "s 0 1")

        assert handle_command(game, "r") == ("Selection cleared.", True)
        assert game.current_selection.is_empty

    def test_pass_asks_first(self, make_game):
        game = make_game(EXPRESSION_LAYOUT)

        assert handle_command(game, "p", confirm=lambda: False) == ("Pass cancelled.", True)
        assert game.current_move.number == 0

        assert handle_command(game, "p", confirm=lambda: True) == ("Move passed.", True)
        assert game.current_move.player == Player.SECOND

    def test_quit_and_help(self, make_game):
        game = make_game(EXPRESSION_LAYOUT)

        assert handle_command(game, "q") == ("Bye.", False)
        assert handle_command(game, "what") == (HELP_TEXT, True)
        assert handle_command(game, "   ") == ("", True)


class TestRendering:

    def test_board_marks(self, make_game):
        game = make_game(EXPRESSION_LAYOUT)
        game.select_cell(0, 1)

        lines = render_board(game).splitlines()

        assert len(lines) == 3
        assert lines[0].split() == ["0", "1", "2", "3", "4", "5"]
        # owner, symbol, then selected / selectable marker
        assert "A 5*" in lines[1]
        assert "  +." in lines[1]
        assert "B 1 " in lines[2]

    def test_status_shows_move_and_selection(self, make_game):
        game = make_game(EXPRESSION_LAYOUT, size=3, target=8)
        game.select_cell(0, 1)
        game.select_cell(0, 2)
        game.select_cell(0, 3)

        status = render_status(game)

        assert "A player 1: 1 | B player 2: 3" in status
        assert "Move 0: player 1 (A) must make 8 using up to 3 new tile(s)" in status
        assert "Selection: 5+3 = 8 [2/3 new, valid]" in status

    def test_status_after_draw(self, level_breach_game):
        message, keep_going = handle_command(level_breach_game, "c")

        assert message == "Claimed 2 tile(s) with 1+1."
        assert not keep_going
        status = render_status(level_breach_game)
        assert status.endswith("Game over: draw")
        assert "A player 1: 3 | B player 2: 3" in status
