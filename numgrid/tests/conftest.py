"""
Pytest fixtures for Numgrid tests.
"""

import random

import pytest

from ..engine_core.board import Board
from ..engine_core.game import Game
from ..engine_core.state import Cell, Move, Operator, Player
from ..engine_core.territory import calculate_scores
from ..settings import GameSettings


class LowRandom(random.Random):
    """Always picks the lowest option: first face, Operator.ADD, Player.FIRST."""

    def randint(self, a, b):
        return a


def build_board(layout: list[str]) -> Board:
    """
    Build a board from rows of space-separated tokens.

    A token is a number or operator, optionally suffixed with an owner:
    "a" for Player.FIRST, "b" for Player.SECOND. E.g. "3a", "+", "2b".
    """
    rows = []
    for row, line in enumerate(layout):
        cells = []
        for col, token in enumerate(line.split()):
            owner = None
            if token[-1] in "ab":
                owner = Player.FIRST if token[-1] == "a" else Player.SECOND
                token = token[:-1]
            symbol = Operator(token) if token in ("+", "-", "*") else int(token)
            cells.append(Cell(row=row, col=col, symbol=symbol, owner=owner))
        rows.append(cells)
    return Board(rows)


# Standard 4x4 board:
#   FIRST owns the top numbers, SECOND owns the bottom numbers,
#   (2,1) and (1,2), chained diagonally back to its home row.
TERRITORY_LAYOUT = [
    "+  2a *  3a",
    "4  -  5b +",
    "+  1b *  6",
    "2b *  3b -",
]

# Two rows spelling 5 + 3 * 2 along the top
EXPRESSION_LAYOUT = [
    "*  5a +  3  *  2",
    "1b -  1b -  1b -",
]

# FIRST breaks into the bottom row with 1+1 and the scores end level, 3-3
DRAW_LAYOUT = [
    "+  1a +  1  +  1",
    "1b +b 1b +b 1b +",
]


class UncopyableRandom(LowRandom):
    """A random source that refuses to be deep-copied."""

    def __deepcopy__(self, memo):
        raise TypeError("random source cannot be copied")


@pytest.fixture
def low_rng() -> LowRandom:
    return LowRandom()


@pytest.fixture
def unit_settings() -> GameSettings:
    """Every die always rolls 1."""
    return GameSettings(
        width=2,
        height=2,
        board_dice=[[1]],
        move_length_dice=[[1]],
        move_total_dice=[[1]],
    )


@pytest.fixture
def make_game():
    """
    Factory for a game on a hand-built board with a chosen move.

    Moves rolled after the first use two d6 with LowRandom: size 2, target 2.
    """

    def _make(layout: list[str], player=Player.FIRST, size=3, target=5) -> Game:
        board = build_board(layout)
        game = Game(
            settings={"width": board.width, "height": board.height},
            rng=LowRandom(),
        )
        game.board = board
        game.current_move = Move(number=0, player=player, size=size, target=target)
        game.current_scores = calculate_scores(board)
        game.reset_selection()
        return game

    return _make


@pytest.fixture
def level_breach_game(make_game):
    """A DRAW_LAYOUT game with the tying selection made but not confirmed."""
    game = make_game(DRAW_LAYOUT, size=2, target=2)
    for row, col in [(0, 1), (1, 1), (1, 0)]:
        game.select_cell(row, col)
    return game
