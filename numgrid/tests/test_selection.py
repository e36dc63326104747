"""
Tests for selection legality, adjacency and the per-move cap.
"""

from ..engine_core.state import Player
from .conftest import EXPRESSION_LAYOUT, TERRITORY_LAYOUT


class TestFirstChoice:
    """Tests for the first tile of a move."""

    def test_first_choices_are_own_numbers(self, make_game):
        """Any of the mover's number tiles, and nothing else."""
        game = make_game(TERRITORY_LAYOUT, player=Player.FIRST)
        assert game.possible_selections == {(0, 1), (0, 3)}

    def test_second_player_first_choices(self, make_game):
        """Owned tiles away from the home row count too."""
        game = make_game(TERRITORY_LAYOUT, player=Player.SECOND)
        assert game.possible_selections == {(1, 2), (2, 1), (3, 0), (3, 2)}

    def test_cannot_start_elsewhere(self, make_game):
        game = make_game(TERRITORY_LAYOUT, player=Player.FIRST)
        assert not game.select_cell(1, 0)
        assert not game.select_cell(3, 0)
        assert game.current_selection.is_empty

    def test_off_board_is_no_op(self, make_game):
        game = make_game(TERRITORY_LAYOUT)
        assert not game.select_cell(9, 9)
        assert not game.select_cell(-1, 0)


class TestPath:
    """Tests for orthogonal path building."""

    def test_next_choices_are_orthogonal_neighbors(self, make_game):
        game = make_game(TERRITORY_LAYOUT)
        assert game.select_cell(0, 1)
        assert game.possible_selections == {(0, 0), (0, 2), (1, 1)}

    def test_diagonal_not_allowed(self, make_game):
        game = make_game(TERRITORY_LAYOUT)
        game.select_cell(0, 1)
        assert not game.select_cell(1, 0)
        assert not game.select_cell(1, 2)

    def test_selected_cells_excluded(self, make_game):
        """A path never revisits a selected tile."""
        game = make_game(TERRITORY_LAYOUT)
        game.select_cell(0, 1)
        game.select_cell(0, 2)
        assert (0, 1) not in game.possible_selections
        assert game.possible_selections == {(0, 3), (1, 2)}

    def test_selected_flag_set(self, make_game):
        game = make_game(TERRITORY_LAYOUT)
        game.select_cell(0, 1)
        assert game.is_selected(0, 1)
        assert not game.is_selected(0, 3)

    def test_opponent_tiles_can_be_taken(self, make_game):
        """The path may run through the opponent's territory."""
        game = make_game(TERRITORY_LAYOUT, size=3)
        game.select_cell(0, 1)
        game.select_cell(1, 1)
        assert game.select_cell(2, 1)
        assert game.board.cell(2, 1).owner == Player.SECOND


class TestSizeCap:
    """Tests for the max new tiles per move."""

    def test_owned_tiles_do_not_count(self, make_game):
        game = make_game(TERRITORY_LAYOUT, size=1)
        game.select_cell(0, 1)
        assert game.new_selected_cells() == []
        assert game.possible_selections

    def test_cap_blocks_further_selection(self, make_game):
        game = make_game(TERRITORY_LAYOUT, size=1)
        game.select_cell(0, 1)
        assert game.select_cell(1, 1)
        assert game.possible_selections == set()
        assert not game.select_cell(2, 1)
        assert len(game.current_selection.cells) == 2

    def test_cap_counts_opponent_tiles(self, make_game):
        game = make_game(TERRITORY_LAYOUT, size=2)
        game.select_cell(0, 1)
        game.select_cell(1, 1)
        game.select_cell(2, 1)
        assert len(game.new_selected_cells()) == 2
        assert game.possible_selections == set()


class TestValidity:
    """Tests for when a selection may be confirmed."""

    def test_empty_selection_invalid(self, make_game):
        game = make_game(TERRITORY_LAYOUT, target=0)
        assert not game.is_selection_valid

    def test_single_number_matching_target(self, make_game):
        game = make_game(TERRITORY_LAYOUT, target=2)
        game.select_cell(0, 1)
        assert game.current_selection.total == 2
        assert game.is_selection_valid

    def test_total_must_match(self, make_game):
        game = make_game(TERRITORY_LAYOUT, target=3)
        game.select_cell(0, 1)
        assert not game.is_selection_valid

    def test_trailing_operator_invalid(self, make_game):
        """Ending on an operator is never valid, even when the total matches."""
        game = make_game(TERRITORY_LAYOUT, target=2)
        game.select_cell(0, 1)
        game.select_cell(1, 1)
        assert game.current_selection.total == 2
        assert not game.is_selection_valid

    def test_left_to_right_total(self, make_game):
        """5 + 3 * 2 = 16, not 11."""
        game = make_game(EXPRESSION_LAYOUT, size=4, target=16)
        for col in range(1, 6):
            assert game.select_cell(0, col)
        assert game.current_selection.total == 16
        assert game.expression == "(5+3)*2"
        assert game.is_selection_valid


class TestDeselect:
    """Tests for truncating the path."""

    def test_deselect_truncates_tail(self, make_game):
        """Deselecting the k-th cell keeps only the cells before it."""
        game = make_game(EXPRESSION_LAYOUT, size=4, target=16)
        for col in range(1, 6):
            game.select_cell(0, col)

        assert game.deselect_cell(0, 3)
        assert game.current_selection.cell_ids() == [(0, 1), (0, 2)]
        assert game.current_selection.total == 5
        for col in (3, 4, 5):
            assert not game.is_selected(0, col)
        assert game.possible_selections == {(0, 3), (1, 2)}

    def test_deselect_first_cell_empties(self, make_game):
        game = make_game(TERRITORY_LAYOUT)
        game.select_cell(0, 1)
        game.select_cell(1, 1)
        assert game.deselect_cell(0, 1)
        assert game.current_selection.is_empty
        assert game.current_selection.total == 0
        assert game.possible_selections == {(0, 1), (0, 3)}

    def test_deselect_updates_validity(self, make_game):
        game = make_game(TERRITORY_LAYOUT, target=2)
        game.select_cell(0, 1)
        game.select_cell(1, 1)
        game.deselect_cell(1, 1)
        assert game.is_selection_valid

    def test_deselect_empty_is_no_op(self, make_game):
        game = make_game(TERRITORY_LAYOUT)
        assert not game.deselect_cell(0, 1)

    def test_deselect_unselected_is_no_op(self, make_game):
        game = make_game(TERRITORY_LAYOUT)
        game.select_cell(0, 1)
        assert not game.deselect_cell(0, 3)
        assert game.current_selection.cell_ids() == [(0, 1)]


class TestReset:
    """Tests for clearing the selection."""

    def test_reset_returns_to_start_of_move(self, make_game):
        game = make_game(EXPRESSION_LAYOUT, size=4, target=16)
        start = set(game.possible_selections)

        for col in range(1, 5):
            game.select_cell(0, col)
        game.deselect_cell(0, 3)
        game.select_cell(0, 3)

        assert game.reset_selection()
        assert game.current_selection.cells == []
        assert game.current_selection.total == 0
        assert game.possible_selections == start
        assert not any(cell.selected for cell in game.board)
        assert not game.is_selection_valid

    def test_reset_keeps_move(self, make_game):
        game = make_game(TERRITORY_LAYOUT, size=3, target=5)
        game.select_cell(0, 1)
        game.reset_selection()
        assert game.current_move.number == 0
        assert game.current_move.target == 5
