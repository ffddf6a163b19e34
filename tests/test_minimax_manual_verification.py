"""
Manual verification of minimax search on 2x2 boards.

Every expected value below was worked out by hand from the neighbour lists of
the 2x2 board:

    (0, 0): (0, 1), (1, 0), (1, 1)
    (0, 1): (0, 0), (1, 1)
    (1, 0): (1, 1), (0, 0)
    (1, 1): (0, 0), (1, 0)
"""

import pytest

from hex_minimax.enums import Player
from hex_minimax.inference.board_utils import board_snapshot
from hex_minimax.inference.fixed_tree_search import best_move, choose_move, evaluate, new_root


def child_scores(node):
    return {child.move: child.score for child in node.children}


class TestDepthZero:
    """Root picks the candidate with the highest heuristic score."""

    def test_distinct_winner(self):
        # (0, 0): 10 + 10 - 50 = -30, (0, 1): 10 - 50 = -40, (1, 0): -50 + 10 = -40
        board = [[0, 0], [0, 2]]
        root = new_root()
        evaluate(root, board, 0, Player.ONE)
        assert child_scores(root) == {(0, 0): -30, (0, 1): -40, (1, 0): -40}
        assert root.score == -30
        assert best_move(root) == (0, 0)

    def test_tie_broken_by_scan_order(self):
        # (0, 0): -50 + 10 + 10 = -30, (1, 0): 10 + 10 = 20, (1, 1): 10 + 10 = 20
        board = [[0, 2], [0, 0]]
        result = choose_move(board, 0, Player.ONE)
        assert child_scores(result.root) == {(0, 0): -30, (1, 0): 20, (1, 1): 20}
        assert result.move == (1, 0)
        assert result.score == 20

    def test_three_way_tie(self):
        # Every empty cell touches the stone at (0, 0) and one empty cell: -40 each
        board = [[2, 0], [0, 0]]
        result = choose_move(board, 0, Player.ONE)
        assert set(child_scores(result.root).values()) == {-40}
        assert result.move == (0, 1)

    def test_heuristic_ignores_searching_side(self):
        """Player two gets the same leaf scores as player one at depth zero."""
        board = [[0, 0], [0, 2]]
        for player in (Player.ONE, Player.TWO):
            result = choose_move(board, 0, player)
            assert result.move == (0, 0)
            assert result.score == -30


class TestDepthOne:
    """Root maximises over its children, each child minimises over its leaves."""

    def test_player_one(self):
        # After player one takes (0, 0): leaves (1, 0) = 30, (1, 1) = 30  -> 30
        # After (1, 0): leaves (0, 0) = -50 + 20 + 10 = -20, (1, 1) = 30   -> -20
        # After (1, 1): leaves (0, 0) = -50 + 10 + 20 = -20, (1, 0) = 30   -> -20
        board = [[0, 2], [0, 0]]
        before = board_snapshot(board)
        result = choose_move(board, 1, Player.ONE)

        assert child_scores(result.root) == {(0, 0): 30, (1, 0): -20, (1, 1): -20}
        first = result.root.children[0]
        assert child_scores(first) == {(1, 0): 30, (1, 1): 30}
        assert result.move == (0, 0)
        assert result.score == 30
        assert result.nodes == 9
        assert board_snapshot(board) == before

    def test_deeper_search_changes_choice(self):
        """The same board picks (1, 0) at depth zero and (0, 0) at depth one."""
        board = [[0, 2], [0, 0]]
        assert choose_move(board, 0, Player.ONE).move == (1, 0)
        assert choose_move(board, 1, Player.ONE).move == (0, 0)

    def test_player_two(self):
        # After player two takes (0, 0): leaves (1, 0) = -40, (1, 1) = -40 -> -40
        # After (1, 0): leaves (0, 0) = -50 - 50 + 10 = -90, (1, 1) = -40   -> -90
        # After (1, 1): leaves (0, 0) = -50 + 10 - 50 = -90, (1, 0) = -40   -> -90
        board = [[0, 2], [0, 0]]
        result = choose_move(board, 1, Player.TWO)
        assert child_scores(result.root) == {(0, 0): -40, (1, 0): -90, (1, 1): -90}
        assert result.move == (0, 0)
        assert result.score == -40

    def test_minimising_ply_picks_lowest(self):
        # After player one takes (0, 1): leaves (0, 0) = 20 + 10 - 50 = -20, (1, 0) = -50 + 10 = -40
        board = [[0, 0], [0, 2]]
        result = choose_move(board, 1, Player.ONE)
        scores = {child.move: child for child in result.root.children}
        assert child_scores(scores[(0, 1)]) == {(0, 0): -20, (1, 0): -40}
        assert scores[(0, 1)].score == -40
        assert scores[(0, 1)].get_best_child_node().move == (1, 0)
        # After (0, 0): both leaves -30; after (1, 0): -20 and -40
        assert child_scores(result.root) == {(0, 0): -30, (0, 1): -40, (1, 0): -40}
        assert result.move == (0, 0)


@pytest.mark.parametrize("plies", [0, 1, 2])
def test_single_column_is_deterministic(plies):
    board = [[0, 0, 0]]
    results = {choose_move(board, plies, Player.ONE).move for _ in range(3)}
    assert len(results) == 1
    assert board == [[0, 0, 0]]
