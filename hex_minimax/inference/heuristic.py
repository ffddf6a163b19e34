"""
Static evaluation of a candidate move from its neighbourhood.
"""

from typing import Tuple

from hex_minimax.config import HEURISTIC_WEIGHTS
from hex_minimax.inference.adjacency import neighbors


def heuristic(board, position: Tuple[int, int]) -> int:
    """
    Score the cell at position by summing the weight of each neighbouring cell.

    Empty neighbours add 10, player one's stones add 20 and player two's stones
    subtract 50. The score is always from player one's point of view, whoever
    is searching.
    """
    score = 0
    for column, line in neighbors(board, position):
        score += HEURISTIC_WEIGHTS[int(board[column][line])]
    return score
