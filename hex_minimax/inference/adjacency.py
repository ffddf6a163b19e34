"""
Neighbour computation for the column-major hex grid.

The grid is drawn as a parallelogram of columns: left of the pivot columns the
neighbouring column is shifted one way, right of them the other way. The six
directions are emitted in a fixed order:

    down, left/down, left/up, up, right/up, right/down

Each direction uses the row offset for its side of the pivot and is kept only
when the resulting cell lies on the board.
"""

from typing import List, Tuple

from hex_minimax.config import LEFT_DIAGONAL_PIVOT, RIGHT_DIAGONAL_PIVOT
from hex_minimax.inference.board_utils import is_in_bounds, validate_position

Move = Tuple[int, int]


def neighbors(board, position: Move) -> List[Move]:
    """
    Cells adjacent to position.

    Args:
        board: Column-major board (only its shape is read)
        position: (column, line) on the board

    Returns:
        Between 0 and 6 in-bounds (column, line) tuples, in direction order

    Raises:
        CoordinateOutOfRangeError: If position is not on the board
    """
    validate_position(board, position)
    column, line = position
    last_column = len(board) - 1
    last_line = len(board[column]) - 1

    candidates = []

    # Down
    if line < last_line:
        candidates.append((column, line + 1))

    if column != 0:
        # Left/down
        if column < LEFT_DIAGONAL_PIVOT and line != last_line:
            candidates.append((column - 1, line))
        elif column >= LEFT_DIAGONAL_PIVOT:
            candidates.append((column - 1, line + 1))

        # Left/up
        if column < LEFT_DIAGONAL_PIVOT and line != 0:
            candidates.append((column - 1, line - 1))
        elif column >= LEFT_DIAGONAL_PIVOT:
            candidates.append((column - 1, line))

    # Up
    if line != 0:
        candidates.append((column, line - 1))

    if column < last_column:
        # Right/up
        if column < RIGHT_DIAGONAL_PIVOT:
            candidates.append((column + 1, line))
        elif line != 0:
            candidates.append((column + 1, line - 1))

        # Right/down
        if column < RIGHT_DIAGONAL_PIVOT:
            candidates.append((column + 1, line + 1))
        elif line != len(board[column + 1]):
            candidates.append((column + 1, line))

    # Rectangular and irregular boards can push a diagonal off the board
    return [(c, l) for c, l in candidates if is_in_bounds(board, c, l)]
