"""
Board utility functions for hex_minimax.

The board is a sequence of columns and is indexed as board[column][line]. Columns
may have different heights (a hexagonal board is ragged), so the canonical form
is a list of lists of ints; a rectangular 2-D numpy array is accepted wherever
only reads and single-cell writes are needed.

This module also holds the move application primitives used for backtracking:
apply_move / revert_move and the applied_move context manager pairing them.
"""

from contextlib import contextmanager
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from hex_minimax.config import BOARD_TEXT_SYMBOLS, HEX_BOARD_SIDE
from hex_minimax.enums import Piece, Player, get_piece_display_symbol, int_to_piece
from hex_minimax.error_handling import CoordinateOutOfRangeError, InvalidBoardError

Move = Tuple[int, int]

_VALID_VALUES = (Piece.EMPTY.value, Piece.PLAYER_ONE.value, Piece.PLAYER_TWO.value)


def is_in_bounds(board, column: int, line: int) -> bool:
    """Check that (column, line) addresses a cell of the board."""
    return 0 <= column < len(board) and 0 <= line < len(board[column])


def validate_position(board, position: Move) -> None:
    """
    Raise if a position is not on the board.

    Raises:
        CoordinateOutOfRangeError: If the coordinates are out of bounds
    """
    column, line = position
    if not is_in_bounds(board, column, line):
        raise CoordinateOutOfRangeError((column, line))


def get_piece_at(board, column: int, line: int) -> Piece:
    """
    Get the piece at a specific position.

    Args:
        board: Column-major board
        column: Column index (0-indexed)
        line: Line index within the column (0-indexed)

    Returns:
        Piece enum at the position

    Raises:
        CoordinateOutOfRangeError: If coordinates are out of bounds
    """
    validate_position(board, (column, line))
    return int_to_piece(board[column][line])


def is_empty(board, column: int, line: int) -> bool:
    """Check if a position is empty. Out-of-bounds positions are never empty."""
    if not is_in_bounds(board, column, line):
        return False
    return board[column][line] == Piece.EMPTY.value


def empty_cells(board) -> List[Move]:
    """
    All empty cells in scan order: columns in order, lines in order within a column.

    This is the move generation order of the search and therefore its tie-break.
    """
    return [
        (column, line)
        for column in range(len(board))
        for line in range(len(board[column]))
        if board[column][line] == Piece.EMPTY.value
    ]


# ============================================================================
# Move application (backtracking primitives)
# ============================================================================

def apply_move(board, player: Player, move: Move) -> None:
    """
    Place player's piece at move, in place.

    No legality check is made: callers only apply moves onto cells they
    generated as empty.
    """
    validate_position(board, move)
    column, line = move
    board[column][line] = player.value


def revert_move(board, move: Move) -> None:
    """Reset the cell at move to empty, in place."""
    validate_position(board, move)
    column, line = move
    board[column][line] = Piece.EMPTY.value


@contextmanager
def applied_move(board, player: Player, move: Move) -> Iterator[None]:
    """
    Apply a move for the duration of a with-block.

    The move is reverted however the block exits, so an exception raised deeper
    in a search cannot leave a stone behind on the shared board.
    """
    apply_move(board, player, move)
    try:
        yield
    finally:
        revert_move(board, move)


# ============================================================================
# Board creation and conversion
# ============================================================================

def hexagonal_column_heights(side: int = HEX_BOARD_SIDE) -> List[int]:
    """Column heights of a hexagonal board: side, side+1, ..., 2*side-1, ..., side."""
    if side < 1:
        raise ValueError(f"Board side must be positive, got {side}")
    rising = list(range(side, 2 * side))
    return rising + rising[-2::-1]


def create_hexagonal_board(side: int = HEX_BOARD_SIDE) -> List[List[int]]:
    """Create an empty hexagonal board (ragged columns)."""
    return [[Piece.EMPTY.value] * height for height in hexagonal_column_heights(side)]


def create_rectangular_board(columns: int, lines: int) -> List[List[int]]:
    """Create an empty board with the given number of columns, each `lines` tall."""
    if columns < 1 or lines < 1:
        raise ValueError(f"Board dimensions must be positive, got {columns}x{lines}")
    return [[Piece.EMPTY.value] * lines for _ in range(columns)]


def board_from_array(array) -> List[List[int]]:
    """
    Convert a 2-D numpy array or a nested sequence into the canonical list-of-lists form.

    Raises:
        InvalidBoardError: If the result is not a valid board
    """
    if isinstance(array, np.ndarray):
        if array.ndim != 2:
            raise InvalidBoardError(f"Expected a 2-D array, got shape {array.shape}")
        board = array.astype(int).tolist()
    else:
        board = [[int(cell) for cell in column] for column in array]

    if not validate_board(board):
        raise InvalidBoardError("Board must be non-empty, with non-empty columns holding only 0, 1 or 2")
    return board


def validate_board(board) -> bool:
    """
    Validate that a board has at least one column, no empty column and only valid cell values.

    Returns:
        True if the board is valid
    """
    if len(board) == 0:
        return False

    for column in board:
        if len(column) == 0:
            return False
        for cell in column:
            if cell not in _VALID_VALUES:
                return False

    return True


def count_pieces(board) -> Tuple[int, int]:
    """
    Count the pieces of each player on the board.

    Returns:
        Tuple of (player_one_count, player_two_count)
    """
    cells = np.concatenate([np.asarray(column, dtype=int) for column in board])
    player_one_count = np.sum(cells == Piece.PLAYER_ONE.value)
    player_two_count = np.sum(cells == Piece.PLAYER_TWO.value)

    return int(player_one_count), int(player_two_count)


def board_snapshot(board) -> Tuple[Tuple[int, ...], ...]:
    """Immutable copy of the board contents, for before/after comparisons."""
    return tuple(tuple(int(cell) for cell in column) for column in board)


def board_to_string(board) -> str:
    """
    Convert board to a compact string, one column per line.

    The output is accepted by parse_board_string.
    """
    lines = []
    for column in board:
        lines.append("".join(get_piece_display_symbol(int_to_piece(cell)) for cell in column))
    return "\n".join(lines)


def parse_board_string(text: str) -> List[List[int]]:
    """
    Parse a board written one column per line.

    Cells are '.' or '0' for empty, '1' and '2' for the players. Whitespace
    between cells is ignored, as are blank lines and lines starting with '#'.

    Raises:
        InvalidBoardError: On unknown symbols or an empty board
    """
    board = []
    for line_number, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        column = []
        for symbol in line:
            if symbol.isspace():
                continue
            if symbol not in BOARD_TEXT_SYMBOLS:
                raise InvalidBoardError(f"Unknown cell symbol {symbol!r} on line {line_number}")
            column.append(BOARD_TEXT_SYMBOLS[symbol])
        board.append(column)

    if not board:
        raise InvalidBoardError("Board text contains no columns")
    return board
