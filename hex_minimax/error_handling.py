"""
Error handling utilities for hex_minimax.

Every failure in the search core is a contract violation rather than a
transient condition, so nothing here is retried. The exceptions also derive
from the matching builtin so callers can catch them generically.
"""

import logging
from typing import Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


class HexMinimaxError(Exception):
    """Base class for all hex_minimax errors."""
    pass


class CoordinateOutOfRangeError(HexMinimaxError, IndexError):
    """Raised when a coordinate does not address a cell of the board."""

    def __init__(self, position: Tuple[int, int], message: Optional[str] = None):
        self.position = tuple(position)
        super().__init__(message or f"Position {self.position} is out of bounds")


class NoLegalMovesError(HexMinimaxError, ValueError):
    """Raised when a search is started on a board without empty cells."""
    pass


class UnresolvedScoreError(HexMinimaxError, RuntimeError):
    """Raised when a node's score is read before its subtree was evaluated."""
    pass


class SearchLimitExceeded(HexMinimaxError, RuntimeError):
    """Raised when a search would exceed, or has exceeded, its resource limits."""
    pass


class BoardRestorationError(HexMinimaxError, RuntimeError):
    """Raised when the board differs after a search from what it was before."""

    def __init__(self, changed_cells: Sequence[Tuple[int, int]]):
        self.changed_cells = list(changed_cells)
        super().__init__(
            f"Board was not restored after search: {len(self.changed_cells)} cell(s) changed, "
            f"first: {self.changed_cells[:5]}"
        )


class InvalidBoardError(HexMinimaxError, ValueError):
    """Raised when a board fails validation or cannot be parsed."""
    pass


def check_board_restored(before: Sequence[Sequence[int]], after: Sequence[Sequence[int]]) -> None:
    """
    Compare two board snapshots and raise if any cell changed.

    Args:
        before: Snapshot taken before the search (see board_utils.board_snapshot)
        after: Snapshot taken after the search

    Raises:
        BoardRestorationError: If the snapshots differ
    """
    if len(before) != len(after):
        raise BoardRestorationError([(len(before), -1)])

    changed = []
    for column, (col_before, col_after) in enumerate(zip(before, after)):
        if len(col_before) != len(col_after):
            changed.append((column, -1))
            continue
        for line, (cell_before, cell_after) in enumerate(zip(col_before, col_after)):
            if cell_before != cell_after:
                changed.append((column, line))

    if changed:
        logger.error(f"Board restoration check failed for cells {changed[:5]}")
        raise BoardRestorationError(changed)
