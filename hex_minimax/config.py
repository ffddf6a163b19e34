"""
Configuration constants and settings for the hex_minimax project.

This module contains all the configuration constants used throughout the project,
including board geometry, heuristic weights and search safety limits.
"""

from hex_minimax.enums import Piece

# Global configuration settings

# Verbose logging levels:
# 0: Critical issues and errors
# 1: Important info and warnings
# 2: Detailed info (default for development)
# 3: Very detailed debug info
# 4: Extremely verbose debug info
VERBOSE_LEVEL = 2

# Board geometry
# A hexagonal board of side N has 2N-1 columns whose heights grow from N to
# 2N-1 and shrink back to N.
HEX_BOARD_SIDE = 6

# Columns at or beyond these indices switch the row offset used for diagonal
# neighbours (parallelogram rendering of the hex grid).
LEFT_DIAGONAL_PIVOT = 6
RIGHT_DIAGONAL_PIVOT = 5

# Cell values (prefer hex_minimax.enums usage throughout the codebase)
EMPTY_PIECE = Piece.EMPTY.value
PLAYER_ONE_PIECE = Piece.PLAYER_ONE.value
PLAYER_TWO_PIECE = Piece.PLAYER_TWO.value

# Heuristic contribution of each neighbouring cell, keyed by cell value.
# Fixed perspective: always scored in favour of PLAYER_ONE.
HEURISTIC_WEIGHTS = {
    EMPTY_PIECE: 10,
    PLAYER_ONE_PIECE: 20,
    PLAYER_TWO_PIECE: -50,
}

# Score given to an inner node whose board has no empty cell left (draw)
NO_LEGAL_MOVES_SCORE = 0

# Search configuration
DEFAULT_PLY_DEPTH = 1

# Search safety limits
MAX_TREE_NODES = 10_000_000  # Refuse searches that would build more nodes than this
MEMORY_WARNINGS = [2, 6, 10]  # GB thresholds for warnings
MEMORY_EXIT_THRESHOLD = 14  # GB threshold for aborting a search
MEMORY_CHECK_COOLDOWN = 2.0  # Seconds between memory checks
NODES_PER_MEMORY_CHECK = 10_000  # Only look at memory every this many nodes

# Board text format
BOARD_TEXT_SYMBOLS = {
    ".": EMPTY_PIECE,
    "0": EMPTY_PIECE,
    "1": PLAYER_ONE_PIECE,
    "2": PLAYER_TWO_PIECE,
}
