"""
hex_minimax

Fixed-depth minimax move selection for a two-player connection game played on a
hexagonal grid. The search expands one child per empty cell, scores the final
ply with a neighbourhood heuristic and backs scores up with the minimax rule,
reusing a single board through apply/revert backtracking.
"""

# Version info
__version__ = "2025.1.0"

# Core modules that should be available
__all__ = [
    "config",
    "enums",
    "error_handling",
    "inference",
]

from . import config
from . import enums
from . import error_handling
from . import inference
