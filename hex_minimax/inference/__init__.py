"""
Search module for hex_minimax.

This module provides the board model, neighbour computation, the static
heuristic and the fixed-depth minimax search built on them.
"""

from .fixed_tree_search import DecisionNode, SearchResult, choose_move, evaluate, new_root

__all__ = [
    'DecisionNode',
    'SearchResult',
    'choose_move',
    'evaluate',
    'new_root',
]
