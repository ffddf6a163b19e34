#!/usr/bin/env python3
"""
Pick a move for a position with the fixed-depth minimax search.

The board is read from a text file written one column per line ('.' or '0'
empty, '1' and '2' for the players), or defaults to an empty hexagonal board.

Example:
    python scripts/choose_move_cli.py --board-file position.txt --plies 1 --player 2
"""

import argparse
import logging
import sys
from pathlib import Path

from hex_minimax.config import DEFAULT_PLY_DEPTH, HEX_BOARD_SIDE, MAX_TREE_NODES
from hex_minimax.enums import int_to_player
from hex_minimax.error_handling import HexMinimaxError
from hex_minimax.inference.board_display import display_hex_board
from hex_minimax.inference.board_utils import create_hexagonal_board, empty_cells, parse_board_string
from hex_minimax.inference.fixed_tree_search import choose_move, expected_node_count

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Choose a move with fixed-depth minimax search")
    parser.add_argument('--board-file', type=str, default=None,
                        help='Text file with one board column per line (default: empty hexagonal board)')
    parser.add_argument('--side', type=int, default=HEX_BOARD_SIDE,
                        help=f'Side of the empty hexagonal board when no file is given (default: {HEX_BOARD_SIDE})')
    parser.add_argument('--plies', type=int, default=DEFAULT_PLY_DEPTH,
                        help=f'Plies searched below the candidate moves (default: {DEFAULT_PLY_DEPTH})')
    parser.add_argument('--player', type=int, choices=[1, 2], default=1, help='Player to move (default: 1)')
    parser.add_argument('--max-nodes', type=int, default=MAX_TREE_NODES,
                        help=f'Refuse searches building more nodes than this (default: {MAX_TREE_NODES:,})')
    parser.add_argument('--check-restoration', action='store_true',
                        help='Verify the board is unchanged after the search')
    parser.add_argument('--verbose', type=int, default=1, help='Verbosity level (0-4, default: 1)')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose >= 3 else logging.INFO if args.verbose >= 2 else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    if args.plies < 0:
        print("Error: --plies must be non-negative")
        return 1

    if args.board_file:
        try:
            board = parse_board_string(Path(args.board_file).read_text())
        except (OSError, HexMinimaxError) as e:
            print(f"Error reading board from {args.board_file}: {e}")
            return 1
    else:
        board = create_hexagonal_board(args.side)

    player = int_to_player(args.player)
    if args.verbose >= 1:
        num_empty = len(empty_cells(board))
        print(f"Searching {args.plies} plies for player {args.player} over {num_empty} empty cells "
              f"({expected_node_count(num_empty, args.plies):,} nodes)")

    try:
        result = choose_move(board, args.plies, player, max_nodes=args.max_nodes,
                             check_restoration=args.check_restoration, verbose=args.verbose)
    except HexMinimaxError as e:
        print(f"Error: {e}")
        return 1

    display_hex_board(board, highlight_move=result.move)
    print(f"Chosen move: column {result.move[0]}, line {result.move[1]} (score {result.score}, "
          f"{result.nodes:,} nodes)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
