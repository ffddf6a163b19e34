"""
Fixed-depth, unpruned minimax search over a shared board.

The tree is expanded depth-first. Every child's move is applied to the one
board the caller passed in, the child's subtree is searched, and the move is
reverted before the next sibling is visited, so memory stays linear in the
depth of the search rather than in the size of the tree.

Typical use:

    root = new_root()
    evaluate(root, board, plies, Player.ONE)
    move = best_move(root)

or simply choose_move(board, plies, Player.ONE).
"""

import logging
import time
import weakref
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import psutil

from hex_minimax.config import (
    DEFAULT_PLY_DEPTH,
    MAX_TREE_NODES,
    MEMORY_CHECK_COOLDOWN,
    MEMORY_EXIT_THRESHOLD,
    MEMORY_WARNINGS,
    NO_LEGAL_MOVES_SCORE,
    NODES_PER_MEMORY_CHECK,
)
from hex_minimax.enums import Player, get_opponent
from hex_minimax.error_handling import (
    InvalidBoardError,
    NoLegalMovesError,
    SearchLimitExceeded,
    UnresolvedScoreError,
    check_board_restored,
)
from hex_minimax.inference.board_utils import applied_move, board_snapshot, empty_cells, validate_board
from hex_minimax.inference.heuristic import heuristic

logger = logging.getLogger(__name__)

Move = Tuple[int, int]


class DecisionNode:
    """
    One ply of the search tree.

    The game state a node stands for is never stored: it is the caller's board
    with the moves on the path from the root applied, which only holds while
    the search is inside that node.

    Attributes:
        move: (column, line) that produced this node from its parent; None for the root
        mover_is_opponent: False at the root, negated at every ply. A parent takes
            the maximum over flagged children and the minimum over the others.
        children: Child nodes in generation (board-scan) order
        depth: Distance from the root
    """

    def __init__(self, move: Optional[Move] = None, score: Optional[int] = None,
                 parent: Optional["DecisionNode"] = None, mover_is_opponent: bool = False):
        self.move = move
        self._score = score
        # Weak back-reference: the parent owns its children, not the reverse
        self._parent = weakref.ref(parent) if parent is not None else None
        self.mover_is_opponent = mover_is_opponent
        self.children: List[DecisionNode] = []
        self.depth = parent.depth + 1 if parent is not None else 0

    @property
    def parent(self) -> Optional["DecisionNode"]:
        if self._parent is None:
            return None
        return self._parent()

    @property
    def score(self) -> int:
        """
        The node's resolved score.

        Raises:
            UnresolvedScoreError: If the node has not been evaluated yet
        """
        if self._score is None:
            raise UnresolvedScoreError(f"Score of {self} read before it was resolved")
        return self._score

    @property
    def is_resolved(self) -> bool:
        return self._score is not None

    @property
    def is_terminal(self) -> bool:
        return len(self.children) == 0

    def add_terminal(self, score: int, move: Move) -> "DecisionNode":
        """Add a leaf child whose score is already known."""
        return self._add(score, move)

    def add(self, move: Move) -> "DecisionNode":
        """Add a child whose score will come from its own subtree."""
        return self._add(None, move)

    def _add(self, score: Optional[int], move: Move) -> "DecisionNode":
        child = DecisionNode(move=move, score=score, parent=self,
                             mover_is_opponent=not self.mover_is_opponent)
        self.children.append(child)
        return child

    def get_best_child_node(self) -> Optional["DecisionNode"]:
        """
        First child whose score equals this node's score, or None if there is none.

        Raises:
            UnresolvedScoreError: If this node has not been evaluated yet
        """
        target = self.score
        for child in self.children:
            if child.is_resolved and child.score == target:
                return child
        return None

    def __str__(self):
        return (
            f"DecisionNode(depth={self.depth}, move={self.move}, "
            f"opponent={self.mover_is_opponent}, score={self._score}, children={len(self.children)})"
        )


@dataclass
class SearchResult:
    move: Move
    score: int
    root: DecisionNode
    nodes: int


class SearchGuard:
    """
    Counts generated nodes during a search and watches process memory.

    Memory is only sampled every NODES_PER_MEMORY_CHECK nodes and warnings are
    throttled by a cooldown, but the exit threshold is enforced on every sample.
    """

    def __init__(self, max_nodes: Optional[int] = MAX_TREE_NODES,
                 memory_exit_threshold: float = MEMORY_EXIT_THRESHOLD,
                 memory_warnings: Optional[List[float]] = None,
                 memory_check_cooldown: float = MEMORY_CHECK_COOLDOWN):
        """
        Args:
            max_nodes: Abort once more nodes than this were generated (None: no limit)
            memory_exit_threshold: Abort when resident memory reaches this many GB
            memory_warnings: GB thresholds at which to log a warning, once each
            memory_check_cooldown: Minimum seconds between warning checks
        """
        self.max_nodes = max_nodes
        self.memory_exit_threshold = memory_exit_threshold
        self.memory_warnings = list(MEMORY_WARNINGS if memory_warnings is None else memory_warnings)
        self.memory_check_cooldown = memory_check_cooldown
        self.nodes = 0
        self._nodes_at_last_check = 0
        self._last_memory_check_time = 0.0
        self._memory_warnings_shown = set()

    def record_nodes(self, count: int) -> None:
        """
        Account for newly generated nodes.

        Raises:
            SearchLimitExceeded: If the node or memory limit is exceeded
        """
        self.nodes += count
        if self.max_nodes is not None and self.nodes > self.max_nodes:
            logger.error(f"Search generated {self.nodes} nodes, limit is {self.max_nodes}")
            raise SearchLimitExceeded(f"Node count {self.nodes} exceeds limit of {self.max_nodes}")

        if self.nodes - self._nodes_at_last_check >= NODES_PER_MEMORY_CHECK:
            self._nodes_at_last_check = self.nodes
            self.check_memory_usage()

    def check_memory_usage(self) -> str:
        """
        Check current memory usage and warn/abort if thresholds are exceeded.

        Returns:
            str: Status message indicating what was checked or why it was skipped

        Raises:
            SearchLimitExceeded: If memory usage exceeds the exit threshold
        """
        current_time = time.time()

        memory_gb = psutil.Process().memory_info().rss / (1024 ** 3)

        if memory_gb >= self.memory_exit_threshold:
            logger.error(f"Memory usage {memory_gb:.1f}GB exceeds exit threshold {self.memory_exit_threshold}GB")
            raise SearchLimitExceeded(
                f"Memory usage {memory_gb:.1f}GB exceeds safety limit of {self.memory_exit_threshold}GB"
            )

        if current_time - self._last_memory_check_time < self.memory_check_cooldown:
            return f"Memory check skipped (cooldown: {self.memory_check_cooldown}s)"
        self._last_memory_check_time = current_time

        warnings_shown = 0
        for threshold in self.memory_warnings:
            if memory_gb >= threshold and threshold not in self._memory_warnings_shown:
                logger.warning(f"Memory usage is {memory_gb:.1f}GB (threshold: {threshold}GB)")
                self._memory_warnings_shown.add(threshold)
                warnings_shown += 1

        return f"Memory check completed: {memory_gb:.1f}GB, {warnings_shown} new warning(s) shown"


def new_root() -> DecisionNode:
    """Fresh root node for one search."""
    return DecisionNode()


def expected_node_count(num_empty: int, plies: int) -> int:
    """
    Number of nodes an unpruned search generates below the root.

    With E empty cells the root gets E children, each of those E-1, and so on
    for plies + 1 levels, stopping early when the board fills up.
    """
    total = 0
    level = 1
    for k in range(plies + 1):
        level *= num_empty - k
        if level <= 0:
            break
        total += level
    return total


def generate_child_moves(node: DecisionNode, board, final: bool) -> List[DecisionNode]:
    """
    Add one child to node per empty cell, in scan order.

    On the final ply the children are leaves scored with the heuristic straight
    away; otherwise they are left unscored for the recursion to fill in.
    """
    for move in empty_cells(board):
        if final:
            node.add_terminal(heuristic(board, move), move)
        else:
            node.add(move)
    return node.children


def _propagate(parent: DecisionNode, child: DecisionNode) -> None:
    """Fold a resolved child's score into its parent's running min/max."""
    child_score = child.score
    if not parent.is_resolved:
        parent._score = child_score
    elif child.mover_is_opponent and child_score > parent._score:
        parent._score = child_score
    elif not child.mover_is_opponent and child_score < parent._score:
        parent._score = child_score


def evaluate(node: DecisionNode, board, plies_remaining: int, player: Player,
             guard: Optional[SearchGuard] = None) -> None:
    """
    Expand node to plies_remaining further plies and resolve every score in its subtree.

    Args:
        node: Unexpanded node; its state is the current contents of board
        board: Shared column-major board, mutated during the call and restored before it returns
        plies_remaining: 0 means the children are scored leaves
        player: Side to move at node
        guard: Optional resource guard shared by the whole search

    Raises:
        NoLegalMovesError: If node is a root and the board has no empty cell
        SearchLimitExceeded: If the guard trips; the board is still restored
    """
    if plies_remaining < 0:
        raise ValueError(f"plies_remaining must be non-negative, got {plies_remaining}")
    if not isinstance(player, Player):
        raise TypeError(f"player must be Player, got {type(player)}")
    if node.children:
        raise ValueError(f"{node} was already expanded; build a fresh tree per search")

    final = plies_remaining == 0
    generate_child_moves(node, board, final)
    if guard is not None:
        guard.record_nodes(len(node.children))

    if not node.children:
        if node.parent is None:
            raise NoLegalMovesError("Cannot search a board with no empty cells")
        # The board filled up before the ply budget ran out
        node._score = NO_LEGAL_MOVES_SCORE
        logger.debug(f"No legal moves below {node}, scoring as draw")
        return

    opponent = get_opponent(player)
    for child in node.children:
        with applied_move(board, player, child.move):
            if not final:
                evaluate(child, board, plies_remaining - 1, opponent, guard)
        _propagate(node, child)
        logger.debug(f"Child {child.move} of {node.move}: score = {child.score}, parent now {node.score}")


def best_move(root: DecisionNode) -> Move:
    """
    Move of the root's best child.

    Raises:
        UnresolvedScoreError: If the root has not been evaluated
    """
    child = root.get_best_child_node()
    if child is None:
        raise UnresolvedScoreError(f"No child of {root} carries the root score")
    return child.move


def choose_move(board, plies: int = DEFAULT_PLY_DEPTH, player: Player = Player.ONE,
                max_nodes: Optional[int] = MAX_TREE_NODES, check_restoration: bool = False,
                verbose: int = 0) -> SearchResult:
    """
    Run a full search from board and return the chosen move.

    Args:
        board: Column-major board, restored to its original contents on return
        plies: Extra plies below the root's children (0 scores the candidate moves directly)
        player: Side to move
        max_nodes: Refuse or abort searches larger than this (None: no limit)
        check_restoration: Compare the board before and after the search
        verbose: Verbosity level (0: silent, 2+: show info logs)

    Returns:
        SearchResult with the move, the root score, the tree and the node count

    Raises:
        InvalidBoardError: If the board is malformed
        NoLegalMovesError: If the board has no empty cell
        SearchLimitExceeded: If the search is, or grows, too large
        BoardRestorationError: If check_restoration is set and the board changed
    """
    if not validate_board(board):
        raise InvalidBoardError("Board must be non-empty, with non-empty columns holding only 0, 1 or 2")

    num_empty = len(empty_cells(board))
    if num_empty == 0:
        raise NoLegalMovesError("Cannot search a board with no empty cells")

    expected = expected_node_count(num_empty, plies)
    if max_nodes is not None and expected > max_nodes:
        raise SearchLimitExceeded(
            f"A {plies}-ply search over {num_empty} empty cells builds {expected} nodes, "
            f"which exceeds the limit of {max_nodes}"
        )

    if verbose >= 2:
        logger.info(f"Starting minimax search: plies={plies}, player={player.name}, "
                    f"empty cells={num_empty}, expected nodes={expected}")

    before = board_snapshot(board) if check_restoration else None
    root = new_root()
    guard = SearchGuard(max_nodes=max_nodes)
    start = time.time()
    evaluate(root, board, plies, player, guard)
    elapsed = time.time() - start

    if check_restoration:
        check_board_restored(before, board_snapshot(board))

    move = best_move(root)
    if verbose >= 2:
        logger.info(f"Search complete: best move = {move}, score = {root.score}, "
                    f"nodes = {guard.nodes}, time = {elapsed:.3f}s")

    return SearchResult(move=move, score=root.score, root=root, nodes=guard.nodes)


# ============================================================================
# Tree inspection helpers
# ============================================================================

def iter_nodes(root: DecisionNode) -> Iterator[DecisionNode]:
    """All nodes of the tree, depth-first in generation order, root first."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def collect_terminal_nodes(root: DecisionNode) -> List[DecisionNode]:
    """All leaves of the tree, in generation order."""
    return [node for node in iter_nodes(root) if node.is_terminal]


def print_tree_structure(node: DecisionNode, indent=0):
    """Print the complete tree structure with all nodes."""
    side = "opponent" if node.mover_is_opponent else "searcher"
    print("  " * indent + f"Node: depth={node.depth}, move={node.move}, mover={side}, score={node._score}")

    for child in node.children:
        print_tree_structure(child, indent + 1)


def print_all_terminal_nodes(root: DecisionNode):
    """Print all terminal nodes for manual verification."""
    terminals = collect_terminal_nodes(root)

    print(f"Found {len(terminals)} terminal nodes:")
    for i, node in enumerate(terminals):
        print(f"  {i+1}. Move: {node.move}, Depth: {node.depth}, Score: {node._score}")
