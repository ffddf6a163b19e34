"""
Centralized enum definitions for hex_minimax semantic types.

This module is the single source of truth for representing players and cell
contents. Other modules should import these Enums rather than duplicating
constants.
"""

from enum import Enum


class StrictEnum(Enum):
    """Base class for enums that prevent cross-type comparisons."""
    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            raise TypeError(f"Cannot compare {self.__class__.__name__} with {type(other).__name__}")
        return super().__eq__(other)

    def __hash__(self):
        """Make enums hashable so they can be used as dictionary keys."""
        return hash(self.value)


class Player(StrictEnum):
    """Player identities. The value is the integer written into a board cell."""
    ONE = 1
    TWO = 2


class Piece(StrictEnum):
    """Cell contents for the column-major board representation (integer encoding)."""
    EMPTY = 0
    PLAYER_ONE = 1
    PLAYER_TWO = 2


# ============================================================================
# Helper Functions for Enum-Primitive Conversion
# ============================================================================

def player_to_int(player: Player) -> int:
    """Convert Player enum to integer representation."""
    return player.value


def int_to_player(player_int: int) -> Player:
    """Convert integer to Player enum."""
    if player_int not in (Player.ONE.value, Player.TWO.value):
        raise ValueError(f"Invalid player integer: {player_int}")
    return Player(player_int)


def piece_to_int(piece: Piece) -> int:
    """Convert Piece enum to integer representation."""
    return piece.value


def int_to_piece(piece_int: int) -> Piece:
    """Convert integer to Piece enum."""
    if piece_int not in (Piece.EMPTY.value, Piece.PLAYER_ONE.value, Piece.PLAYER_TWO.value):
        raise ValueError(f"Invalid piece integer: {piece_int}")
    return Piece(int(piece_int))


def player_to_piece(player: Player) -> Piece:
    """Piece a player leaves on the board."""
    return Piece(player.value)


def get_opponent(player: Player) -> Player:
    """
    Return the other player.

    Only two players exist, so this is a plain swap.
    """
    if not isinstance(player, Player):
        raise TypeError(f"player must be Player, got {type(player)}")
    return Player.TWO if player == Player.ONE else Player.ONE


# ============================================================================
# Display Helpers
# ============================================================================

def get_piece_display_symbol(piece: Piece) -> str:
    """Get the display symbol for a piece."""
    symbols = {
        Piece.EMPTY: ".",
        Piece.PLAYER_ONE: "1",
        Piece.PLAYER_TWO: "2",
    }
    return symbols[piece]


def get_piece_unicode_symbol(piece: Piece) -> str:
    """Get the unicode symbol for a piece."""
    symbols = {
        Piece.EMPTY: "◯",
        Piece.PLAYER_ONE: "●",
        Piece.PLAYER_TWO: "■",
    }
    return symbols[piece]
