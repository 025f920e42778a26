"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class Termination(StrEnum):
    """Ways a game can end. Order of declaration is the order in which they are checked."""

    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    THREEFOLD_REPETITION = "threefold repetition"
    INSUFFICIENT_MATERIAL = "insufficient material"
    GAME_OVER = "game over"


class ActionKind(StrEnum):
    ACCEPT = "accept"
    DECLINE = "decline"
    MOVE = "move"
