"""
Rules engine adapter.

The referee never looks inside a board: it only asks the RulesEngine for legal moves, applies moves through it
and queries terminal conditions. PythonChessRules is the implementation backed by python-chess.
"""

from typing import Optional, Protocol

import chess

from groupchess.core.shared_types import Color

Board = chess.Board
SquarePair = tuple[str, str]

PROMOTION_PIECES = {
    "q": chess.QUEEN,
    "r": chess.ROOK,
    "b": chess.BISHOP,
    "n": chess.KNIGHT,
}


class RulesEngine(Protocol):
    """Contract the session layer relies on."""

    def new_board(self, fen: Optional[str] = None) -> Board:
        """Board in the starting position (or the given FEN)."""
        ...

    def legal_moves(self, board: Board) -> list[SquarePair]:
        """Legal (from, to) pairs for the side to move, in engine order, one entry per pair."""
        ...

    def apply_move(
        self, board: Board, from_square: str, to_square: str, promotion: str = "q"
    ) -> bool:
        """Play the move if it is legal. Returns False (board untouched) otherwise."""
        ...

    def turn_color(self, board: Board) -> Color: ...

    def is_checkmate(self, board: Board) -> bool: ...

    def is_stalemate(self, board: Board) -> bool: ...

    def is_threefold_repetition(self, board: Board) -> bool: ...

    def is_insufficient_material(self, board: Board) -> bool: ...

    def is_game_over(self, board: Board) -> bool: ...

    def render(self, board: Board) -> str: ...


class PythonChessRules:
    """RulesEngine implemented with python-chess."""

    def new_board(self, fen: Optional[str] = None) -> Board:
        return chess.Board(fen) if fen else chess.Board()

    def legal_moves(self, board: Board) -> list[SquarePair]:
        # under-promotions share from/to with the queen promotion: keep the first occurrence only
        seen: set[SquarePair] = set()
        pairs: list[SquarePair] = []
        for move in board.legal_moves:
            pair = (chess.square_name(move.from_square), chess.square_name(move.to_square))
            if pair not in seen:
                seen.add(pair)
                pairs.append(pair)
        return pairs

    def apply_move(
        self, board: Board, from_square: str, to_square: str, promotion: str = "q"
    ) -> bool:
        try:
            origin = chess.parse_square(from_square)
            destination = chess.parse_square(to_square)
        except ValueError:
            return False

        move = chess.Move(
            origin,
            destination,
            promotion=self._promotion_for(board, origin, destination, promotion),
        )
        if not board.is_legal(move):
            return False
        board.push(move)
        return True

    def turn_color(self, board: Board) -> Color:
        return Color.WHITE if board.turn == chess.WHITE else Color.BLACK

    def is_checkmate(self, board: Board) -> bool:
        return board.is_checkmate()

    def is_stalemate(self, board: Board) -> bool:
        return board.is_stalemate()

    def is_threefold_repetition(self, board: Board) -> bool:
        return board.is_repetition(3)

    def is_insufficient_material(self, board: Board) -> bool:
        return board.is_insufficient_material()

    def is_game_over(self, board: Board) -> bool:
        """Any terminal condition, including the automatic and claimable draws."""
        return (
            board.is_game_over()
            or board.is_repetition(3)
            or board.is_fifty_moves()
        )

    def render(self, board: Board) -> str:
        """ASCII board, white at the bottom, with rank and file labels."""
        rows = str(board).splitlines()
        labelled = [f"{8 - index} {row}" for index, row in enumerate(rows)]
        labelled.append("  a b c d e f g h")
        return "\n".join(labelled)

    # -- PRIVATE HELPERS ---
    def _promotion_for(
        self, board: Board, origin: chess.Square, destination: chess.Square, promotion: str
    ) -> Optional[chess.PieceType]:
        """Only a pawn reaching the last rank carries a promotion piece."""
        if board.piece_type_at(origin) != chess.PAWN:
            return None
        if chess.square_rank(destination) not in (0, 7):
            return None
        return PROMOTION_PIECES.get(promotion.lower(), chess.QUEEN)
