"""Unit tests for groupchess/engine/rules.py"""

import chess
import pytest

from groupchess.core.shared_types import Color
from groupchess.engine.rules import PythonChessRules

PROMOTION_FEN = "8/P6k/8/8/8/8/8/K7 w - - 0 1"
STALEMATE_IN_ONE_FEN = "7k/4Q3/6K1/8/8/8/8/8 w - - 0 1"
BARE_KINGS_AFTER_CAPTURE_FEN = "7k/8/8/8/8/8/1n6/K7 w - - 0 1"


def test_starting_position(engine: PythonChessRules) -> None:
    board = engine.new_board()
    assert engine.turn_color(board) == Color.WHITE
    assert len(engine.legal_moves(board)) == 20
    assert ("e2", "e4") in engine.legal_moves(board)
    assert not engine.is_game_over(board)


def test_legal_moves_follow_engine_order(engine: PythonChessRules) -> None:
    board = engine.new_board()
    expected = [
        (chess.square_name(move.from_square), chess.square_name(move.to_square))
        for move in board.legal_moves
    ]
    assert engine.legal_moves(board) == expected


def test_apply_move_switches_turn(engine: PythonChessRules) -> None:
    board = engine.new_board()
    assert engine.apply_move(board, "e2", "e4")
    assert engine.turn_color(board) == Color.BLACK


@pytest.mark.parametrize(
    "from_square, to_square",
    [
        ("e2", "e5"),  # pawn cannot move three squares
        ("e7", "e5"),  # not white's piece
        ("e3", "e4"),  # empty square
        ("z9", "e4"),  # not a square
    ],
)
def test_apply_illegal_move_leaves_board_untouched(
    engine: PythonChessRules, from_square: str, to_square: str
) -> None:
    board = engine.new_board()
    fen_before = board.fen()
    assert not engine.apply_move(board, from_square, to_square)
    assert board.fen() == fen_before


def test_promotion_listed_once_and_defaults_to_queen(engine: PythonChessRules) -> None:
    board = engine.new_board(PROMOTION_FEN)
    assert engine.legal_moves(board).count(("a7", "a8")) == 1

    assert engine.apply_move(board, "a7", "a8")
    assert board.piece_at(chess.A8) == chess.Piece(chess.QUEEN, chess.WHITE)


def test_explicit_under_promotion(engine: PythonChessRules) -> None:
    board = engine.new_board(PROMOTION_FEN)
    assert engine.apply_move(board, "a7", "a8", promotion="n")
    assert board.piece_at(chess.A8) == chess.Piece(chess.KNIGHT, chess.WHITE)


def test_checkmate(engine: PythonChessRules) -> None:
    board = engine.new_board()
    for origin, destination in [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")]:
        assert engine.apply_move(board, origin, destination)
    assert engine.is_checkmate(board)
    assert engine.is_game_over(board)
    assert engine.legal_moves(board) == []


def test_stalemate(engine: PythonChessRules) -> None:
    board = engine.new_board(STALEMATE_IN_ONE_FEN)
    assert engine.apply_move(board, "e7", "f7")
    assert engine.is_stalemate(board)
    assert not engine.is_checkmate(board)
    assert engine.is_game_over(board)


def test_insufficient_material(engine: PythonChessRules) -> None:
    board = engine.new_board(BARE_KINGS_AFTER_CAPTURE_FEN)
    assert engine.apply_move(board, "a1", "b2")
    assert engine.is_insufficient_material(board)
    assert engine.is_game_over(board)


def test_threefold_repetition(engine: PythonChessRules) -> None:
    board = engine.new_board()
    shuffle = [("g1", "f3"), ("g8", "f6"), ("f3", "g1"), ("f6", "g8")]
    for origin, destination in shuffle:
        engine.apply_move(board, origin, destination)
    assert not engine.is_threefold_repetition(board)

    for origin, destination in shuffle:
        engine.apply_move(board, origin, destination)
    assert engine.is_threefold_repetition(board)
    assert engine.is_game_over(board)


def test_fifty_move_rule_is_game_over(engine: PythonChessRules) -> None:
    board = engine.new_board("7k/8/8/8/8/8/8/KR6 w - - 100 80")
    assert engine.is_game_over(board)
    assert not engine.is_checkmate(board)
    assert not engine.is_stalemate(board)
    assert not engine.is_threefold_repetition(board)
    assert not engine.is_insufficient_material(board)


def test_render_has_labels(engine: PythonChessRules) -> None:
    lines = engine.render(engine.new_board()).splitlines()
    assert len(lines) == 9
    assert lines[0] == "8 r n b q k b n r"
    assert lines[7] == "1 R N B Q K B N R"
    assert lines[8] == "  a b c d e f g h"
