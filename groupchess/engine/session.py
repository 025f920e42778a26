"""
The GameSession is the entrypoint into the domain layer for the referee service.
It owns one board, knows which user plays which color and decides whether a move attempt may be played.
The turn is always read from the board itself, never stored on the session.
"""

from dataclasses import dataclass
from typing import Optional, Self

from groupchess.core.exceptions import IllegalMoveError, NotYourTurnError
from groupchess.core.models import ChallengeRequest, GameOutcome, User
from groupchess.core.shared_types import Color, Termination
from groupchess.engine.rules import Board, RulesEngine

AUTO_PROMOTION = "q"


@dataclass
class GameSession:
    board: Board
    players: dict[Color, User]
    engine: RulesEngine

    @classmethod
    def from_challenge(cls, challenge: ChallengeRequest, engine: RulesEngine) -> Self:
        """The challenger plays white, the user who accepted plays black."""
        return cls(
            board=engine.new_board(),
            players={Color.WHITE: challenge.challenger, Color.BLACK: challenge.challenged},
            engine=engine,
        )

    @property
    def turn_color(self) -> Color:
        return self.engine.turn_color(self.board)

    @property
    def player_to_move(self) -> User:
        return self.players[self.turn_color]

    def color_of(self, user: User) -> Optional[Color]:
        return next(
            (color for color, player in self.players.items() if player.id == user.id),
            None,
        )

    def legal_moves(self) -> list[tuple[str, str]]:
        """Fresh enumeration for the current position. Never cached."""
        return self.engine.legal_moves(self.board)

    def play(self, actor: User, from_square: str, to_square: str) -> Optional[GameOutcome]:
        """
        Attempt a move on behalf of `actor`.
        ----

        1. the actor must be the player bound to the color to move
        2. the engine must accept the move (pawns reaching the last rank become queens)
        3. check for an end condition

        Returns the outcome when the move ended the game, None when play continues.
        """
        self._assert_your_turn(actor)

        if not self.engine.apply_move(self.board, from_square, to_square, AUTO_PROMOTION):
            raise IllegalMoveError(f"Move not allowed: {from_square}{to_square}")

        # NOTE the board has already advanced: the mover is the opponent of the color to move now.
        return self.outcome(mover=actor)

    def outcome(self, mover: Optional[User] = None) -> Optional[GameOutcome]:
        """Terminal condition of the current position, checked in a fixed priority order."""
        board = self.board
        if self.engine.is_checkmate(board):
            winner = mover if mover is not None else self.players[self.turn_color.opponent]
            return GameOutcome(Termination.CHECKMATE, winner=winner)
        if self.engine.is_stalemate(board):
            return GameOutcome(Termination.STALEMATE)
        if self.engine.is_threefold_repetition(board):
            return GameOutcome(Termination.THREEFOLD_REPETITION)
        if self.engine.is_insufficient_material(board):
            return GameOutcome(Termination.INSUFFICIENT_MATERIAL)
        if self.engine.is_game_over(board):
            return GameOutcome(Termination.GAME_OVER)
        return None

    # -- PRIVATE HELPERS ---
    def _assert_your_turn(self, actor: User) -> None:
        """You must wait for your turn before making a move."""
        player_to_move = self.player_to_move
        if actor.id != player_to_move.id:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {player_to_move.id} to make a move first."
            )
