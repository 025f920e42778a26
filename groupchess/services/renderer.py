"""Presentation of sessions: board text, move buttons, and the user-facing texts of the negotiation."""

from groupchess.api.actions import AcceptAction, DeclineAction, MoveAction, encode_action
from groupchess.api.models import ActionButton, ActionGrid, BoardView
from groupchess.core.config import DEFAULT_MOVES_PER_ROW
from groupchess.core.models import ChallengeRequest, GameOutcome, User
from groupchess.core.shared_types import Color, Termination
from groupchess.engine.session import GameSession

DRAW_LABELS = {
    Termination.STALEMATE: "Draw (stalemate)",
    Termination.THREEFOLD_REPETITION: "Draw (threefold repetition)",
    Termination.INSUFFICIENT_MATERIAL: "Draw (insufficient material)",
    Termination.GAME_OVER: "The game has ended.",
}


def render_board(session: GameSession, row_size: int = DEFAULT_MOVES_PER_ROW) -> BoardView:
    """
    Board text, turn indicator and one button per legal move.
    ----
    Moves are kept in the engine's enumeration order and chunked into rows of `row_size`.
    The move set is recomputed on every call.
    """
    buttons = [
        ActionButton(
            label=f"{origin}{destination}",
            data=encode_action(MoveAction(from_square=origin, to_square=destination)),
        )
        for origin, destination in session.legal_moves()
    ]
    return BoardView(
        board_text=session.engine.render(session.board),
        turn=session.turn_color,
        move_rows=chunk(buttons, row_size),
    )


def chunk(buttons: list[ActionButton], row_size: int) -> ActionGrid:
    if row_size < 1:
        raise ValueError(f"row_size must be at least 1, got {row_size}")
    return [buttons[i : i + row_size] for i in range(0, len(buttons), row_size)]


def invitation_buttons(challenge: ChallengeRequest) -> ActionGrid:
    challenger_id = challenge.challenger.id
    challenged_id = challenge.challenged.id
    accept = AcceptAction(challenger=challenger_id, challenged=challenged_id)
    decline = DeclineAction(challenger=challenger_id, challenged=challenged_id)
    return [
        [
            ActionButton(label="Accept", data=encode_action(accept)),
            ActionButton(label="Decline", data=encode_action(decline)),
        ]
    ]


def invitation_text(challenge: ChallengeRequest) -> str:
    return (
        f"{challenge.challenged.mention}, you have been challenged to a game of chess "
        f"by {challenge.challenger.mention}!"
    )


def start_text(players: dict[Color, User]) -> str:
    return f"Game started! White ({players[Color.WHITE].mention}) moves first."


def decline_text() -> str:
    return "Challenge declined."


def outcome_text(outcome: GameOutcome) -> str:
    if outcome.termination == Termination.CHECKMATE and outcome.winner is not None:
        return f"Game over: Checkmate, winner {outcome.winner.mention}"
    return f"Game over: {DRAW_LABELS[outcome.termination]}"


def board_message(view: BoardView) -> str:
    """Board wrapped in a Markdown code block."""
    return f"```\n{view.board_text}\n```"
