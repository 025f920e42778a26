"""Orchestration of the negotiation and game flow between the bot, the session registry and the game sessions."""

import logging
from typing import Optional

from groupchess.api.actions import AcceptAction, DeclineAction, MoveAction
from groupchess.api.models import (
    ChallengeDeclined,
    GameFinished,
    GameStarted,
    Invitation,
    MoveAccepted,
)
from groupchess.core.config import DEFAULT_MOVES_PER_ROW
from groupchess.core.exceptions import (
    MissingTargetError,
    NoActiveGameError,
    NotAddressedToYouError,
    SelfChallengeError,
    StaleChallengeError,
)
from groupchess.core.models import ChallengeRequest, ConversationId, User
from groupchess.db.repository import SessionRegistry
from groupchess.engine.rules import RulesEngine
from groupchess.engine.session import GameSession
from groupchess.services.renderer import (
    decline_text,
    invitation_buttons,
    invitation_text,
    outcome_text,
    render_board,
    start_text,
)

logger = logging.getLogger(__name__)


class ChessReferee:
    """Orchestration of layers for games played inside group chats."""

    def __init__(
        self,
        registry: SessionRegistry,
        engine: RulesEngine,
        row_size: int = DEFAULT_MOVES_PER_ROW,
    ) -> None:
        self.registry = registry
        self.engine = engine
        self.row_size = row_size

    # -- Challenge negotiation ---
    def issue_challenge(
        self, conversation_id: ConversationId, issuer: User, target: Optional[User]
    ) -> Invitation:
        """`issuer` invites `target` to play. Rejected before touching state if it is a self-challenge."""
        if target is None:
            raise MissingTargetError("/challenge was not sent as a reply to a user.")
        if target.id == issuer.id:
            raise SelfChallengeError(f"User {issuer.id} attempted to challenge themselves.")

        with self.registry.lock(conversation_id):
            challenge = self.registry.create_challenge(
                conversation_id, ChallengeRequest(challenger=issuer, challenged=target)
            )

        logger.info(
            "Chat %s: %s challenged %s.", conversation_id, issuer.id, target.id
        )
        return Invitation(
            challenger=challenge.challenger,
            challenged=challenge.challenged,
            text=invitation_text(challenge),
            buttons=invitation_buttons(challenge),
        )

    def accept(
        self, conversation_id: ConversationId, actor: User, action: AcceptAction
    ) -> GameStarted:
        """The challenged user accepts: the challenge is replaced by a game, challenger plays white."""
        self._assert_addressee(actor, action.challenged)

        with self.registry.lock(conversation_id):
            game = self.registry.promote_to_game(
                conversation_id,
                action.challenger,
                action.challenged,
                lambda challenge: GameSession.from_challenge(challenge, self.engine),
            )
            view = render_board(game, self.row_size)

        logger.info(
            "Chat %s: game started, white=%s black=%s.",
            conversation_id,
            action.challenger,
            action.challenged,
        )
        return GameStarted(players=dict(game.players), text=start_text(game.players), view=view)

    def decline(
        self, conversation_id: ConversationId, actor: User, action: DeclineAction
    ) -> ChallengeDeclined:
        """The challenged user declines the matching pending challenge: it is dropped, no game is created."""
        self._assert_addressee(actor, action.challenged)

        with self.registry.lock(conversation_id):
            challenge = self.registry.get(conversation_id)
            if not isinstance(challenge, ChallengeRequest) or not challenge.matches(
                action.challenger, action.challenged
            ):
                raise StaleChallengeError(
                    f"No pending challenge from {action.challenger} to {action.challenged} in chat {conversation_id}."
                )
            self.registry.clear(conversation_id)

        logger.info(
            "Chat %s: %s declined the challenge from %s.",
            conversation_id,
            action.challenged,
            action.challenger,
        )
        return ChallengeDeclined(
            challenger=challenge.challenger, challenged=challenge.challenged, text=decline_text()
        )

    def respond(
        self,
        conversation_id: ConversationId,
        actor: User,
        action: AcceptAction | DeclineAction,
    ) -> GameStarted | ChallengeDeclined:
        if isinstance(action, AcceptAction):
            return self.accept(conversation_id, actor, action)
        return self.decline(conversation_id, actor, action)

    # -- Game play ---
    def make_move(
        self, conversation_id: ConversationId, actor: User, action: MoveAction
    ) -> MoveAccepted | GameFinished:
        """
        Move attempt by `actor`.
        ----
        The turn check, the move and the end-of-game check all happen under the conversation lock,
        so two near-simultaneous presses cannot both pass the turn check.
        """
        with self.registry.lock(conversation_id):
            game = self.get_game(conversation_id)
            outcome = game.play(actor, action.from_square, action.to_square)

            if outcome is not None:
                self.registry.clear(conversation_id)
                logger.info(
                    "Chat %s: game finished by %s (%s).",
                    conversation_id,
                    outcome.termination,
                    outcome.winner.id if outcome.winner else "no winner",
                )
                return GameFinished(
                    token=action.token, outcome=outcome, text=outcome_text(outcome)
                )

            logger.debug(
                "Chat %s: %s (%s) played %s.",
                conversation_id,
                actor.id,
                game.color_of(actor),
                action.token,
            )
            return MoveAccepted(token=action.token, view=render_board(game, self.row_size))

    def get_game(self, conversation_id: ConversationId) -> GameSession:
        """Attempt to find the active game and raise error if there is none."""
        session = self.registry.get(conversation_id)
        if not isinstance(session, GameSession):
            raise NoActiveGameError(f"No active game in chat {conversation_id}.")
        return session

    # -- Internal helpers --
    def _assert_addressee(self, actor: User, challenged_id: int) -> None:
        """Anyone can see the buttons, only the challenged user may press them."""
        if actor.id != challenged_id:
            raise NotAddressedToYouError(
                f"User {actor.id} pressed a button addressed to {challenged_id}."
            )
