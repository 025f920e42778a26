"""
Routing of inbound chat events to the referee, and delivery of the results.

Rejections (any GameError) are reported back to the acting user and change nothing else.
"""

import logging

from groupchess.api.actions import AcceptAction, DeclineAction, MoveAction, decode_action
from groupchess.api.models import (
    ActionPress,
    BoardView,
    ChallengeCommand,
    GameFinished,
    GameStarted,
)
from groupchess.bot.transport import ChatTransport
from groupchess.core.exceptions import GameError
from groupchess.core.models import ConversationId
from groupchess.services.referee import ChessReferee
from groupchess.services.renderer import board_message

logger = logging.getLogger(__name__)

MOVE_ACCEPTED = "Move accepted."


class ChessBot:
    def __init__(self, referee: ChessReferee, transport: ChatTransport) -> None:
        self.referee = referee
        self.transport = transport

    async def on_challenge(self, command: ChallengeCommand) -> None:
        try:
            invitation = self.referee.issue_challenge(
                command.conversation_id, command.issuer, command.replied_to
            )
        except GameError as exc:
            logger.warning("Chat %s: challenge rejected: %s", command.conversation_id, exc)
            await self.transport.send_text(command.conversation_id, exc.feedback)
            return

        await self.transport.send_with_actions(
            command.conversation_id, invitation.text, invitation.buttons
        )

    async def on_action(self, press: ActionPress) -> None:
        try:
            action = decode_action(press.data)
            if isinstance(action, MoveAction):
                await self._on_move(press, action)
            else:
                await self._on_response(press, action)
        except GameError as exc:
            logger.warning(
                "Chat %s: action %r by %s rejected: %s",
                press.conversation_id,
                press.data,
                press.actor.id,
                exc,
            )
            await self.transport.acknowledge(press, exc.feedback)

    async def send_board(self, conversation_id: ConversationId, view: BoardView) -> None:
        """Board as a code block, then the turn indicator carrying the move buttons."""
        await self.transport.send_text(conversation_id, board_message(view), markdown=True)
        await self.transport.send_with_actions(conversation_id, view.turn_text, view.move_rows)

    # -- Internal helpers --
    async def _on_response(self, press: ActionPress, action: AcceptAction | DeclineAction) -> None:
        result = self.referee.respond(press.conversation_id, press.actor, action)
        await self.transport.acknowledge(press, result.text)
        await self.transport.edit_message(press.message_ref, result.text)
        if isinstance(result, GameStarted):
            await self.send_board(press.conversation_id, result.view)

    async def _on_move(self, press: ActionPress, action: MoveAction) -> None:
        result = self.referee.make_move(press.conversation_id, press.actor, action)
        if isinstance(result, GameFinished):
            await self.transport.acknowledge(press, result.text)
            await self.transport.edit_message(press.message_ref, result.text)
            return
        await self.transport.acknowledge(press, MOVE_ACCEPTED)
        await self.send_board(press.conversation_id, result.view)
