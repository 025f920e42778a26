"""Inbound events and outbound presentation models"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from groupchess.core.models import ConversationId, GameOutcome, User
from groupchess.core.shared_types import Color


# --- INBOUND EVENTS ---
class ChallengeCommand(BaseModel):
    """`/challenge` sent as a reply to another user's message (replied_to is None otherwise)."""

    conversation_id: ConversationId
    issuer: User
    replied_to: Optional[User] = None


class ActionPress(BaseModel):
    """A button was pressed. message_ref identifies the message carrying the button, for edits."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    conversation_id: ConversationId
    actor: User
    data: str
    message_ref: Any = None


# --- PRESENTATION ---
class ActionButton(BaseModel):
    label: str
    data: str


ActionGrid = list[list[ActionButton]]


class BoardView(BaseModel):
    board_text: str
    turn: Color
    move_rows: ActionGrid

    @property
    def turn_text(self) -> str:
        return f"Turn: {self.turn.capitalize()}"

    @property
    def move_tokens(self) -> list[str]:
        return [button.label for row in self.move_rows for button in row]


# --- REFEREE RESULTS ---
class Invitation(BaseModel):
    challenger: User
    challenged: User
    text: str
    buttons: ActionGrid


class GameStarted(BaseModel):
    players: dict[Color, User]
    text: str
    view: BoardView


class ChallengeDeclined(BaseModel):
    challenger: User
    challenged: User
    text: str


class MoveAccepted(BaseModel):
    token: str
    view: BoardView


class GameFinished(BaseModel):
    token: str
    outcome: GameOutcome
    text: str
