"""Protocol for the chat platform: the only way the bot talks back to users."""

from typing import Protocol

from groupchess.api.models import ActionGrid, ActionPress
from groupchess.core.models import ConversationId


class ChatTransport(Protocol):
    async def send_text(
        self, conversation_id: ConversationId, text: str, markdown: bool = False
    ) -> None:
        """Post a message in the conversation, optionally formatted as Markdown."""
        ...

    async def send_with_actions(
        self, conversation_id: ConversationId, text: str, action_grid: ActionGrid
    ) -> None:
        """Post a message carrying a grid of buttons."""
        ...

    async def edit_message(self, message_ref: object, text: str) -> None:
        """Replace the text (and drop the buttons) of a message previously sent."""
        ...

    async def acknowledge(self, press: ActionPress, feedback_text: str) -> None:
        """Short feedback to the user who pressed a button."""
        ...
