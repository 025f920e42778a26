"""Protocol registry of live sessions (one slot per conversation)."""

from contextlib import AbstractContextManager
from typing import Callable, Protocol, Union

from groupchess.core.models import ChallengeRequest, ConversationId, UserId
from groupchess.engine.session import GameSession

Session = Union[ChallengeRequest, GameSession]


class SessionRegistry(Protocol):
    """Owns the single live entry (challenge or game) of every conversation."""

    def lock(self, conversation_id: ConversationId) -> AbstractContextManager[None]:
        """Hold the conversation's lock to make a read-check-write sequence atomic."""
        ...

    def get(self, conversation_id: ConversationId) -> Session | None:
        """Pending challenge or active game, if any."""
        ...

    def create_challenge(
        self, conversation_id: ConversationId, challenge: ChallengeRequest
    ) -> ChallengeRequest:
        """Store a new challenge. Raise AlreadyActiveError if the slot is taken."""
        ...

    def promote_to_game(
        self,
        conversation_id: ConversationId,
        challenger_id: UserId,
        challenged_id: UserId,
        game_factory: Callable[[ChallengeRequest], GameSession],
    ) -> GameSession:
        """Replace the matching challenge with a new game. Raise StaleChallengeError if none matches."""
        ...

    def clear(self, conversation_id: ConversationId) -> Session | None:
        """Remove whatever occupies the slot."""
        ...
