"""
Boundary layer data model(s).

These objects are passed between the bot dispatcher, the referee service and the session registry.
They hold identities and negotiation state only; the board itself is owned by a GameSession.
"""

import time
from dataclasses import dataclass, field
from typing import Optional

from groupchess.core.exceptions import SelfChallengeError
from groupchess.core.shared_types import Termination

# Type aliases to make signatures easier to read
ConversationId = int
UserId = int


@dataclass(frozen=True)
class User:
    """A chat participant. Identity is the platform id; name is only used for mentions."""

    id: UserId
    name: str = field(default="", compare=False)

    @property
    def mention(self) -> str:
        return f"@{self.name}" if self.name else str(self.id)


@dataclass
class ChallengeRequest:
    """Pending invitation from one user to another within a conversation."""

    challenger: User
    challenged: User
    created_at: float = field(default_factory=time.monotonic)

    def __post_init__(self) -> None:
        if self.challenger.id == self.challenged.id:
            raise SelfChallengeError(
                f"User {self.challenger.id} attempted to challenge themselves."
            )

    def matches(self, challenger_id: UserId, challenged_id: UserId) -> bool:
        """Same pair of players as encoded in an accept/decline action."""
        return (
            self.challenger.id == challenger_id and self.challenged.id == challenged_id
        )

    def is_expired(self, ttl: Optional[float], now: float) -> bool:
        if ttl is None:
            return False
        return now - self.created_at >= ttl


@dataclass(frozen=True)
class GameOutcome:
    """How a finished game ended. Only checkmate has a winner."""

    termination: Termination
    winner: Optional[User] = None

    @property
    def is_draw(self) -> bool:
        return self.winner is None
