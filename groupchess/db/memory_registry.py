"""Implementation of SessionRegistry kept in process memory, with one lock per conversation."""

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from groupchess.core.exceptions import AlreadyActiveError, StaleChallengeError
from groupchess.core.models import ChallengeRequest, ConversationId, UserId
from groupchess.db.repository import Session
from groupchess.engine.session import GameSession

logger = logging.getLogger(__name__)


class InMemorySessionRegistry:
    """
    Sessions stored in a dictionary keyed by conversation id.

    ----
    Every method takes the conversation's lock, and the locks are re-entrant so the referee can wrap
    a whole check-then-act sequence in `lock()` and still call the methods below.
    Conversations never share a lock; `_locks_guard` only protects the bookkeeping of lock entries,
    which are dropped again once a conversation has no session and nobody holds its lock.
    """

    def __init__(
        self,
        challenge_ttl: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._slots: dict[ConversationId, Session] = {}
        self._locks: dict[ConversationId, _ConversationLock] = {}
        self._locks_guard = threading.Lock()
        self.challenge_ttl = challenge_ttl
        self.clock = clock

    @contextmanager
    def lock(self, conversation_id: ConversationId) -> Iterator[None]:
        with self._lock_for(conversation_id):
            yield

    def get(self, conversation_id: ConversationId) -> Session | None:
        """Pending challenge or active game. An expired challenge is dropped and reported as absent."""
        with self._lock_for(conversation_id):
            session = self._slots.get(conversation_id)
            if isinstance(session, ChallengeRequest) and session.is_expired(
                self.challenge_ttl, self.clock()
            ):
                logger.info(
                    "Challenge in chat %s from %s to %s expired.",
                    conversation_id,
                    session.challenger.id,
                    session.challenged.id,
                )
                del self._slots[conversation_id]
                return None
            return session

    def create_challenge(
        self, conversation_id: ConversationId, challenge: ChallengeRequest
    ) -> ChallengeRequest:
        with self._lock_for(conversation_id):
            occupant = self.get(conversation_id)
            if occupant is not None:
                raise AlreadyActiveError(
                    f"Chat {conversation_id} already holds a {type(occupant).__name__}."
                )
            challenge.created_at = self.clock()
            self._slots[conversation_id] = challenge
            return challenge

    def promote_to_game(
        self,
        conversation_id: ConversationId,
        challenger_id: UserId,
        challenged_id: UserId,
        game_factory: Callable[[ChallengeRequest], GameSession],
    ) -> GameSession:
        with self._lock_for(conversation_id):
            challenge = self.get(conversation_id)
            if not isinstance(challenge, ChallengeRequest) or not challenge.matches(
                challenger_id, challenged_id
            ):
                raise StaleChallengeError(
                    f"No pending challenge from {challenger_id} to {challenged_id} in chat {conversation_id}."
                )
            game = game_factory(challenge)
            self._slots[conversation_id] = game
            return game

    def clear(self, conversation_id: ConversationId) -> Session | None:
        with self._lock_for(conversation_id):
            return self._slots.pop(conversation_id, None)

    def conversation_ids(self) -> list[ConversationId]:
        return list(self._slots.keys())

    def __len__(self) -> int:
        return len(self._slots)

    def lock_count(self) -> int:
        """Conversations currently holding a lock entry."""
        with self._locks_guard:
            return len(self._locks)

    # -- Internal helpers --
    @contextmanager
    def _lock_for(self, conversation_id: ConversationId) -> Iterator[None]:
        """
        Hold the conversation's lock.

        The entry counts the threads holding or waiting for it, and is dropped once the last one leaves
        an empty slot. Slots only change under their own lock, so nobody can be using a dropped entry.
        """
        with self._locks_guard:
            entry = self._locks.get(conversation_id)
            if entry is None:
                entry = _ConversationLock()
                self._locks[conversation_id] = entry
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0 and conversation_id not in self._slots:
                    del self._locks[conversation_id]


@dataclass
class _ConversationLock:
    lock: threading.RLock = field(default_factory=threading.RLock)
    users: int = 0
