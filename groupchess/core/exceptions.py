"""
Custom exceptions.

Every GameError is a recoverable, user-facing condition: the bot answers the acting user with `feedback`
and leaves all session state untouched. Only ConfigurationError is fatal.
"""


class GameError(Exception):
    """Top-level exception for everything a user can trigger while negotiating or playing a game."""

    feedback = "Something went wrong."

    def __init__(self, message: str = "", feedback: str | None = None) -> None:
        super().__init__(message or self.feedback)
        if feedback is not None:
            self.feedback = feedback


# --- Challenge negotiation ---
class AlreadyActiveError(GameError):
    feedback = "A game or challenge is already in progress in this chat."


class SelfChallengeError(GameError):
    feedback = "You cannot challenge yourself!"


class MissingTargetError(GameError):
    feedback = "Please reply to a user's message with /challenge to challenge them."


class NotAddressedToYouError(GameError):
    feedback = "This button is not for you!"


class StaleChallengeError(GameError):
    feedback = "Challenge not found or it has expired."


# --- Game play ---
class NoActiveGameError(GameError):
    feedback = "No game found."


class NotYourTurnError(GameError):
    feedback = "It is not your turn."


class IllegalMoveError(GameError):
    feedback = "Illegal move."


# --- Protocol ---
class UnknownActionError(GameError):
    feedback = "Unknown action."


# --- Startup ---
class ConfigurationError(Exception):
    """Required configuration is missing or invalid. The process cannot start."""
