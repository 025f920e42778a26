"""
Configuration loading.

Values come from the environment, optionally populated from a `.env` file. BOT_TOKEN is required;
everything else has a default.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from groupchess.core.exceptions import ConfigurationError

DEFAULT_MOVES_PER_ROW = 4
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    bot_token: str
    challenge_ttl: Optional[float] = None  # seconds; None means challenges never expire
    moves_per_row: int = DEFAULT_MOVES_PER_ROW
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from `environ` (defaults to os.environ after reading .env)."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    token = environ.get("BOT_TOKEN", "").strip()
    if not token:
        raise ConfigurationError("BOT_TOKEN environment variable is missing!")

    return Settings(
        bot_token=token,
        challenge_ttl=_parse_ttl(environ.get("CHALLENGE_TTL_SECONDS")),
        moves_per_row=_parse_row_size(environ.get("MOVES_PER_ROW")),
        log_level=environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        or DEFAULT_LOG_LEVEL,
    )


def _parse_ttl(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        ttl = float(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"CHALLENGE_TTL_SECONDS must be a number, got {raw!r}."
        ) from exc
    if ttl <= 0:
        raise ConfigurationError(f"CHALLENGE_TTL_SECONDS must be positive, got {ttl}.")
    return ttl


def _parse_row_size(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_MOVES_PER_ROW
    try:
        size = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"MOVES_PER_ROW must be an integer, got {raw!r}.") from exc
    if size < 1:
        raise ConfigurationError(f"MOVES_PER_ROW must be at least 1, got {size}.")
    return size
