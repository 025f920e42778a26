"""
Process entrypoint: load configuration, wire the layers together and poll Telegram for updates.

Run with `python -m groupchess.bot.app` or the `groupchess` console script. BOT_TOKEN must be set.
"""

import logging
import sys

from telegram import Update
from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes

from groupchess.api.models import ActionPress, ChallengeCommand
from groupchess.bot.dispatcher import ChessBot
from groupchess.bot.telegram_transport import TelegramTransport, to_user
from groupchess.core.config import Settings, load_settings
from groupchess.core.exceptions import ConfigurationError
from groupchess.db.memory_registry import InMemorySessionRegistry
from groupchess.engine.rules import PythonChessRules
from groupchess.services.referee import ChessReferee

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CHESS_BOT_KEY = "chess_bot"

logger = logging.getLogger(__name__)


async def challenge(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """/challenge, sent as a reply to the opponent's message."""
    message = update.effective_message
    if message is None or update.effective_chat is None or update.effective_user is None:
        return

    reply = message.reply_to_message
    replied_to = to_user(reply.from_user) if reply and reply.from_user else None
    command = ChallengeCommand(
        conversation_id=update.effective_chat.id,
        issuer=to_user(update.effective_user),
        replied_to=replied_to,
    )
    await context.bot_data[CHESS_BOT_KEY].on_challenge(command)


async def button(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    query = update.callback_query
    if query is None or update.effective_chat is None:
        return

    press = ActionPress(
        conversation_id=update.effective_chat.id,
        actor=to_user(query.from_user),
        data=query.data or "",
        message_ref=query,
    )
    await context.bot_data[CHESS_BOT_KEY].on_action(press)


def build_application(settings: Settings) -> Application:
    application = Application.builder().token(settings.bot_token).build()

    registry = InMemorySessionRegistry(challenge_ttl=settings.challenge_ttl)
    referee = ChessReferee(registry, PythonChessRules(), row_size=settings.moves_per_row)
    application.bot_data[CHESS_BOT_KEY] = ChessBot(referee, TelegramTransport(application.bot))

    application.add_handler(CommandHandler("challenge", challenge))
    application.add_handler(CallbackQueryHandler(button))
    return application


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        logging.basicConfig(format=LOG_FORMAT, level=logging.ERROR)
        logger.error("%s", exc)
        sys.exit(1)

    logging.basicConfig(format=LOG_FORMAT, level=settings.log_level)
    application = build_application(settings)
    logger.info("Chess bot started.")
    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
