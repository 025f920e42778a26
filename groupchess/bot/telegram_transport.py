"""ChatTransport implemented with python-telegram-bot. The message_ref of a press is its CallbackQuery."""

from telegram import Bot, CallbackQuery, InlineKeyboardButton, InlineKeyboardMarkup
from telegram import User as TelegramUser
from telegram.constants import ParseMode

from groupchess.api.models import ActionGrid, ActionPress
from groupchess.core.models import ConversationId, User


def to_user(telegram_user: TelegramUser) -> User:
    return User(id=telegram_user.id, name=telegram_user.username or telegram_user.first_name)


def to_keyboard(action_grid: ActionGrid) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        [
            [InlineKeyboardButton(button.label, callback_data=button.data) for button in row]
            for row in action_grid
        ]
    )


class TelegramTransport:
    def __init__(self, bot: Bot) -> None:
        self.bot = bot

    async def send_text(
        self, conversation_id: ConversationId, text: str, markdown: bool = False
    ) -> None:
        await self.bot.send_message(
            chat_id=conversation_id,
            text=text,
            parse_mode=ParseMode.MARKDOWN if markdown else None,
        )

    async def send_with_actions(
        self, conversation_id: ConversationId, text: str, action_grid: ActionGrid
    ) -> None:
        await self.bot.send_message(
            chat_id=conversation_id, text=text, reply_markup=to_keyboard(action_grid)
        )

    async def edit_message(self, message_ref: object, text: str) -> None:
        if not isinstance(message_ref, CallbackQuery):
            raise TypeError(f"Cannot edit message from reference {message_ref!r}")
        await message_ref.edit_message_text(text)

    async def acknowledge(self, press: ActionPress, feedback_text: str) -> None:
        query = press.message_ref
        if not isinstance(query, CallbackQuery):
            raise TypeError(f"Cannot answer press without its CallbackQuery: {query!r}")
        await query.answer(feedback_text)
