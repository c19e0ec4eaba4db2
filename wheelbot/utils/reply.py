# wheelbot/utils/reply.py
from __future__ import annotations

from aiogram.types import Message

from wheelbot.keyboards.main import main_menu_kb


async def reply_safe(message: Message, text: str, **kwargs) -> None:
    """
    Reply helper: the reply keyboard is attached in private chats only.
    """
    if message.chat.type == "private":
        kwargs.setdefault("reply_markup", main_menu_kb())
    else:
        kwargs.setdefault("reply_markup", None)

    await message.answer(text, **kwargs)
