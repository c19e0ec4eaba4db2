# wheelbot/handlers/common.py
from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import Message

from wheelbot.config import Settings
from wheelbot.keyboards.web_app import open_wheel_kb
from wheelbot.utils.reply import reply_safe

router = Router(name="common")


@router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    await reply_safe(
        message,
        "📌 Available commands:\n"
        "/start - welcome\n"
        "/spin - spin the wheel\n"
        "/ref - your referral link\n"
        "/history - your last spins\n"
        "/help - help\n\n"
        "You can also use the menu buttons.",
    )


@router.message(F.chat.type == "private", F.text)
async def fallback(message: Message, settings: Settings) -> None:
    await reply_safe(message, "Please use the buttons below to navigate:")
    await message.answer(
        "🎮 Ready to play? Tap the button below to spin the wheel!",
        reply_markup=open_wheel_kb(settings.web_app_url),
    )
