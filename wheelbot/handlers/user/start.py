from __future__ import annotations

from aiogram import Router
from aiogram.filters import CommandStart
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from wheelbot.config import Settings
from wheelbot.keyboards.web_app import open_wheel_kb
from wheelbot.utils.ensure_account import ensure_account
from wheelbot.utils.reply import reply_safe

router = Router()

WELCOME_TEXT = (
    "🎉 <b>Welcome to the Daily Wheel!</b>\n\n"
    "🎰 Spin once a day for coins and NFT credits\n"
    "👥 Invite friends to earn bonus spins\n"
    "💰 Link your wallet for token distribution\n\n"
    "Choose an option from the menu below:"
)


def _referral_payload(text: str | None) -> str | None:
    # payload format: /start <CODE> or /start ref_<CODE>
    parts = (text or "").strip().split(maxsplit=1)
    payload = parts[1].strip() if len(parts) > 1 else ""
    if payload.startswith("ref_"):
        payload = payload[4:]
    return payload or None


@router.message(CommandStart())
async def start_cmd(message: Message, session: AsyncSession, settings: Settings) -> None:
    # Referral is applied only if this creates the account
    await ensure_account(session, message, referral_code=_referral_payload(message.text))

    await reply_safe(message, WELCOME_TEXT, parse_mode="HTML")
    await message.answer(
        "🎮 Ready to play?\nTap the button below to spin the wheel!",
        reply_markup=open_wheel_kb(settings.web_app_url),
    )
