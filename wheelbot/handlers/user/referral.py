# wheelbot/handlers/user/referral.py
from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from wheelbot.config import Settings
from wheelbot.database.repo.accounts import count_referred
from wheelbot.keyboards.main import BTN_INVITE
from wheelbot.utils.ensure_account import ensure_account
from wheelbot.utils.reply import reply_safe

router = Router()


def referral_links(bot_username: str, code: str) -> tuple[str, str]:
    """(mini-app link, bot /start link) carrying the referral code."""
    return (
        f"https://t.me/{bot_username}?startapp={code}",
        f"https://t.me/{bot_username}?start={code}",
    )


@router.message(Command("ref"))
@router.message(F.text == BTN_INVITE)
async def ref_cmd(message: Message, session: AsyncSession, settings: Settings) -> None:
    me = await ensure_account(session, message)
    app_link, bot_link = referral_links(settings.bot_username, me.referral_code or "")
    invited = await count_referred(session, me.id)

    await reply_safe(
        message,
        "👥 <b>Invite friends, get bonus spins</b>\n\n"
        f"Your code: <code>{me.referral_code}</code>\n"
        f"🎰 Wheel link: {app_link}\n"
        f"🤖 Bot link: {bot_link}\n\n"
        f"✅ <b>Invited friends:</b> {invited}\n"
        f"🎟 <b>Bonus spins:</b> {me.bonus_spin_count}\n\n"
        "Each friend who joins with your code gives you <b>+1 bonus spin</b> "
        "and gives them one too 🎉",
        parse_mode="HTML",
    )
