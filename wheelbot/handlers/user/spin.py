# wheelbot/handlers/user/spin.py
from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from wheelbot.database.models import PrizeType
from wheelbot.keyboards.main import BTN_SPIN
from wheelbot.services.eligibility import time_until_next_spin
from wheelbot.services.spin import SpinRejection, SpinResult, SpinService
from wheelbot.utils.ensure_account import ensure_account
from wheelbot.utils.reply import reply_safe

router = Router()


def _result_text(res: SpinResult) -> str:
    prize = res.prize
    if prize is None:
        return "Spin error."

    if prize.type == PrizeType.NFT:
        msg = "💎 <b>JACKPOT!</b>\nYou won an <b>NFT credit</b>!"
    elif prize.type == PrizeType.ZERO:
        msg = "😅 <b>No luck this time.</b>\nTry again tomorrow!"
    else:
        msg = f"🎉 <b>You won +{prize.amount} coins!</b>"

    if res.used_bonus_spin:
        msg += "\n🎟 A bonus spin was used."
    return msg


@router.message(Command("spin"))
@router.message(F.text == BTN_SPIN)
async def spin_cmd(message: Message, session: AsyncSession, spin_service: SpinService) -> None:
    account = await ensure_account(session, message)

    res = await spin_service.spin(account.id)

    if res.ok:
        await reply_safe(message, _result_text(res), parse_mode="HTML")
        return

    if res.rejection == SpinRejection.COOLDOWN:
        left = time_until_next_spin(account.last_spin_at)
        await reply_safe(
            message,
            "⏳ <b>Your spin is not ready yet.</b>\n"
            f"Next free spin in <b>{left.hours}h {left.minutes}m</b>.\n\n"
            "Invite friends to get bonus spins 👥",
            parse_mode="HTML",
        )
        return

    await reply_safe(message, f"⏳ {res.message}")
