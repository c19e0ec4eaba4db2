from __future__ import annotations

from typing import Sequence

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from wheelbot.database.models import PrizeRecord, PrizeType
from wheelbot.database.repo.accounts import list_prizes
from wheelbot.utils.ensure_account import ensure_account
from wheelbot.utils.reply import reply_safe

router = Router()

HISTORY_LIMIT = 10


def history_text(prizes: Sequence[PrizeRecord]) -> str:
    if not prizes:
        return "📜 No spins yet. Tap 🎰 Spin to try your luck!"

    lines = ["📜 <b>Your last spins</b>\n"]
    for p in prizes:
        when = p.created_at.strftime("%d.%m %H:%M")
        if p.prize_type == PrizeType.COINS:
            won = f"+{p.amount} coins"
        elif p.prize_type == PrizeType.NFT:
            won = "💎 NFT credit"
        else:
            won = "nothing"
        lines.append(f"{when} UTC: {won}")
    return "\n".join(lines)


@router.message(Command("history"))
async def history_cmd(message: Message, session: AsyncSession) -> None:
    account = await ensure_account(session, message)
    prizes = await list_prizes(session, account.id, limit=HISTORY_LIMIT)
    await reply_safe(message, history_text(prizes), parse_mode="HTML")
