# wheelbot/utils/ensure_account.py
from __future__ import annotations

from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from wheelbot.database.models import Account
from wheelbot.services.accounts import AccountService, Identity


async def ensure_account(
    session: AsyncSession,
    message: Message,
    referral_code: str | None = None,
) -> Account:
    if message.from_user is None:
        raise RuntimeError("Unable to ensure account: message has no from_user")

    res = await AccountService.get_or_create(
        session,
        Identity.from_telegram(message.from_user),
        referral_code=referral_code,
    )
    return res.account
