# wheelbot/services/accounts.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wheelbot.database.models import Account
from wheelbot.database.repo.accounts import create_account, get_account
from wheelbot.services.referral import ReferralService

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Identity:
    """Already-verified Telegram user, as handed over by the bot or web app layer."""
    user_id: int
    display_name: str
    alias: str | None = None

    @classmethod
    def from_telegram(cls, tg_user: Any) -> "Identity":
        """Works for both aiogram `User` and `WebAppUser`."""
        name = f"{tg_user.first_name or ''} {tg_user.last_name or ''}".strip()
        return cls(
            user_id=int(tg_user.id),
            display_name=name or f"User_{tg_user.id}",
            alias=tg_user.username or None,
        )


@dataclass(frozen=True, slots=True)
class AccountResult:
    account: Account
    created: bool
    referred_by: int | None = None


class AccountService:
    @staticmethod
    async def get_or_create(
        session: AsyncSession,
        identity: Identity,
        referral_code: str | None = None,
    ) -> AccountResult:
        account = await get_account(session, identity.user_id)
        if account is not None:
            await AccountService._refresh(session, account, identity)
            return AccountResult(account=account, created=False)

        # Resolve (and reject self referral) before anything is written
        referrer_id = await ReferralService.resolve_referral(
            session, referral_code, new_account_id=identity.user_id
        )
        code = await ReferralService.new_unique_code(session)

        try:
            # the lookups above already opened the transaction; insert under a savepoint
            async with session.begin_nested():
                account = await create_account(
                    session,
                    account_id=identity.user_id,
                    display_name=identity.display_name,
                    telegram_alias=identity.alias,
                    referral_code=code,
                    referred_by_account_id=referrer_id,
                    bonus_spin_count=1 if referrer_id else 0,
                )
        except IntegrityError:
            # Lost a race with another first contact of the same user
            await session.rollback()
            existing = await get_account(session, identity.user_id)
            if existing is None:
                raise
            return AccountResult(account=existing, created=False)

        await session.commit()
        log.info("Account created: id=%s referred_by=%s", identity.user_id, referrer_id)

        # Second write, committed on its own (see DESIGN.md on ordering)
        if referrer_id:
            credited = await ReferralService.credit_referrer(session, referrer_id)
            await session.commit()
            log.info("Referral credit: referrer=%s new_account=%s credited=%s", referrer_id, identity.user_id, credited)

        return AccountResult(account=account, created=True, referred_by=referrer_id)

    @staticmethod
    async def _refresh(session: AsyncSession, account: Account, identity: Identity) -> None:
        # Update profile fields if changed (keep DB fresh)
        changed = False
        if account.display_name != identity.display_name:
            account.display_name = identity.display_name
            changed = True
        if identity.alias and account.telegram_alias != identity.alias:
            account.telegram_alias = identity.alias
            changed = True

        # Backfill accounts created before referral codes existed
        if not account.referral_code:
            account.referral_code = await ReferralService.new_unique_code(session)
            changed = True

        if changed:
            await session.commit()
