# wheelbot/services/referral.py
from __future__ import annotations

import logging
import string
from random import Random, SystemRandom

from sqlalchemy.ext.asyncio import AsyncSession

from wheelbot.database.repo.accounts import get_account_by_referral_code, update_fields

log = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 8
MAX_CODE_ATTEMPTS = 10

_rng = SystemRandom()


def normalize_code(code: str | None) -> str:
    return (code or "").strip().upper()


class ReferralService:
    @staticmethod
    def generate_code(rng: Random | None = None) -> str:
        rng = rng or _rng
        return "".join(rng.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))

    @staticmethod
    async def new_unique_code(session: AsyncSession, rng: Random | None = None) -> str:
        """Generates codes until one is not taken yet."""
        for _ in range(MAX_CODE_ATTEMPTS):
            code = ReferralService.generate_code(rng)
            if await get_account_by_referral_code(session, code) is None:
                return code
            log.debug("Referral code collision: %s", code)
        raise RuntimeError(f"Could not generate a unique referral code in {MAX_CODE_ATTEMPTS} attempts")

    @staticmethod
    async def resolve_referral(
        session: AsyncSession,
        code: str | None,
        *,
        new_account_id: int,
    ) -> int | None:
        """
        Referrer account id for `code`, or None.
        Unknown codes and self-referrals resolve to None without an error.
        """
        code = normalize_code(code)
        if not code:
            return None

        referrer = await get_account_by_referral_code(session, code)
        if referrer is None:
            log.info("Referral: unknown code=%s new_account=%s", code, new_account_id)
            return None

        # Block self referral
        if referrer.id == new_account_id:
            log.info("Referral: self referral ignored account=%s", new_account_id)
            return None

        return referrer.id

    @staticmethod
    async def credit_referrer(session: AsyncSession, referrer_id: int) -> bool:
        """+1 bonus spin for the inviter. Atomic increment in SQL."""
        return await update_fields(session, referrer_id, increments={"bonus_spin_count": 1})
