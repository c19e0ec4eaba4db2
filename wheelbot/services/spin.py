# wheelbot/services/spin.py
from __future__ import annotations

import enum
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from random import Random
from typing import Callable, Iterator

from wheelbot.database import Database
from wheelbot.database.models import Account, PrizeRecord, PrizeType
from wheelbot.database.repo.accounts import get_account, last_spin_matches, update_fields
from wheelbot.services.eligibility import can_spin, cooldown_elapsed
from wheelbot.services.prize_draw import Prize, WheelOutcome, draw_prize
from wheelbot.utils.dates import utc_now

log = logging.getLogger(__name__)

COOLDOWN_MESSAGE = "Must wait 24 hours between spins or invite friends for bonus spins"
IN_PROGRESS_MESSAGE = "Spin already in progress"


class SpinRejection(str, enum.Enum):
    COOLDOWN = "cooldown_active"
    IN_PROGRESS = "spin_in_progress"


_REJECTION_MESSAGES = {
    SpinRejection.COOLDOWN: COOLDOWN_MESSAGE,
    SpinRejection.IN_PROGRESS: IN_PROGRESS_MESSAGE,
}


class AccountNotFoundError(LookupError):
    def __init__(self, account_id: int) -> None:
        super().__init__(f"Account {account_id} not found")
        self.account_id = account_id


class _StaleAccount(Exception):
    """Raised inside the award transaction to roll it back."""


@dataclass(frozen=True, slots=True)
class SpinResult:
    ok: bool
    rejection: SpinRejection | None = None
    message: str = ""
    visual_index: int | None = None
    prize: Prize | None = None
    used_bonus_spin: bool = False

    @classmethod
    def rejected(cls, reason: SpinRejection) -> "SpinResult":
        return cls(ok=False, rejection=reason, message=_REJECTION_MESSAGES[reason])


class SpinGuard:
    """
    Process-wide set of account ids with a spin in flight.

    Test-and-insert happens without awaiting, so on a single event loop two
    requests for one account can never both get in. Not persisted: the
    conditional UPDATE in the award transaction is the durable check.
    """

    def __init__(self) -> None:
        self._active: set[int] = set()

    def try_acquire(self, account_id: int) -> bool:
        if account_id in self._active:
            return False
        self._active.add(account_id)
        return True

    def release(self, account_id: int) -> None:
        self._active.discard(account_id)

    def is_active(self, account_id: int) -> bool:
        return account_id in self._active

    @contextmanager
    def hold(self, account_id: int) -> Iterator[bool]:
        acquired = self.try_acquire(account_id)
        try:
            yield acquired
        finally:
            if acquired:
                self.release(account_id)


# shared by the bot and the HTTP API running in the same process
spin_guard = SpinGuard()


class SpinService:
    def __init__(
        self,
        db: Database,
        *,
        guard: SpinGuard | None = None,
        rng: Random | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.db = db
        self.guard = guard or spin_guard
        self.rng = rng
        self.clock = clock

    async def spin(self, account_id: int) -> SpinResult:
        # Guard first, so a duplicate tap during cooldown reads IN_PROGRESS, not COOLDOWN
        with self.guard.hold(account_id) as acquired:
            if not acquired:
                log.info("Spin rejected (in progress): account=%s", account_id)
                return SpinResult.rejected(SpinRejection.IN_PROGRESS)
            return await self._spin_locked(account_id)

    async def _spin_locked(self, account_id: int) -> SpinResult:
        # 1) Load + gatekeeping
        async with self.db.session() as session:
            account = await get_account(session, account_id)
        if account is None:
            raise AccountNotFoundError(account_id)

        now = self.clock()
        if not can_spin(account.last_spin_at, account.bonus_spin_count, now=now):
            log.info("Spin rejected (cooldown): account=%s", account_id)
            return SpinResult.rejected(SpinRejection.COOLDOWN)

        # 2) Consume a bonus spin only when the normal cooldown still applies
        used_bonus_spin = account.bonus_spin_count > 0 and not cooldown_elapsed(
            account.last_spin_at, now=now
        )
        if used_bonus_spin:
            async with self.db.atomic() as session:
                consumed = await update_fields(
                    session,
                    account_id,
                    increments={"bonus_spin_count": -1},
                    where=(Account.bonus_spin_count > 0,),
                )
            if not consumed:
                log.info("Spin rejected (bonus spin already spent): account=%s", account_id)
                return SpinResult.rejected(SpinRejection.COOLDOWN)

        # 3) Roll
        outcome = draw_prize(self.rng)

        # 4) Persist balance + history in one transaction
        try:
            await self._award(account, outcome, now)
        except _StaleAccount:
            log.warning("Spin conflict: account=%s changed during spin", account_id)
            if used_bonus_spin:
                await self._refund_bonus_spin(account_id)
            return SpinResult.rejected(SpinRejection.IN_PROGRESS)

        prize = outcome.prize
        log.info(
            "Prize processed: account=%s type=%s amount=%s sector=%s bonus=%s",
            account_id,
            prize.type.value,
            prize.amount,
            outcome.visual_index,
            used_bonus_spin,
        )

        return SpinResult(
            ok=True,
            visual_index=outcome.visual_index,
            prize=prize,
            used_bonus_spin=used_bonus_spin,
        )

    async def _refund_bonus_spin(self, account_id: int) -> None:
        async with self.db.atomic() as session:
            await update_fields(session, account_id, increments={"bonus_spin_count": 1})
        log.info("Bonus spin refunded: account=%s", account_id)

    async def _award(self, account: Account, outcome: WheelOutcome, now: datetime) -> None:
        prize = outcome.prize

        increments: dict[str, int] = {}
        if prize.type == PrizeType.COINS:
            increments["coin_balance"] = prize.amount
        elif prize.type == PrizeType.NFT:
            increments["nft_balance"] = 1

        async with self.db.atomic() as session:
            updated = await update_fields(
                session,
                account.id,
                increments=increments,
                where=(last_spin_matches(account.last_spin_at),),
                last_spin_at=now,
            )
            if not updated:
                raise _StaleAccount()

            session.add(
                PrizeRecord(
                    account_id=account.id,
                    prize_type=prize.type,
                    amount=prize.amount,
                    created_at=now,
                )
            )
