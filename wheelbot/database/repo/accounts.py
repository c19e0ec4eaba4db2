# wheelbot/database/repo/accounts.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from wheelbot.database.models import Account, PrizeRecord


async def get_account(session: AsyncSession, account_id: int) -> Account | None:
    res = await session.execute(select(Account).where(Account.id == account_id))
    return res.scalar_one_or_none()


async def get_account_by_referral_code(session: AsyncSession, code: str) -> Account | None:
    return await session.scalar(select(Account).where(Account.referral_code == code))


async def create_account(
    session: AsyncSession,
    *,
    account_id: int,
    display_name: str,
    telegram_alias: str | None,
    referral_code: str,
    referred_by_account_id: int | None = None,
    bonus_spin_count: int = 0,
) -> Account:
    account = Account(
        id=account_id,
        display_name=display_name,
        telegram_alias=telegram_alias,
        referral_code=referral_code,
        referred_by_account_id=referred_by_account_id,
        bonus_spin_count=bonus_spin_count,
        coin_balance=0,
        nft_balance=0,
        wallet_address=None,
        last_spin_at=None,
    )
    session.add(account)
    await session.flush()  # may raise IntegrityError on a concurrent insert
    return account


async def update_fields(
    session: AsyncSession,
    account_id: int,
    *,
    increments: dict[str, int] | None = None,
    where: Iterable[Any] = (),
    **values: Any,
) -> bool:
    """
    Partial UPDATE of one account row.

    `increments` are applied in SQL (col = col + n) so concurrent writers
    never lose updates. `where` adds guard predicates; returns False when
    no row matched (missing account or a guard failed).
    """
    for name, delta in (increments or {}).items():
        values[name] = getattr(Account, name) + delta

    if not values:
        return False

    stmt = (
        update(Account)
        .where(Account.id == account_id, *where)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    res = await session.execute(stmt)
    return res.rowcount == 1


async def count_referred(session: AsyncSession, account_id: int) -> int:
    count = await session.scalar(
        select(func.count(Account.id)).where(Account.referred_by_account_id == account_id)
    )
    return int(count or 0)


async def list_prizes(session: AsyncSession, account_id: int, *, limit: int = 20) -> list[PrizeRecord]:
    res = await session.execute(
        select(PrizeRecord)
        .where(PrizeRecord.account_id == account_id)
        .order_by(PrizeRecord.created_at.desc(), PrizeRecord.id.desc())
        .limit(limit)
    )
    return list(res.scalars().all())


def last_spin_matches(expected: datetime | None):
    """Guard predicate: the account still has the `last_spin_at` we loaded."""
    if expected is None:
        return Account.last_spin_at.is_(None)
    return Account.last_spin_at == expected
