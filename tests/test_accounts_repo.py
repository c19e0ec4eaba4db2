from __future__ import annotations

from datetime import datetime, timedelta

from wheelbot.database.models import Account, PrizeRecord, PrizeType
from wheelbot.database.repo.accounts import (
    count_referred,
    last_spin_matches,
    list_prizes,
    update_fields,
)


async def test_update_fields_increments_in_sql(db, make_account, load_account):
    await make_account(1, coin_balance=100)

    async with db.atomic() as session:
        assert await update_fields(session, 1, increments={"coin_balance": 250, "nft_balance": 1})

    account = await load_account(1)
    assert account.coin_balance == 350
    assert account.nft_balance == 1


async def test_update_fields_missing_row(db):
    async with db.atomic() as session:
        assert not await update_fields(session, 999, display_name="ghost")


async def test_update_fields_nothing_to_do(db, make_account):
    await make_account(1)
    async with db.atomic() as session:
        assert not await update_fields(session, 1)


async def test_last_spin_guard(db, make_account, load_account):
    spun_at = datetime(2024, 5, 1, 8, 0)
    await make_account(1, last_spin_at=spun_at)
    later = spun_at + timedelta(days=1)

    async with db.atomic() as session:
        # stale expectation: another spin already landed
        assert not await update_fields(session, 1, where=(last_spin_matches(None),), last_spin_at=later)
    assert (await load_account(1)).last_spin_at == spun_at

    async with db.atomic() as session:
        assert await update_fields(session, 1, where=(last_spin_matches(spun_at),), last_spin_at=later)
    assert (await load_account(1)).last_spin_at == later


async def test_bonus_decrement_never_goes_negative(db, make_account, load_account):
    await make_account(1, bonus_spin_count=1)

    for expected in (True, False):
        async with db.atomic() as session:
            consumed = await update_fields(
                session,
                1,
                increments={"bonus_spin_count": -1},
                where=(Account.bonus_spin_count > 0,),
            )
        assert consumed is expected

    assert (await load_account(1)).bonus_spin_count == 0


async def test_count_referred(db, make_account):
    await make_account(1)
    await make_account(2, referred_by_account_id=1)
    await make_account(3, referred_by_account_id=1)
    await make_account(4, referred_by_account_id=2)

    async with db.session() as session:
        assert await count_referred(session, 1) == 2
        assert await count_referred(session, 2) == 1
        assert await count_referred(session, 4) == 0


async def test_list_prizes_newest_first(db, make_account):
    await make_account(1)
    await make_account(2)
    base = datetime(2024, 5, 1, 12, 0)

    async with db.atomic() as session:
        session.add_all(
            [
                PrizeRecord(account_id=1, prize_type=PrizeType.COINS, amount=300, created_at=base),
                PrizeRecord(account_id=1, prize_type=PrizeType.ZERO, created_at=base + timedelta(days=1)),
                PrizeRecord(account_id=1, prize_type=PrizeType.NFT, created_at=base + timedelta(days=2)),
                PrizeRecord(account_id=2, prize_type=PrizeType.COINS, amount=999, created_at=base),
            ]
        )

    async with db.session() as session:
        prizes = await list_prizes(session, 1)
        assert [p.prize_type for p in prizes] == [PrizeType.NFT, PrizeType.ZERO, PrizeType.COINS]
        assert [p.amount for p in prizes] == [None, None, 300]

        assert len(await list_prizes(session, 1, limit=2)) == 2
