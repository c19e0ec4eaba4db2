from __future__ import annotations

from datetime import datetime

import pytest

from wheelbot.database import Database
from wheelbot.database.models import Account
from wheelbot.services.spin import SpinGuard

from tests.helpers import FakeClock


@pytest.fixture
async def db(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'wheel.db'}")
    await database.init_models()
    yield database
    await database.close()


@pytest.fixture
def guard() -> SpinGuard:
    return SpinGuard()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 5, 1, 12, 0, 0))


@pytest.fixture
def make_account(db):
    """Inserts an account row directly and returns it."""
    counter = {"n": 0}

    async def _make(account_id: int, **fields) -> Account:
        counter["n"] += 1
        fields.setdefault("display_name", f"User_{account_id}")
        fields.setdefault("referral_code", f"CODE{counter['n']:04d}")
        fields.setdefault("coin_balance", 0)
        fields.setdefault("nft_balance", 0)
        fields.setdefault("bonus_spin_count", 0)
        async with db.atomic() as session:
            account = Account(id=account_id, **fields)
            session.add(account)
        return account

    return _make


@pytest.fixture
def load_account(db):
    async def _load(account_id: int) -> Account | None:
        async with db.session() as session:
            return await session.get(Account, account_id)

    return _load
