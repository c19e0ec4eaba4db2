# wheelbot/scripts/create_test_user.py
from __future__ import annotations

import asyncio

from wheelbot.config import Settings
from wheelbot.database.models import Account
from wheelbot.database.repo.accounts import get_account
from wheelbot.database.session import Database

TEST_ACCOUNT_ID = 2500
TEST_REFERRAL_CODE = "TEST1234"  # easy to remember


async def main() -> None:
    settings = Settings.load()
    db = Database(settings.database_url)
    await db.init_models()

    async with db.session() as session:
        existing = await get_account(session, TEST_ACCOUNT_ID)
        if existing:
            print(f"Test account already exists with referral code: {existing.referral_code}")
            print(f"Test referral link: https://t.me/{settings.bot_username}?startapp={existing.referral_code}")
            await db.close()
            return

        session.add(
            Account(
                id=TEST_ACCOUNT_ID,
                display_name="Test User",
                telegram_alias="testuser",
                referral_code=TEST_REFERRAL_CODE,
                coin_balance=1000,  # some coins for testing
                nft_balance=1,
                bonus_spin_count=0,
            )
        )
        await session.commit()

    print("✅ Test account created")
    print(f"Account ID: {TEST_ACCOUNT_ID}")
    print(f"Referral code: {TEST_REFERRAL_CODE}")
    print(f"Test referral link: https://t.me/{settings.bot_username}?startapp={TEST_REFERRAL_CODE}")
    print("Open the mini-app from a new Telegram account with that link:")
    print("- the new account should start with 1 bonus spin")
    print("- this test account should get +1 bonus spin")

    await db.close()


if __name__ == "__main__":
    asyncio.run(main())
