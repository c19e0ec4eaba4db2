from __future__ import annotations

import pytest

from wheelbot.services.wallet import (
    INVALID_WALLET_MESSAGE,
    WalletService,
    is_valid_wallet_address,
)

SOL_ADDRESS = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"


@pytest.mark.parametrize(
    "address, valid",
    [
        ("1" * 31, False),
        ("1" * 32, True),
        ("1" * 44, True),
        ("1" * 45, False),
        (SOL_ADDRESS, True),
        ("0" + "1" * 40, False),  # 0, O, I and l are not base58
        ("O" + "1" * 40, False),
        ("I" + "1" * 40, False),
        ("l" + "1" * 40, False),
        ("1" * 20 + " " + "1" * 20, False),
    ],
)
def test_address_validation(address, valid):
    assert is_valid_wallet_address(address) is valid


async def test_link_and_clear_wallet(db, make_account, load_account):
    await make_account(1)

    async with db.session() as session:
        res = await WalletService.set_wallet(session, 1, f"  {SOL_ADDRESS}\n")
    assert res.ok
    assert res.wallet_address == SOL_ADDRESS
    assert (await load_account(1)).wallet_address == SOL_ADDRESS

    async with db.session() as session:
        res = await WalletService.set_wallet(session, 1, "")
    assert res.ok
    assert res.wallet_address is None
    assert (await load_account(1)).wallet_address is None


async def test_invalid_wallet_keeps_previous(db, make_account, load_account):
    await make_account(1, wallet_address=SOL_ADDRESS)

    async with db.session() as session:
        res = await WalletService.set_wallet(session, 1, "1" * 31)

    assert not res.ok
    assert res.message == INVALID_WALLET_MESSAGE
    assert (await load_account(1)).wallet_address == SOL_ADDRESS


async def test_wallet_for_missing_account(db):
    async with db.session() as session:
        with pytest.raises(LookupError):
            await WalletService.set_wallet(session, 404, SOL_ADDRESS)
