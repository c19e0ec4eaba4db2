# wheelbot/services/wallet.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from wheelbot.database.repo.accounts import update_fields

log = logging.getLogger(__name__)

INVALID_WALLET_MESSAGE = "Invalid wallet address format"

# Solana addresses: base58 (no 0, O, I, l), 32-44 chars
_BASE58_ADDRESS = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")


@dataclass(frozen=True, slots=True)
class WalletResult:
    ok: bool
    wallet_address: str | None = None
    message: str = ""


def normalize_wallet_address(raw: str | None) -> str | None:
    value = (raw or "").strip()
    return value or None


def is_valid_wallet_address(address: str) -> bool:
    return bool(_BASE58_ADDRESS.fullmatch(address))


class WalletService:
    @staticmethod
    async def set_wallet(session: AsyncSession, account_id: int, raw_address: str | None) -> WalletResult:
        """
        Links (or, for an empty value, unlinks) the account's wallet.
        Invalid addresses are rejected without touching the row.
        """
        address = normalize_wallet_address(raw_address)
        if address is not None and not is_valid_wallet_address(address):
            return WalletResult(ok=False, message=INVALID_WALLET_MESSAGE)

        updated = await update_fields(session, account_id, wallet_address=address)
        if not updated:
            raise LookupError(f"Account {account_id} not found")
        await session.commit()

        log.info("Wallet %s: account=%s", "linked" if address else "cleared", account_id)
        return WalletResult(ok=True, wallet_address=address)
