# wheelbot/database/models/account.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from wheelbot.database.base import Base


class Account(Base):
    """
    One row per Telegram user. `id` is the Telegram user id itself.
    Balances only grow through spins; bonus spins are referral credits.
    """
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("coin_balance >= 0", name="ck_accounts_coin_balance_nonneg"),
        CheckConstraint("nft_balance >= 0", name="ck_accounts_nft_balance_nonneg"),
        CheckConstraint("bonus_spin_count >= 0", name="ck_accounts_bonus_spins_nonneg"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)

    display_name: Mapped[str] = mapped_column(String(256))
    telegram_alias: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)

    coin_balance: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    nft_balance: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # base58, 32-44 chars (validated in services.wallet)
    wallet_address: Mapped[str | None] = mapped_column(String(44), nullable=True)

    last_spin_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)
    bonus_spin_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # ✅ Referral system
    referral_code: Mapped[str | None] = mapped_column(String(8), unique=True, index=True, nullable=True)
    referred_by_account_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("accounts.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=func.now(),
        onupdate=func.now(),
    )
