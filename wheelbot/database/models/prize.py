# wheelbot/database/models/prize.py
from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, DateTime, Enum, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from wheelbot.database.base import Base


class PrizeType(str, enum.Enum):
    COINS = "COINS"
    NFT = "NFT"
    ZERO = "ZERO"


class PrizeRecord(Base):
    """
    Immutable ledger of awarded spins. One row per successful spin,
    written in the same transaction as the balance update.
    """
    __tablename__ = "prizes"
    __table_args__ = (
        # Enum columns store member names, which equal the values
        CheckConstraint(
            "(prize_type = 'COINS' AND amount IS NOT NULL AND amount > 0)"
            " OR (prize_type != 'COINS' AND amount IS NULL)",
            name="ck_prizes_amount_matches_type",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    account_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        index=True,
    )

    prize_type: Mapped[PrizeType] = mapped_column(Enum(PrizeType, native_enum=False), index=True)
    amount: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False))


# history queries: newest first per account
Index("ix_prizes_account_created", PrizeRecord.account_id, PrizeRecord.created_at.desc())
