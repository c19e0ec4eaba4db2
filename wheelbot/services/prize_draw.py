# wheelbot/services/prize_draw.py
"""
Weighted prize draw.

The wheel graphic has 12 sectors (8 coins, 2 NFT, 2 zero) but payout odds
are set independently of that layout:

    roll in [0, 5)     -> NFT    0.5%
    roll in [5, 200)   -> ZERO  19.5%
    roll in [200, 1000) -> COINS 80%

The visual sector is then chosen so the animation always stops on a sector
of the type actually won.
"""
from __future__ import annotations

from dataclasses import dataclass
from random import Random, SystemRandom
from typing import Union

from wheelbot.database.models import PrizeType

ROLL_MAX = 1000
NFT_BELOW = 5
ZERO_BELOW = 200

COINS_MIN = 300
COINS_MAX = 1000

# 1-based sector index -> declared type (index 0 is sector 1)
WHEEL_SECTORS: tuple[PrizeType, ...] = (
    PrizeType.COINS,
    PrizeType.NFT,
    PrizeType.COINS,
    PrizeType.COINS,
    PrizeType.ZERO,
    PrizeType.COINS,
    PrizeType.COINS,
    PrizeType.NFT,
    PrizeType.COINS,
    PrizeType.COINS,
    PrizeType.ZERO,
    PrizeType.COINS,
)

_rng = SystemRandom()


@dataclass(frozen=True, slots=True)
class Coins:
    amount: int

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise ValueError(f"Coins prize needs a positive amount, got {self.amount}")

    @property
    def type(self) -> PrizeType:
        return PrizeType.COINS


@dataclass(frozen=True, slots=True)
class Nft:
    @property
    def type(self) -> PrizeType:
        return PrizeType.NFT

    @property
    def amount(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class Zero:
    @property
    def type(self) -> PrizeType:
        return PrizeType.ZERO

    @property
    def amount(self) -> None:
        return None


Prize = Union[Coins, Nft, Zero]


@dataclass(frozen=True, slots=True)
class WheelOutcome:
    visual_index: int  # 1..12
    prize: Prize


def prize_type_for_roll(roll: int) -> PrizeType:
    if not 0 <= roll < ROLL_MAX:
        raise ValueError(f"roll must be in [0, {ROLL_MAX}), got {roll}")
    if roll < NFT_BELOW:
        return PrizeType.NFT
    if roll < ZERO_BELOW:
        return PrizeType.ZERO
    return PrizeType.COINS


def sectors_of(prize_type: PrizeType) -> list[int]:
    return [i for i, t in enumerate(WHEEL_SECTORS, start=1) if t == prize_type]


def draw_prize(rng: Random | None = None) -> WheelOutcome:
    rng = rng or _rng

    prize_type = prize_type_for_roll(rng.randint(0, ROLL_MAX - 1))

    visual_index = rng.randint(1, len(WHEEL_SECTORS))
    if WHEEL_SECTORS[visual_index - 1] != prize_type:
        visual_index = rng.choice(sectors_of(prize_type))

    prize: Prize
    if prize_type == PrizeType.COINS:
        prize = Coins(amount=rng.randint(COINS_MIN, COINS_MAX))
    elif prize_type == PrizeType.NFT:
        prize = Nft()
    else:
        prize = Zero()

    return WheelOutcome(visual_index=visual_index, prize=prize)
