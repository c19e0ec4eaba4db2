from __future__ import annotations

from collections import Counter
from random import Random

import pytest

from wheelbot.database.models import PrizeType
from wheelbot.services.prize_draw import (
    COINS_MAX,
    COINS_MIN,
    WHEEL_SECTORS,
    Coins,
    Nft,
    Zero,
    draw_prize,
    prize_type_for_roll,
    sectors_of,
)

from tests.helpers import ScriptedRandom


@pytest.mark.parametrize(
    "roll, expected",
    [
        (0, PrizeType.NFT),
        (4, PrizeType.NFT),
        (5, PrizeType.ZERO),
        (199, PrizeType.ZERO),
        (200, PrizeType.COINS),
        (999, PrizeType.COINS),
    ],
)
def test_roll_thresholds(roll, expected):
    assert prize_type_for_roll(roll) == expected


@pytest.mark.parametrize("roll", [-1, 1000])
def test_roll_out_of_range(roll):
    with pytest.raises(ValueError):
        prize_type_for_roll(roll)


def test_wheel_layout():
    assert len(WHEEL_SECTORS) == 12
    counts = Counter(WHEEL_SECTORS)
    assert counts == {PrizeType.COINS: 8, PrizeType.NFT: 2, PrizeType.ZERO: 2}
    assert sectors_of(PrizeType.NFT) == [2, 8]
    assert sectors_of(PrizeType.ZERO) == [5, 11]


@pytest.mark.parametrize(
    "roll, prize",
    [
        (0, Nft()),
        (4, Nft()),
        (5, Zero()),
        (199, Zero()),
    ],
)
def test_draw_boundaries_non_coin(roll, prize):
    # sector 2 is NFT, 5 is ZERO: keep the index when it already matches
    sector = 2 if prize.type == PrizeType.NFT else 5
    outcome = draw_prize(ScriptedRandom(ints=[roll, sector]))
    assert outcome.prize == prize
    assert outcome.visual_index == sector


@pytest.mark.parametrize("roll", [200, 999])
def test_draw_boundaries_coins(roll):
    outcome = draw_prize(ScriptedRandom(ints=[roll, 1, 640]))
    assert outcome.prize == Coins(amount=640)
    assert outcome.visual_index == 1


def test_mismatched_sector_is_repicked_among_matching():
    # roll 3 -> NFT, sector 1 is COINS -> re-pick from NFT sectors
    outcome = draw_prize(ScriptedRandom(ints=[3, 1], choices=[8]))
    assert outcome.prize == Nft()
    assert outcome.visual_index == 8

    # roll 500 -> COINS, sector 11 is ZERO -> re-pick from coin sectors
    outcome = draw_prize(ScriptedRandom(ints=[500, 11, 300], choices=[12]))
    assert outcome.prize == Coins(amount=300)
    assert outcome.visual_index == 12


def test_coin_amount_bounds_inclusive():
    assert draw_prize(ScriptedRandom(ints=[999, 3, COINS_MIN])).prize.amount == COINS_MIN
    assert draw_prize(ScriptedRandom(ints=[999, 3, COINS_MAX])).prize.amount == COINS_MAX


def test_prize_variants():
    assert Coins(10).type == PrizeType.COINS
    assert Coins(10).amount == 10
    assert Nft().type == PrizeType.NFT and Nft().amount is None
    assert Zero().type == PrizeType.ZERO and Zero().amount is None
    with pytest.raises(ValueError):
        Coins(0)


def test_visual_sector_always_matches_prize():
    rng = Random(7)
    for _ in range(5000):
        outcome = draw_prize(rng)
        assert 1 <= outcome.visual_index <= 12
        assert WHEEL_SECTORS[outcome.visual_index - 1] == outcome.prize.type
        if outcome.prize.type == PrizeType.COINS:
            assert COINS_MIN <= outcome.prize.amount <= COINS_MAX


def test_frequencies_over_many_draws():
    rng = Random(12345)
    n = 100_000
    counts = Counter(draw_prize(rng).prize.type for _ in range(n))

    assert 0.003 <= counts[PrizeType.NFT] / n <= 0.007
    assert 0.190 <= counts[PrizeType.ZERO] / n <= 0.200
    assert 0.795 <= counts[PrizeType.COINS] / n <= 0.805
