# wheelbot/services/eligibility.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from wheelbot.utils.dates import as_naive_utc, utc_now

SPIN_COOLDOWN = timedelta(hours=24)


@dataclass(frozen=True, slots=True)
class SpinCountdown:
    hours: int
    minutes: int


def cooldown_elapsed(last_spin_at: datetime | None, *, now: datetime | None = None) -> bool:
    """The plain 24h rule, ignoring bonus spins."""
    if last_spin_at is None:
        return True
    now = as_naive_utc(now or utc_now())
    return now - as_naive_utc(last_spin_at) >= SPIN_COOLDOWN


def can_spin(
    last_spin_at: datetime | None,
    bonus_spin_count: int,
    *,
    now: datetime | None = None,
) -> bool:
    # Bonus spins bypass the cooldown entirely
    if bonus_spin_count > 0:
        return True
    return cooldown_elapsed(last_spin_at, now=now)


def time_until_next_spin(last_spin_at: datetime | None, *, now: datetime | None = None) -> SpinCountdown:
    """
    Remaining normal cooldown, floored to whole hours and minutes.
    Bonus spins are not considered: the UI shows this next to them.
    """
    if last_spin_at is None:
        return SpinCountdown(hours=0, minutes=0)

    now = as_naive_utc(now or utc_now())
    remaining = as_naive_utc(last_spin_at) + SPIN_COOLDOWN - now
    if remaining <= timedelta(0):
        return SpinCountdown(hours=0, minutes=0)

    # A spin made this instant (or slightly ahead of our clock) reads 23h 59m
    remaining = min(remaining, SPIN_COOLDOWN - timedelta(seconds=1))

    total_minutes = int(remaining.total_seconds()) // 60
    hours, minutes = divmod(total_minutes, 60)
    return SpinCountdown(hours=hours, minutes=minutes)
