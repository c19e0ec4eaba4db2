# wheelbot/api/schemas.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WheelRequest(_CamelModel):
    init_data: str | None = Field(None, description="Telegram WebApp initData query string")
    referral_code: str | None = Field(None, description="Inviter's code, honoured on first open only")


class SetWalletRequest(WheelRequest):
    wallet_address: str | None = Field(None, description="Solana address; empty or null unlinks")


class Countdown(_CamelModel):
    hours: int
    minutes: int


class Balances(_CamelModel):
    coins: int
    nft: int


class BotConfig(_CamelModel):
    bot_username: str


class WheelInfoResponse(_CamelModel):
    ok: bool = True
    can_spin: bool
    time_until_next_spin: Countdown
    balances: Balances
    wallet_address: str | None = None
    referral_code: str | None = None
    bonus_spin_count: int
    invited_users_count: int
    bot_config: BotConfig


class OkResponse(_CamelModel):
    ok: bool
    err: str | None = None


class RollResponse(_CamelModel):
    ok: bool
    visual_index: int | None = None
    prize_type: str | None = None
    amount: int | None = None
    used_bonus_spin: bool | None = None
    err: str | None = None
