# wheelbot/api/wheel.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from wheelbot.api.deps import (
    SERVER_ERROR,
    current_account,
    get_session,
    get_settings,
    get_spin_service,
)
from wheelbot.api.schemas import (
    Balances,
    BotConfig,
    Countdown,
    OkResponse,
    RollResponse,
    SetWalletRequest,
    WheelInfoResponse,
    WheelRequest,
)
from wheelbot.config import Settings
from wheelbot.database.models import Account
from wheelbot.database.repo.accounts import count_referred
from wheelbot.services.eligibility import can_spin, time_until_next_spin
from wheelbot.services.spin import SpinService
from wheelbot.services.wallet import WalletService

log = logging.getLogger(__name__)

router = APIRouter(prefix="/wheel", tags=["Wheel"])


def _server_error() -> JSONResponse:
    return JSONResponse(status_code=500, content={"ok": False, "err": SERVER_ERROR})


@router.post(
    "/get",
    response_model=WheelInfoResponse,
    response_model_exclude_none=True,
)
async def get_wheel_info(
    payload: WheelRequest,
    account: Account = Depends(current_account),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Balances, cooldown and referral info for the wheel screen."""
    try:
        invited = await count_referred(session, account.id)
    except Exception:
        log.exception("Error getting wheel info: account=%s", account.id)
        return _server_error()

    countdown = time_until_next_spin(account.last_spin_at)
    return WheelInfoResponse(
        can_spin=can_spin(account.last_spin_at, account.bonus_spin_count),
        time_until_next_spin=Countdown(hours=countdown.hours, minutes=countdown.minutes),
        balances=Balances(coins=account.coin_balance, nft=account.nft_balance),
        wallet_address=account.wallet_address,
        referral_code=account.referral_code,
        bonus_spin_count=account.bonus_spin_count,
        invited_users_count=invited,
        bot_config=BotConfig(bot_username=settings.bot_username),
    )


@router.post(
    "/set-wallet",
    response_model=OkResponse,
    response_model_exclude_none=True,
)
async def set_wallet(
    payload: SetWalletRequest,
    account: Account = Depends(current_account),
    session: AsyncSession = Depends(get_session),
):
    try:
        res = await WalletService.set_wallet(session, account.id, payload.wallet_address)
    except Exception:
        log.exception("Error setting wallet address: account=%s", account.id)
        return _server_error()

    if not res.ok:
        return OkResponse(ok=False, err=res.message)
    return OkResponse(ok=True)


@router.post(
    "/roll",
    response_model=RollResponse,
    response_model_exclude_none=True,
)
async def roll(
    payload: WheelRequest,
    account: Account = Depends(current_account),
    spin_service: SpinService = Depends(get_spin_service),
):
    """Spins the wheel. Business rejections come back as ok=false with HTTP 200."""
    try:
        res = await spin_service.spin(account.id)
    except Exception:
        log.exception("Error processing spin: account=%s", account.id)
        return _server_error()

    if not res.ok:
        return RollResponse(ok=False, err=res.message)

    return RollResponse(
        ok=True,
        visual_index=res.visual_index,
        prize_type=res.prize.type.value,
        amount=res.prize.amount,
        used_bonus_spin=res.used_bonus_spin,
    )
