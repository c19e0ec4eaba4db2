# wheelbot/api/deps.py
from __future__ import annotations

import logging
from typing import AsyncIterator

from aiogram.utils.web_app import WebAppInitData, safe_parse_webapp_init_data
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from wheelbot.config import Settings
from wheelbot.database import Database
from wheelbot.database.models import Account
from wheelbot.services.accounts import AccountService, Identity
from wheelbot.services.spin import SpinService
from wheelbot.utils.dates import as_naive_utc, utc_now

log = logging.getLogger(__name__)

SERVER_ERROR = "Server error"


class WheelRequestError(Exception):
    """Rendered by the app as {"ok": false, "err": ...} with `status_code`."""

    def __init__(self, status_code: int, err: str) -> None:
        super().__init__(err)
        self.status_code = status_code
        self.err = err


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Database:
    return request.app.state.db


def get_spin_service(request: Request) -> SpinService:
    return request.app.state.spin_service


async def get_session(db: Database = Depends(get_db)) -> AsyncIterator[AsyncSession]:
    async with db.session() as session:
        yield session


def parse_init_data(raw: object, settings: Settings) -> WebAppInitData:
    if not raw or not isinstance(raw, str):
        raise WheelRequestError(400, "Invalid request: No initData provided")

    try:
        init_data = safe_parse_webapp_init_data(token=settings.bot_token, init_data=raw)
    except ValueError:
        raise WheelRequestError(400, "Invalid request: initData signature mismatch") from None

    if init_data.user is None:
        raise WheelRequestError(400, "Invalid request: initData has no user")

    if settings.init_data_max_age > 0:
        age = (utc_now() - as_naive_utc(init_data.auth_date)).total_seconds()
        if age > settings.init_data_max_age:
            raise WheelRequestError(400, "Invalid request: initData expired")

    return init_data


async def current_account(
    request: Request,
    settings: Settings = Depends(get_settings),
    session: AsyncSession = Depends(get_session),
) -> Account:
    """
    Verifies the mini-app initData and loads (or creates) the caller's account.
    A referral code is taken from the body, falling back to the start param.
    """
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        raise WheelRequestError(400, "Invalid request: JSON body expected")

    init_data = parse_init_data(body.get("initData"), settings)
    referral_code = body.get("referralCode") or init_data.start_param
    if not isinstance(referral_code, str):
        referral_code = None

    try:
        res = await AccountService.get_or_create(
            session,
            Identity.from_telegram(init_data.user),
            referral_code=referral_code,
        )
    except Exception:
        log.exception("Error processing request: user=%s", init_data.user.id)
        raise WheelRequestError(500, SERVER_ERROR)

    return res.account
