# wheelbot/handlers/user/wallet.py
from __future__ import annotations

import logging

from aiogram import F, Router
from aiogram.fsm.context import FSMContext
from aiogram.fsm.state import State, StatesGroup
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from wheelbot.config import Settings
from wheelbot.keyboards.main import (
    BTN_BACK,
    BTN_DELETE_WALLET,
    BTN_WALLET,
    back_menu_kb,
    main_menu_kb,
    wallet_menu_kb,
)
from wheelbot.keyboards.web_app import open_wheel_kb
from wheelbot.services.wallet import WalletService
from wheelbot.utils.ensure_account import ensure_account

log = logging.getLogger(__name__)
router = Router()


class WalletStates(StatesGroup):
    waiting_for_wallet = State()


async def _show_menu(message: Message, settings: Settings, text: str) -> None:
    await message.answer(text, reply_markup=main_menu_kb())
    await message.answer(
        "🎮 Ready to play? Tap the button below to spin the wheel!",
        reply_markup=open_wheel_kb(settings.web_app_url),
    )


@router.message(F.text == BTN_BACK)
async def back_to_menu(message: Message, state: FSMContext, settings: Settings) -> None:
    await state.clear()
    await _show_menu(message, settings, "Choose an option from the menu below:")


@router.message(F.text == BTN_WALLET)
async def wallet_entry(message: Message, session: AsyncSession, state: FSMContext) -> None:
    # 🚫 wallet linking is private-chat only
    if message.chat.type != "private":
        await message.answer("💰 Wallet settings are available in private chat only.")
        return

    account = await ensure_account(session, message)

    if account.wallet_address:
        await message.answer(
            "💰 <b>Your Wallet</b>\n\n"
            f"Connected wallet: <code>{account.wallet_address}</code>\n\n"
            "Your wallet is linked for post-listing token distribution.",
            parse_mode="HTML",
            reply_markup=wallet_menu_kb(),
        )
        return

    await state.set_state(WalletStates.waiting_for_wallet)
    await message.answer(
        "💰 Share your SOL wallet address for post-listing token distribution.\n\n"
        "Please send your Solana wallet address:",
        reply_markup=back_menu_kb(),
    )


@router.message(F.text == BTN_DELETE_WALLET)
async def wallet_delete(message: Message, session: AsyncSession, state: FSMContext) -> None:
    account = await ensure_account(session, message)
    await state.clear()
    await WalletService.set_wallet(session, account.id, None)
    await message.answer(
        "✅ Your SOL wallet has been unlinked. No further actions are required.",
        reply_markup=back_menu_kb(),
    )


@router.message(WalletStates.waiting_for_wallet, F.text, ~F.text.startswith("/"))
async def wallet_receive(
    message: Message,
    session: AsyncSession,
    state: FSMContext,
    settings: Settings,
) -> None:
    account = await ensure_account(session, message)

    res = await WalletService.set_wallet(session, account.id, message.text)
    if not res.ok:
        await message.answer(
            "❌ Invalid Solana wallet address. "
            "Please send a base58 address of 32-44 characters."
        )
        return

    await state.clear()
    await _show_menu(
        message,
        settings,
        "✅ Thank you! Your SOL wallet has been linked. Tokens will be distributed after the listing.",
    )
