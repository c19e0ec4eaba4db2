# wheelbot/keyboards/main.py
from aiogram.types import KeyboardButton, ReplyKeyboardMarkup

BTN_SPIN = "🎰 Spin"
BTN_WALLET = "💰 My Wallet"
BTN_INVITE = "👥 Invite Friends"
BTN_DELETE_WALLET = "🗑️ Delete Wallet"
BTN_BACK = "⬅️ Back to Menu"


def main_menu_kb() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text=BTN_SPIN)],
            [KeyboardButton(text=BTN_WALLET), KeyboardButton(text=BTN_INVITE)],
        ],
        resize_keyboard=True,
        input_field_placeholder="Choose an action…",
        selective=False,
        one_time_keyboard=False,
    )


def wallet_menu_kb() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text=BTN_DELETE_WALLET)],
            [KeyboardButton(text=BTN_BACK)],
        ],
        resize_keyboard=True,
        one_time_keyboard=False,
    )


def back_menu_kb() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        keyboard=[[KeyboardButton(text=BTN_BACK)]],
        resize_keyboard=True,
        one_time_keyboard=False,
    )
