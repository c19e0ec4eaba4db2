from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup, WebAppInfo


def open_wheel_kb(web_app_url: str) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(
                    text="🎰 Spin the Wheel",
                    web_app=WebAppInfo(url=web_app_url),
                )
            ]
        ]
    )
