# wheelbot/main.py
import asyncio
import contextlib
import logging
from typing import Awaitable, Callable

import uvicorn
from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from wheelbot.api import create_app
from wheelbot.config import Settings
from wheelbot.database import Database
from wheelbot.handlers import router as handlers_router
from wheelbot.services.spin import SpinService
from wheelbot.utils.middleware import DbSessionMiddleware

log = logging.getLogger("wheelbot")

_QUIET_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "aiosqlite",
    "asyncpg",
    "uvicorn.access",
    "aiogram.event",
)


def setup_logging(is_dev: bool) -> None:
    """
    App logs at INFO (DEBUG in dev). Query, pool and per-request access
    logs stay at WARNING+.
    """
    logging.basicConfig(
        level=logging.DEBUG if is_dev else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def build_dispatcher(settings: Settings, db: Database, spin_service: SpinService) -> Dispatcher:
    dp = Dispatcher()

    # available to handlers by parameter name
    dp.workflow_data.update(settings=settings, db=db, spin_service=spin_service)

    dp.update.middleware(DbSessionMiddleware(db))
    dp.include_router(handlers_router)
    return dp


def build_api_server(settings: Settings, db: Database, spin_service: SpinService) -> uvicorn.Server:
    config = uvicorn.Config(
        create_app(settings, db, spin_service),
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # keep our logging setup
    )
    return uvicorn.Server(config)


async def _close_quietly(what: str, closer: Callable[[], Awaitable[object]]) -> None:
    try:
        await closer()
    except Exception:
        log.exception("Failed to close %s", what)


async def main() -> None:
    settings = Settings.load()
    setup_logging(settings.is_dev)

    db = Database(settings.database_url)
    await db.init_models()
    log.info("DB initialized")

    # bot and mini-app must share one spin guard
    spin_service = SpinService(db)

    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dp = build_dispatcher(settings, db, spin_service)

    server = build_api_server(settings, db, spin_service)
    api_task = asyncio.create_task(server.serve())
    log.info("API listening on %s:%s", settings.api_host, settings.api_port)

    try:
        await dp.start_polling(bot)
    except (asyncio.CancelledError, KeyboardInterrupt):
        pass
    except Exception:
        log.exception("Bot crashed")
        raise
    finally:
        server.should_exit = True

        async def _stop_api() -> None:
            with contextlib.suppress(asyncio.CancelledError):
                await api_task

        await _close_quietly("API server", _stop_api)
        await _close_quietly("DB", db.close)
        await _close_quietly("bot session", bot.session.close)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
