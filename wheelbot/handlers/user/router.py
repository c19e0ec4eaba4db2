# wheelbot/handlers/user/router.py
from aiogram import Router

from wheelbot.handlers.user.start import router as start_router
from wheelbot.handlers.user.spin import router as spin_router
from wheelbot.handlers.user.wallet import router as wallet_router
from wheelbot.handlers.user.referral import router as referral_router
from wheelbot.handlers.user.history import router as history_router


router = Router(name="user")

router.include_router(start_router)
router.include_router(spin_router)
router.include_router(wallet_router)
router.include_router(referral_router)
router.include_router(history_router)
