# wheelbot/api/app.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wheelbot.api import wheel
from wheelbot.api.deps import WheelRequestError
from wheelbot.config import Settings
from wheelbot.database import Database
from wheelbot.services.spin import SpinService

log = logging.getLogger(__name__)


def create_app(settings: Settings, db: Database, spin_service: SpinService | None = None) -> FastAPI:
    """
    HTTP API for the wheel mini-app. The database lifecycle belongs to the
    caller (wheelbot.main shares it with the bot).
    """
    app = FastAPI(
        title="Wheel Mini-App API",
        docs_url="/api/docs" if settings.is_dev else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if settings.is_dev else None,
    )

    app.state.settings = settings
    app.state.db = db
    app.state.spin_service = spin_service or SpinService(db)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(WheelRequestError)
    async def wheel_request_error(_: Request, exc: WheelRequestError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"ok": False, "err": exc.err})

    @app.exception_handler(RequestValidationError)
    async def validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        log.debug("Rejected malformed request: %s", exc.errors())
        return JSONResponse(status_code=400, content={"ok": False, "err": "Invalid request"})

    app.include_router(wheel.router, prefix="/api")

    return app
