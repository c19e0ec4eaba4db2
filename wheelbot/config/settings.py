# wheelbot/config/settings.py
from __future__ import annotations

import os
import re
from dataclasses import dataclass

from dotenv import load_dotenv


def _require(env: dict[str, str], key: str) -> str:
    v = env.get(key)
    if v is None or not v.strip():
        raise RuntimeError(f"Missing required environment variable: {key}")
    return v.strip()


def _to_int(value: str, key_name: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise RuntimeError(f"Invalid integer for {key_name}: {value!r}") from e


def _parse_str_list(raw: str | None) -> list[str]:
    """
    Parses comma/space/newline separated values.
    Accepts:
      "*"
      "https://a.example,https://b.example"
      "[https://a.example https://b.example]"  (brackets ignored)
    """
    if not raw:
        return []

    cleaned = raw.strip().strip("[](){}").strip()
    if not cleaned:
        return []

    return [p.strip().strip("'\"") for p in re.split(r"[,\s]+", cleaned) if p.strip().strip("'\"")]


@dataclass(frozen=True, slots=True)
class Settings:
    # --- required ---
    bot_token: str
    bot_username: str  # required for deep links
    web_app_url: str  # where the wheel mini-app is served

    # --- optional ---
    database_url: str = "sqlite+aiosqlite:///./wheel.db"

    # --- http api ---
    api_host: str = "0.0.0.0"
    api_port: int = 3001
    cors_origins: tuple[str, ...] = ("*",)
    init_data_max_age: int = 86400  # seconds, 0 = no limit

    # --- environment ---
    environment: str = "production"  # production | development

    @property
    def is_dev(self) -> bool:
        return self.environment.lower() in {"dev", "development", "local"}

    @classmethod
    def load(cls) -> "Settings":
        """
        Loads from process env (and .env if present).
        Fails fast for required fields.
        """
        load_dotenv()
        env = os.environ

        bot_token = _require(env, "BOT_TOKEN")
        bot_username = _require(env, "BOT_USERNAME").lstrip("@")
        web_app_url = _require(env, "WEB_APP_URL").rstrip("/")

        database_url = (env.get("DATABASE_URL") or "sqlite+aiosqlite:///./wheel.db").strip()

        api_host = (env.get("API_HOST") or "0.0.0.0").strip() or "0.0.0.0"
        api_port_raw = (env.get("API_PORT") or env.get("PORT") or "").strip()
        api_port = _to_int(api_port_raw, "API_PORT") if api_port_raw else 3001

        cors_origins = tuple(_parse_str_list(env.get("CORS_ORIGINS"))) or ("*",)

        max_age_raw = (env.get("INIT_DATA_MAX_AGE") or "").strip()
        init_data_max_age = _to_int(max_age_raw, "INIT_DATA_MAX_AGE") if max_age_raw else 86400

        environment = (env.get("ENVIRONMENT") or "production").strip() or "production"

        return cls(
            bot_token=bot_token,
            bot_username=bot_username,
            web_app_url=web_app_url,
            database_url=database_url,
            api_host=api_host,
            api_port=api_port,
            cors_origins=cors_origins,
            init_data_max_age=init_data_max_age,
            environment=environment,
        )
