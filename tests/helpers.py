from __future__ import annotations

import hashlib
import hmac
import json
import time
from datetime import datetime, timedelta
from random import Random
from typing import Iterable
from urllib.parse import urlencode


class ScriptedRandom(Random):
    """Random whose randint/choice results are fed from lists, in call order."""

    def __init__(self, ints: Iterable[int] = (), choices: Iterable[object] = ()) -> None:
        super().__init__(0)
        self.ints = list(ints)
        self.choices = list(choices)

    def randint(self, a: int, b: int) -> int:
        value = self.ints.pop(0)
        assert a <= value <= b, f"scripted {value} outside [{a}, {b}]"
        return value

    def choice(self, seq):
        if not self.choices:
            return seq[0]
        value = self.choices.pop(0)
        assert value in seq, f"scripted {value!r} not in {seq!r}"
        return value


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def sign_init_data(
    bot_token: str,
    user: dict,
    *,
    auth_date: int | None = None,
    start_param: str | None = None,
) -> str:
    """Builds Telegram WebApp initData signed the way Telegram signs it."""
    fields = {
        "auth_date": str(auth_date if auth_date is not None else int(time.time())),
        "query_id": "AAHdF6IQAAAAAN0XohDhrOrc",
        "user": json.dumps(user, separators=(",", ":")),
    }
    if start_param:
        fields["start_param"] = start_param

    data_check_string = "\n".join(f"{k}={v}" for k, v in sorted(fields.items()))
    secret_key = hmac.new(b"WebAppData", bot_token.encode(), hashlib.sha256).digest()
    fields["hash"] = hmac.new(secret_key, data_check_string.encode(), hashlib.sha256).hexdigest()
    return urlencode(fields)
