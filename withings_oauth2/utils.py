
from __future__ import annotations

import hashlib
import hmac
import time
from datetime import date, timedelta
from typing import Any

from .const import (
    DEFAULT_LOOKBACK_DAYS,
    DEFAULT_MEAS_CATEGORY,
    DEFAULT_MEAS_LOOKBACK_MS,
    DEFAULT_MEASTYPES,
    SCOPE_PREFIX,
)

ISO_DATE = "%Y-%m-%d"


def format_scope(scope: str) -> str:
    """Turn ``"activity, metrics"`` into ``"user.activity,user.metrics"``."""
    parts = [el.strip() for el in scope.split(",")]
    return ",".join(SCOPE_PREFIX + el for el in parts if el)


def generate_signature(action: str, client_id: str, client_secret: str, base: Any) -> str:
    """Hex HMAC-SHA256 of ``action,client_id,base`` keyed by the client secret.

    ``base`` is the nonce for signed token requests, or the Unix timestamp
    when asking for a nonce.
    """
    message = f"{action},{client_id},{base}"
    return hmac.new(
        client_secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256
    ).hexdigest()


def unix_timestamp() -> int:
    return int(time.time())


def now_ms() -> int:
    return int(time.time() * 1000)


def format_ymd(day: date) -> str:
    return day.strftime(ISO_DATE)


def days_ago_ymd(days: int, today: date | None = None) -> str:
    today = today or date.today()
    return format_ymd(today - timedelta(days=days))


# Defaults are built per call so the windows always end "now".

def default_measure_options() -> dict[str, Any]:
    now = now_ms()
    return {
        "meastypes": DEFAULT_MEASTYPES,
        "category": DEFAULT_MEAS_CATEGORY,
        "startdate": now - DEFAULT_MEAS_LOOKBACK_MS,
        "enddate": now,
        "lastupdate": now,
    }


def default_ymd_range(days: int = DEFAULT_LOOKBACK_DAYS) -> dict[str, str]:
    today = date.today()
    return {
        "startdateymd": days_ago_ymd(days, today),
        "enddateymd": format_ymd(today),
    }
