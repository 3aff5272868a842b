import time
from datetime import UTC, datetime

_STARTED_AT = time.monotonic()


def now_utc() -> datetime:
    return datetime.now(UTC)


def uptime_seconds() -> float:
    return round(time.monotonic() - _STARTED_AT, 3)
