"""Wall-clock access for the workflow and the expiry sweeper."""

from datetime import datetime
from typing import Callable
from zoneinfo import ZoneInfo

Clock = Callable[[], datetime]


def make_clock(timezone: str) -> Clock:
    """Return a clock producing aware datetimes in ``timezone``."""
    tz = ZoneInfo(timezone)

    def now() -> datetime:
        return datetime.now(tz)

    return now
