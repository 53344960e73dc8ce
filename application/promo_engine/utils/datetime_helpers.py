"""
Clock providers for the promotion engine.

The engine never reads the system clock itself; callers pass `clock.now()`.
"""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from promo_engine.config.settings import PromoEngineConfigs
configs = PromoEngineConfigs()


def get_business_timezone(tz_name: Optional[str] = None) -> ZoneInfo:
    """
    Resolve the timezone promotions are scheduled in.

    Args:
        tz_name: IANA timezone name, defaults to BUSINESS_TIMEZONE

    Returns:
        ZoneInfo for the given (or configured) timezone
    """
    return ZoneInfo(tz_name or configs.BUSINESS_TIMEZONE)


def get_business_now(tz_name: Optional[str] = None) -> datetime:
    return datetime.now(get_business_timezone(tz_name))


class SystemClock:
    """Wall clock in the business timezone"""

    def __init__(self, tz_name: Optional[str] = None):
        self.tz = get_business_timezone(tz_name)

    def now(self) -> datetime:
        return datetime.now(self.tz)


class FixedClock:
    """Always returns the same instant; used by tests and replays"""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def advance_to(self, instant: datetime) -> None:
        self.instant = instant
