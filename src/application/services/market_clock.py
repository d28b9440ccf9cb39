"""
US equity market calendar helpers used to fill Quote.trading_hours.

The open/closed check is a simplified weekday 09:00-16:00 New York window; it
does not know about exchange holidays.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable
from zoneinfo import ZoneInfo

from src.domain.entities.stock_price import TradingHours

MARKET_TIMEZONE = "America/New_York"
_MARKET_TZ = ZoneInfo(MARKET_TIMEZONE)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_market_time(moment: datetime) -> datetime:
    """Convert *moment* to New York time; naive values are taken as New York local."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=_MARKET_TZ)
    return moment.astimezone(_MARKET_TZ)


def is_market_open(now: datetime) -> bool:
    local = to_market_time(now)
    return local.weekday() < 5 and 9 <= local.hour < 16


def next_market_open(now: datetime) -> str:
    """09:30 New York time on the following calendar day, as ISO-8601."""
    local = to_market_time(now)
    following = (local + timedelta(days=1)).replace(
        hour=9, minute=30, second=0, microsecond=0
    )
    return following.isoformat()


def trading_hours(now: datetime) -> TradingHours:
    return TradingHours(
        is_open=is_market_open(now),
        next_open=next_market_open(now),
        timezone=MARKET_TIMEZONE,
    )


def parse_point_time(value: str) -> datetime:
    """Parse an ISO date or timestamp from a series; naive values are New York local."""
    return to_market_time(datetime.fromisoformat(value))
