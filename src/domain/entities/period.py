"""
Lookback periods for historical series.
Each period fixes the window used to filter provider data and the step used
when synthesizing points.
"""

from datetime import timedelta
from enum import Enum
from typing import Optional

from src.domain.errors import InvalidInput


class Period(str, Enum):
    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    FIVE_YEARS = "5Y"

    @property
    def days(self) -> int:
        return _PERIOD_DAYS[self]

    @property
    def window(self) -> timedelta:
        return timedelta(days=self.days)

    @property
    def is_intraday(self) -> bool:
        """True when the upstream series should be requested at intraday granularity."""
        return self in (Period.ONE_DAY, Period.ONE_WEEK)

    @property
    def step(self) -> timedelta:
        """Spacing between synthesized points: hourly for 1D, daily otherwise."""
        return timedelta(hours=1) if self is Period.ONE_DAY else timedelta(days=1)

    @property
    def point_count(self) -> int:
        """Number of steps back from now covered by a synthesized series."""
        return 24 if self is Period.ONE_DAY else self.days

    @classmethod
    def parse(cls, value: Optional[str]) -> "Period":
        """Parse a period label; ``None`` or an empty string means 1M.

        Raises:
            InvalidInput: if *value* is not one of 1D, 1W, 1M, 3M, 6M, 1Y, 5Y.
        """
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.ONE_MONTH
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise InvalidInput(f"Invalid period {value!r}; expected one of: {valid}") from None


_PERIOD_DAYS = {
    Period.ONE_DAY: 1,
    Period.ONE_WEEK: 7,
    Period.ONE_MONTH: 30,
    Period.THREE_MONTHS: 90,
    Period.SIX_MONTHS: 180,
    Period.ONE_YEAR: 365,
    Period.FIVE_YEARS: 1825,
}
