"""
Tests for Period parsing and granularity.
"""

from datetime import timedelta

import pytest

from src.domain.entities.period import Period
from src.domain.errors import InvalidInput


class TestPeriod:
    def test_default_is_one_month(self):
        assert Period.parse(None) is Period.ONE_MONTH
        assert Period.parse("") is Period.ONE_MONTH

    @pytest.mark.parametrize("label", ["1D", "1W", "1M", "3M", "6M", "1Y", "5Y"])
    def test_parses_every_label(self, label):
        assert Period.parse(label).value == label

    def test_parse_is_case_insensitive(self):
        assert Period.parse("1y") is Period.ONE_YEAR

    def test_rejects_unknown_label(self):
        with pytest.raises(InvalidInput, match="10Y"):
            Period.parse("10Y")

    def test_invalid_input_is_a_value_error(self):
        with pytest.raises(ValueError):
            Period.parse("2W")

    def test_granularity(self):
        assert Period.ONE_DAY.step == timedelta(hours=1)
        assert Period.ONE_DAY.point_count == 24
        assert Period.THREE_MONTHS.step == timedelta(days=1)
        assert Period.THREE_MONTHS.point_count == 90
        assert Period.FIVE_YEARS.window == timedelta(days=1825)

    def test_intraday_periods(self):
        assert Period.ONE_DAY.is_intraday
        assert Period.ONE_WEEK.is_intraday
        assert not Period.ONE_MONTH.is_intraday
