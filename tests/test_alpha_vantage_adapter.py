"""
Tests for the Alpha Vantage adapter, using httpx.MockTransport in place of the network.
"""

import httpx
import pytest

from src.domain.entities.period import Period
from src.domain.errors import SourceRateLimited, SourceTimeout, SourceUnavailable
from src.infrastructure.stock_data.alpha_vantage_adapter import AlphaVantageStockDataProvider

BASE_URL = "https://av.test/query"

GLOBAL_QUOTE = {
    "Global Quote": {
        "01. symbol": "IBM",
        "02. open": "190.0000",
        "03. high": "193.5000",
        "04. low": "189.2500",
        "05. price": "192.1000",
        "06. volume": "4123456",
        "07. latest trading day": "2026-10-16",
        "08. previous close": "190.5000",
        "09. change": "1.6000",
        "10. change percent": "0.8399%",
    }
}

DAILY_SERIES = {
    "Meta Data": {"2. Symbol": "IBM"},
    "Time Series (Daily)": {
        "2026-10-16": {
            "1. open": "190.0",
            "2. high": "193.5",
            "3. low": "189.25",
            "4. close": "192.1",
            "5. volume": "4123456",
        },
        "2026-10-15": {
            "1. open": "188.0",
            "2. high": "191.0",
            "3. low": "187.5",
            "4. close": "190.5",
            "5. volume": "3900000",
        },
    },
}


def make_provider(handler) -> tuple[AlphaVantageStockDataProvider, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = httpx.Client(transport=httpx.MockTransport(recording_handler))
    return AlphaVantageStockDataProvider("test-key", base_url=BASE_URL, client=client), requests


def json_handler(payload, status_code=200):
    return lambda request: httpx.Response(status_code, json=payload)


class TestFetchQuote:
    def test_maps_global_quote(self):
        provider, requests = make_provider(json_handler(GLOBAL_QUOTE))

        snapshot = provider.fetch_quote("IBM")

        assert snapshot.symbol == "IBM"
        assert snapshot.price == 192.1
        assert snapshot.change == 1.6
        assert snapshot.change_percent == pytest.approx(0.8399)
        assert snapshot.volume == 4123456
        assert snapshot.previous_close == 190.5
        assert snapshot.latest_trading_day == "2026-10-16"
        assert snapshot.source == "alpha_vantage"
        params = requests[0].url.params
        assert params["function"] == "GLOBAL_QUOTE"
        assert params["symbol"] == "IBM"
        assert params["apikey"] == "test-key"

    def test_empty_global_quote(self):
        provider, _ = make_provider(json_handler({"Global Quote": {}}))

        with pytest.raises(SourceUnavailable):
            provider.fetch_quote("NOPE")

    def test_missing_required_field(self):
        broken = {"Global Quote": dict(GLOBAL_QUOTE["Global Quote"])}
        del broken["Global Quote"]["05. price"]
        provider, _ = make_provider(json_handler(broken))

        with pytest.raises(SourceUnavailable, match="Malformed"):
            provider.fetch_quote("IBM")

    def test_non_numeric_field(self):
        broken = {"Global Quote": {**GLOBAL_QUOTE["Global Quote"], "05. price": "n/a"}}
        provider, _ = make_provider(json_handler(broken))

        with pytest.raises(SourceUnavailable):
            provider.fetch_quote("IBM")

    @pytest.mark.parametrize("key", ["Note", "Information"])
    def test_quota_messages_are_rate_limits(self, key):
        provider, _ = make_provider(json_handler({key: "API call frequency exceeded"}))

        with pytest.raises(SourceRateLimited) as excinfo:
            provider.fetch_quote("IBM")
        assert excinfo.value.provider == "alpha_vantage"
        assert excinfo.value.symbol == "IBM"

    def test_error_message(self):
        provider, _ = make_provider(json_handler({"Error Message": "Invalid API call."}))

        with pytest.raises(SourceUnavailable, match="Invalid API call"):
            provider.fetch_quote("IBM")

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        provider, _ = make_provider(handler)

        with pytest.raises(SourceTimeout):
            provider.fetch_quote("IBM")

    def test_http_error_status(self):
        provider, _ = make_provider(json_handler({"detail": "oops"}, status_code=503))

        with pytest.raises(SourceUnavailable):
            provider.fetch_quote("IBM")

    def test_non_json_body(self):
        provider, _ = make_provider(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(SourceUnavailable):
            provider.fetch_quote("IBM")

    def test_empty_body(self):
        provider, _ = make_provider(json_handler({}))

        with pytest.raises(SourceUnavailable):
            provider.fetch_quote("IBM")


class TestFetchHistory:
    def test_parses_daily_series_ascending(self):
        provider, _ = make_provider(json_handler(DAILY_SERIES))

        series = provider.fetch_history("IBM", Period.ONE_MONTH)

        assert [p.date for p in series.points] == ["2026-10-15", "2026-10-16"]
        assert series.points[1].close == 192.1
        assert series.meta.total_points == 2
        assert series.period == "1M"
        assert series.source == "alpha_vantage"

    def test_parses_intraday_series(self):
        payload = {
            "Time Series (15min)": {
                "2026-10-16 15:45:00": DAILY_SERIES["Time Series (Daily)"]["2026-10-16"],
                "2026-10-16 15:30:00": DAILY_SERIES["Time Series (Daily)"]["2026-10-15"],
            }
        }
        provider, _ = make_provider(json_handler(payload))

        series = provider.fetch_history("IBM", Period.ONE_DAY)

        assert [p.date for p in series.points] == ["2026-10-16 15:30:00", "2026-10-16 15:45:00"]

    def test_missing_series(self):
        provider, _ = make_provider(json_handler({"Meta Data": {}}))

        with pytest.raises(SourceUnavailable):
            provider.fetch_history("IBM", Period.ONE_MONTH)

    @pytest.mark.parametrize(
        "period, function, outputsize, interval",
        [
            (Period.ONE_DAY, "TIME_SERIES_INTRADAY", "full", "15min"),
            (Period.ONE_WEEK, "TIME_SERIES_INTRADAY", "full", "15min"),
            (Period.ONE_MONTH, "TIME_SERIES_DAILY", "compact", None),
            (Period.SIX_MONTHS, "TIME_SERIES_DAILY", "compact", None),
            (Period.ONE_YEAR, "TIME_SERIES_DAILY", "full", None),
            (Period.FIVE_YEARS, "TIME_SERIES_DAILY", "full", None),
        ],
    )
    def test_request_granularity(self, period, function, outputsize, interval):
        provider, requests = make_provider(json_handler(DAILY_SERIES))

        provider.fetch_history("IBM", period)

        params = requests[0].url.params
        assert params["function"] == function
        assert params["outputsize"] == outputsize
        assert params.get("interval") == interval
