"""
Pydantic models for the Alpha Vantage JSON payloads.

Alpha Vantage numbers its field names ("05. price", "1. open") and sends every
value as a string; the aliases and lax coercion below turn a payload into
typed values, and any missing or malformed required field fails validation.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class GlobalQuote(BaseModel):
    """Body of a GLOBAL_QUOTE response (the "Global Quote" object)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    symbol: str = Field(..., alias="01. symbol")
    open: float = Field(..., alias="02. open")
    high: float = Field(..., alias="03. high")
    low: float = Field(..., alias="04. low")
    price: float = Field(..., alias="05. price")
    volume: int = Field(..., alias="06. volume")
    latest_trading_day: str = Field(..., alias="07. latest trading day")
    previous_close: float = Field(..., alias="08. previous close")
    change: float = Field(..., alias="09. change")
    change_percent: float = Field(..., alias="10. change percent")

    @field_validator("change_percent", mode="before")
    @classmethod
    def _strip_percent_sign(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().rstrip("%")
        return value


class OhlcvBar(BaseModel):
    """One bar of a TIME_SERIES_DAILY / TIME_SERIES_INTRADAY series."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    open: float = Field(..., alias="1. open")
    high: float = Field(..., alias="2. high")
    low: float = Field(..., alias="3. low")
    close: float = Field(..., alias="4. close")
    volume: int = Field(..., alias="5. volume")


TIME_SERIES_KEYS = ("Time Series (Daily)", "Time Series (15min)")

time_series_adapter = TypeAdapter(dict[str, OhlcvBar])
