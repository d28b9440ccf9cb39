"""
Runtime configuration read from the process environment.

``load_dotenv()`` is called by the entrypoints before ``load_settings()`` so a
local ``.env`` file can supply the same variables. A missing Alpha Vantage key
is not an error: the service then runs entirely on synthetic data.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from src.infrastructure.stock_data.alpha_vantage_adapter import DEFAULT_BASE_URL

PROVIDERS = ("alpha_vantage", "yfinance", "synthetic")


@dataclass(frozen=True)
class Settings:
    alpha_vantage_api_key: Optional[str] = None
    alpha_vantage_base_url: str = DEFAULT_BASE_URL
    stock_data_provider: str = "alpha_vantage"
    upstream_timeout_seconds: float = 10.0
    compare_timeout_seconds: float = 30.0
    log_level: str = "INFO"
    log_format: str = "console"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from *environ* (defaults to ``os.environ``).

    Raises:
        ValueError: on an unknown STOCK_DATA_PROVIDER or a non-numeric timeout.
    """
    env = os.environ if environ is None else environ

    provider = env.get("STOCK_DATA_PROVIDER", "alpha_vantage").strip().lower()
    if provider not in PROVIDERS:
        raise ValueError(
            f"STOCK_DATA_PROVIDER must be one of {', '.join(PROVIDERS)}; got {provider!r}"
        )

    return Settings(
        alpha_vantage_api_key=env.get("ALPHA_VANTAGE_API_KEY", "").strip() or None,
        alpha_vantage_base_url=env.get("ALPHA_VANTAGE_BASE_URL", "").strip() or DEFAULT_BASE_URL,
        stock_data_provider=provider,
        upstream_timeout_seconds=float(env.get("UPSTREAM_TIMEOUT_SECONDS", "10")),
        compare_timeout_seconds=float(env.get("COMPARE_TIMEOUT_SECONDS", "30")),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
        log_format=env.get("LOG_FORMAT", "console").lower(),
    )
