import logging
import os
from dataclasses import dataclass
from typing import Union

COUNTRIES_URL = "https://restcountries.com/v3.1/all"
HISTORICAL_URL = "https://disease.sh/v3/covid-19/historical"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_lookback(name: str, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    if raw.strip().lower() == "all":
        return "all"
    return _env_int(name, default)


@dataclass(frozen=True)
class Settings:
    """Endpoints and constants used by the dashboard.

    ``total_population`` is a single fixed figure (India's population) used
    for the "Remaining Population" slice whatever country is selected.
    """

    countries_url: str = COUNTRIES_URL
    historical_url: str = HISTORICAL_URL
    lookback_days: Union[int, str] = 1500
    default_country: str = "india"
    total_population: int = 1_400_000_000
    request_timeout: int = 30
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            countries_url=os.getenv("COVID_COUNTRIES_URL", COUNTRIES_URL),
            historical_url=os.getenv("COVID_HISTORICAL_URL", HISTORICAL_URL).rstrip("/"),
            lookback_days=_env_lookback("COVID_LOOKBACK_DAYS", 1500),
            default_country=os.getenv("COVID_DEFAULT_COUNTRY", "india").strip().lower(),
            total_population=_env_int("COVID_TOTAL_POPULATION", 1_400_000_000),
            request_timeout=_env_int("COVID_REQUEST_TIMEOUT", 30),
            log_level=os.getenv("COVID_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
