import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://api.exchangerate.host/live"
DEFAULT_TIMEOUT = 10.0


class ConfigError(RuntimeError):
    """Raised when the environment does not describe a usable provider."""


@dataclass(frozen=True)
class ExchangeRateConfig:
    base_url: str
    access_key: str
    timeout: float = DEFAULT_TIMEOUT


def load_config(environ=None) -> ExchangeRateConfig:
    """Build the provider settings from ``EXCHANGE_RATE_API_*`` variables."""
    env = os.environ if environ is None else environ

    access_key = env.get("EXCHANGE_RATE_API_ACCESS_KEY", "").strip()
    if not access_key:
        raise ConfigError("EXCHANGE_RATE_API_ACCESS_KEY is not set")

    raw_timeout = env.get("EXCHANGE_RATE_API_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        raise ConfigError(f"Invalid EXCHANGE_RATE_API_TIMEOUT: {raw_timeout!r}") from exc
    if not timeout > 0:
        raise ConfigError(f"EXCHANGE_RATE_API_TIMEOUT must be positive, got {raw_timeout!r}")

    return ExchangeRateConfig(
        base_url=env.get("EXCHANGE_RATE_API_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        access_key=access_key,
        timeout=timeout,
    )
