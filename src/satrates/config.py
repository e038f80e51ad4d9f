"""Configuration system using pydantic-settings with environment variable loading."""

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class QuoteSettings(BaseSettings):
    """Price quote provider settings (any ccxt exchange with BTC markets)."""

    model_config = SettingsConfigDict(env_prefix="QUOTES_")

    exchange_id: str = "kraken"
    api_key: SecretStr = SecretStr("")
    api_secret: SecretStr = SecretStr("")
    timeout_ms: int = 10_000


class CacheSettings(BaseSettings):
    """Recency cache configuration."""

    model_config = SettingsConfigDict(env_prefix="CACHE_")

    ttl_seconds: int = 24 * 60 * 60


class IngestionSettings(BaseSettings):
    """Periodic quote ingestion configuration.

    All fields configurable via INGESTION_ environment variable prefix.
    tracked_symbols accepts a JSON list, e.g. INGESTION_TRACKED_SYMBOLS='["USD","EUR"]'.
    """

    model_config = SettingsConfigDict(env_prefix="INGESTION_")

    enabled: bool = True
    interval: int = 60  # seconds between ingestion cycles
    tracked_symbols: list[str] = ["USD", "EUR", "ETH", "LTC", "BCH", "XRP", "BNB"]


class StoreSettings(BaseSettings):
    """Persistent price store location."""

    model_config = SettingsConfigDict(env_prefix="STORE_")

    db_path: str = "data/prices.db"


class ApiSettings(BaseSettings):
    """HTTP API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 3000
    default_limit: int = 10


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    quotes: QuoteSettings = QuoteSettings()
    cache: CacheSettings = CacheSettings()
    ingestion: IngestionSettings = IngestionSettings()
    store: StoreSettings = StoreSettings()
    api: ApiSettings = ApiSettings()
