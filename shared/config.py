"""
Shared configuration management for the Food Data Proxy.
"""

from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    env: str = Field(default="local", alias="PROXY_ENV")
    log_level: str = Field(default="info", alias="PROXY_LOG_LEVEL")

    # Counter store; unset means rate limiting is disabled
    redis_url: Optional[str] = Field(default=None, alias="PROXY_REDIS_URL")


class ProxyConfig(BaseConfig):
    """Settings handed to the router and every handler."""

    host: str = Field(default="0.0.0.0", alias="PROXY_HOST")
    port: int = Field(default=8787, alias="PROXY_PORT")

    # Secrets
    usda_key: SecretStr = Field(alias="USDA_KEY")

    # Upstreams
    usda_base_url: str = Field(default="https://api.nal.usda.gov/fdc/v1", alias="PROXY_USDA_BASE_URL")
    off_base_url: str = Field(default="https://world.openfoodfacts.org/api/v2", alias="PROXY_OFF_BASE_URL")
    off_user_agent: str = Field(
        default="USDAFoodProxy/1.0 (+https://github.com/yourproject)",
        alias="PROXY_OFF_USER_AGENT",
    )
    upstream_timeout_seconds: float = Field(default=10.0, alias="PROXY_UPSTREAM_TIMEOUT_SECONDS")

    # Rate limiting (requests per window, per caller identity)
    usda_rate_limit: int = Field(default=10, alias="PROXY_USDA_RATE_LIMIT")
    # OFF allows 10 search req/min; stay under it
    off_rate_limit: int = Field(default=6, alias="PROXY_OFF_RATE_LIMIT")
    rate_window_seconds: int = Field(default=60, alias="PROXY_RATE_WINDOW_SECONDS")
    client_ip_header: str = Field(default="CF-Connecting-IP", alias="PROXY_CLIENT_IP_HEADER")


def get_config(**overrides) -> ProxyConfig:
    """Load configuration from the environment, applying explicit overrides."""
    return ProxyConfig(**overrides)
