"""
Application configuration

Carrier credentials and endpoints come from the environment (or a local .env).
Credentials have no defaults: load_ups_config() refuses to build a UPS config
without them.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

UPS_PRODUCTION_URL = "https://onlinetools.ups.com"
UPS_SANDBOX_URL = "https://wwwcie.ups.com"
OAUTH_TOKEN_PATH = "/security/v1/oauth/token"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # UPS OAuth client credentials - NO DEFAULT
    UPS_CLIENT_ID: str = ""
    UPS_CLIENT_SECRET: str = ""
    UPS_ACCOUNT_NUMBER: Optional[str] = None

    # UPS endpoints
    UPS_BASE_URL: str = UPS_PRODUCTION_URL
    UPS_OAUTH_URL: str = f"{UPS_PRODUCTION_URL}{OAUTH_TOKEN_PATH}"
    UPS_API_VERSION: str = "v2409"
    UPS_TRANSACTION_SRC: str = "carrier-rates"

    # Timeouts (milliseconds)
    UPS_AUTH_TIMEOUT_MS: int = Field(default=5000, gt=0)
    UPS_RATING_TIMEOUT_MS: int = Field(default=10000, gt=0)

    @field_validator("UPS_BASE_URL", "UPS_OAUTH_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("UPS_ACCOUNT_NUMBER", mode="before")
    @classmethod
    def empty_account_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


@dataclass(frozen=True)
class UPSConfig:
    """Everything the UPS carrier needs to authenticate and rate."""
    client_id: str
    client_secret: str
    base_url: str = UPS_PRODUCTION_URL
    oauth_url: str = f"{UPS_PRODUCTION_URL}{OAUTH_TOKEN_PATH}"
    version: str = "v2409"
    transaction_src: str = "carrier-rates"
    auth_timeout_ms: int = 5000
    rating_timeout_ms: int = 10000
    account_number: Optional[str] = None


def load_ups_config(settings: Optional[Settings] = None) -> UPSConfig:
    """Build a UPSConfig from settings (reads the environment when omitted)."""
    settings = settings or Settings()

    if not settings.UPS_CLIENT_ID or not settings.UPS_CLIENT_SECRET:
        raise ValueError("UPS_CLIENT_ID and UPS_CLIENT_SECRET must be set")

    config = UPSConfig(
        client_id=settings.UPS_CLIENT_ID,
        client_secret=settings.UPS_CLIENT_SECRET,
        account_number=settings.UPS_ACCOUNT_NUMBER,
        base_url=settings.UPS_BASE_URL,
        oauth_url=settings.UPS_OAUTH_URL,
        version=settings.UPS_API_VERSION,
        transaction_src=settings.UPS_TRANSACTION_SRC,
        auth_timeout_ms=settings.UPS_AUTH_TIMEOUT_MS,
        rating_timeout_ms=settings.UPS_RATING_TIMEOUT_MS,
    )
    logger.debug(f"Loaded UPS config for {config.base_url} (API {config.version})")
    return config
