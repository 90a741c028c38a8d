from functools import lru_cache

import httpx
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigInvalidError

DEFAULT_BASE_URL = "https://app.hex.tech/api/v1"
DEFAULT_TIMEOUT_MS = 30000
MIN_TIMEOUT_MS = 1000


class HexConfig(BaseModel):
    """Immutable connection settings handed to the request gateway.

    Attributes:
        api_token: Hex API token sent as a bearer credential.
        base_url: Absolute base endpoint of the Hex REST API.
        timeout: Upper bound for a whole request, in milliseconds.
        debug: Whether debug logging is enabled.
    """

    model_config = ConfigDict(frozen=True)

    api_token: SecretStr = Field(default=SecretStr(""), description="Hex API token")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Hex API base endpoint")
    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, description="Request timeout in ms")
    debug: bool = Field(default=False, description="Enable debug logging")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000


class Settings(BaseSettings):
    # App
    APP_NAME: str = "mcp-server-hex"
    APP_VERSION: str = "1.1.0"

    # Hex API
    HEX_API_TOKEN: SecretStr = SecretStr("")
    HEX_API_BASE_URL: str = DEFAULT_BASE_URL
    HEX_REQUEST_TIMEOUT: int = DEFAULT_TIMEOUT_MS
    HEX_DEBUG: bool = False

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    def hex_config(self) -> HexConfig:
        return HexConfig(
            api_token=self.HEX_API_TOKEN,
            base_url=self.HEX_API_BASE_URL,
            timeout=self.HEX_REQUEST_TIMEOUT,
            debug=self.HEX_DEBUG,
        )


def validate_config(config: HexConfig) -> None:
    """Check that a configuration is usable before any request is made.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigInvalidError: If the token is missing, the base URL is not an
            absolute http(s) URL, or the timeout is below the minimum.
    """
    if not config.api_token.get_secret_value():
        raise ConfigInvalidError(
            "HEX_API_TOKEN environment variable is required. "
            "Please set it in your .env file or environment variables.",
            field="HEX_API_TOKEN",
        )

    if not config.base_url:
        raise ConfigInvalidError(
            "HEX_API_BASE_URL environment variable is required. "
            "Please set it in your .env file or environment variables.",
            field="HEX_API_BASE_URL",
        )

    try:
        url = httpx.URL(config.base_url)
    except httpx.InvalidURL as e:
        raise ConfigInvalidError(
            f"HEX_API_BASE_URL is not a valid URL: {e}", field="HEX_API_BASE_URL"
        ) from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigInvalidError(
            f"HEX_API_BASE_URL must be an absolute http(s) URL, got '{config.base_url}'",
            field="HEX_API_BASE_URL",
        )

    if config.timeout < MIN_TIMEOUT_MS:
        raise ConfigInvalidError(
            f"HEX_REQUEST_TIMEOUT must be at least {MIN_TIMEOUT_MS}ms (1 second)",
            field="HEX_REQUEST_TIMEOUT",
        )


@lru_cache()
def get_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise ConfigInvalidError(f"Invalid value for {field}: {error['msg']}", field=field) from e
