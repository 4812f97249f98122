"""Environment configuration for the proxy.

``ProxySettings`` is built once at startup and handed to the components that
need it; nothing else reads the environment.
"""

from __future__ import annotations

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError
from .result import Failure, Result, Success


# Never logged: credentials, and the proxy URL which may embed them
SECRET_FIELDS = frozenset({"aws_access_key_id", "aws_secret_access_key", "s3_http_proxy"})

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ProxySettings(BaseSettings):
    """Immutable proxy configuration read from environment variables."""

    # Empty variables count as unset, falling back to defaults
    model_config = SettingsConfigDict(frozen=True, extra="ignore", env_ignore_empty=True)

    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = "INFO"

    aws_region: str = "eu-west-1"
    aws_bucket: str = Field(min_length=1)
    aws_access_key_id: SecretStr
    aws_secret_access_key: SecretStr
    aws_endpoint_url: str | None = None

    health_file: str = Field(default=".rest-s3-proxy", min_length=1)
    health_cache_interval: int = Field(default=120, ge=0)

    # Outbound proxy for S3 calls; direct connection when unset
    s3_http_proxy: str | None = None

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("aws_access_key_id", "aws_secret_access_key")
    @classmethod
    def _credentials_present(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("must not be empty")
        return value


def load_settings(**overrides: object) -> Result[ProxySettings, ConfigError]:
    """Build settings from the environment, with explicit overrides winning.

    Returns:
        Success(ProxySettings) when every required variable is present and valid
        Failure(ConfigError) naming the first offending variable otherwise
    """
    try:
        return Success(ProxySettings(**overrides))
    except ValidationError as exc:
        first = exc.errors()[0]
        variable = str(first["loc"][0]).upper() if first["loc"] else "UNKNOWN"
        if first["type"] == "missing" or first.get("input") == "":
            message = f"Unable to start as required env {variable} is not defined"
        else:
            message = f"Invalid value for env {variable}: {first['msg']}"
        return Failure(ConfigError(variable=variable, message=message))


def describe_settings(settings: ProxySettings) -> list[str]:
    """Render one log line per setting, leaving credentials out."""
    lines: list[str] = []
    for name in ProxySettings.model_fields:
        if name in SECRET_FIELDS:
            continue
        value = getattr(settings, name)
        if name in settings.model_fields_set:
            lines.append(f"{name.upper()}: {value}")
        else:
            lines.append(f"Using default {name.upper()}: {value}")
    return lines
