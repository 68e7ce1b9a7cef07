"""Configuration management for the Baasix MCP server.

Values are read from the process environment first, then from a ``.env``
file in the working directory.  ``Credentials`` is the validated, immutable
view of those values that the rest of the server consumes.
"""

import logging
from pathlib import Path
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Baasix connection
    baasix_url: str | None = Field(default=None, description="Base URL of the Baasix server")
    baasix_auth_token: str | None = Field(
        default=None, description="Pre-issued access token; takes priority over email/password"
    )
    baasix_email: str | None = Field(default=None, description="Login email for auto-login")
    baasix_password: str | None = Field(default=None, description="Login password for auto-login")
    baasix_timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, description="Per-request timeout in seconds"
    )
    baasix_allow_anonymous: bool = Field(
        default=False,
        description="Start without any credentials. Only public endpoints will work.",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Path | None = Field(default=None, description="Optional log file path")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the level name and reject unknown ones."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level


def load_settings(**overrides) -> Settings:
    """Load settings, converting parse failures into ConfigurationError.

    Args:
        **overrides: Explicit values that win over the environment
            (``_env_file=None`` disables ``.env`` loading)

    Returns:
        Parsed settings
    """
    try:
        return Settings(**overrides)
    except PydanticValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in err['loc']).upper()}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigurationError(errors) from e


def _is_valid_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_settings(settings: Settings) -> tuple[list[str], list[str]]:
    """Check the connection settings for completeness.

    Args:
        settings: Settings to validate

    Returns:
        Tuple of (errors, warnings)
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not settings.baasix_url:
        errors.append("BAASIX_URL is required")
    elif not _is_valid_url(settings.baasix_url):
        errors.append("BAASIX_URL must be a valid URL")

    has_token = bool(settings.baasix_auth_token)
    has_email = bool(settings.baasix_email)
    has_password = bool(settings.baasix_password)
    has_credentials = has_email and has_password

    if has_email != has_password and not has_token:
        missing = "BAASIX_PASSWORD" if has_email else "BAASIX_EMAIL"
        errors.append(f"BAASIX_EMAIL and BAASIX_PASSWORD must be provided together ({missing} missing)")
    elif not has_token and not has_credentials and not settings.baasix_allow_anonymous:
        errors.append(
            "Either BAASIX_AUTH_TOKEN or both BAASIX_EMAIL and BAASIX_PASSWORD must be provided"
        )

    if has_token and has_credentials:
        warnings.append("Both token and credentials provided - token will take priority")

    return errors, warnings


class Credentials(BaseModel):
    """Resolved connection credentials. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    explicit_token: str | None = None
    email: str | None = None
    password: str | None = Field(default=None, repr=False)
    timeout: float = DEFAULT_TIMEOUT

    @property
    def has_explicit_token(self) -> bool:
        return bool(self.explicit_token)

    @property
    def has_login(self) -> bool:
        return bool(self.email and self.password)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Credentials":
        """Validate settings and build credentials from them.

        Raises:
            ConfigurationError: If the settings are incomplete or malformed
        """
        errors, warnings = validate_settings(settings)
        if errors:
            raise ConfigurationError(errors)
        for warning in warnings:
            logger.warning(warning)

        return cls(
            base_url=settings.baasix_url.rstrip("/"),
            explicit_token=settings.baasix_auth_token or None,
            email=settings.baasix_email or None,
            password=settings.baasix_password or None,
            timeout=settings.baasix_timeout,
        )
