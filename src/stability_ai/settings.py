"""Stability AI client configuration.

Environment-based settings plus a process-wide default instance that can be
mutated with ``configure``. The default instance is deliberately global and
unsynchronized: a change made through ``configure`` is seen by every client
that was built without its own settings, including requests already queued
on other threads.

Example:
    ```python
    import stability_ai

    stability_ai.configure(lambda config: setattr(config, "api_key", "sk-..."))

    @stability_ai.get_settings().transport
    def add_logging(builder):
        builder.event_hooks["request"].append(log_request)
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stability_ai.exceptions import ConfigurationError

DEFAULT_API_VERSION = "v2beta"
DEFAULT_REQUEST_TIMEOUT = 120
DEFAULT_URI_BASE = "https://api.stability.ai"

MISSING_API_KEY_MESSAGE = "Stability AI api key missing!"


class StabilitySettings(BaseSettings):
    """Configuration for the Stability AI client.

    All plain settings can be configured via environment variables or .env
    file. The transport customizer can only be set from code.

    Attributes:
        api_key: Bearer token for the Stability API
        api_version: Versioned path segment placed after the base URI
        uri_base: Root endpoint of the API
        request_timeout: HTTP request timeout in seconds
        extra_headers: Headers added to every request
        transport_customizer: Called with the ConnectionBuilder each time a
            connection is constructed
        log_errors: Log HTTP error responses before they are raised
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        validate_assignment=True,
    )

    api_key: SecretStr | None = Field(
        default=None,
        alias="STABILITY_API_KEY",
        description="Stability AI API key",
    )
    api_version: str = Field(
        default=DEFAULT_API_VERSION,
        alias="STABILITY_API_VERSION",
        description="API version path segment",
    )
    uri_base: str = Field(
        default=DEFAULT_URI_BASE,
        alias="STABILITY_URI_BASE",
        description="Base URI of the Stability API",
    )
    request_timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        alias="STABILITY_REQUEST_TIMEOUT",
        description="HTTP request timeout in seconds",
    )
    extra_headers: dict[str, str] = Field(
        default_factory=dict,
        alias="STABILITY_EXTRA_HEADERS",
        description="Headers merged into every request",
    )
    transport_customizer: Callable[[Any], None] | None = Field(
        default=None,
        exclude=True,
        description="Hook receiving the ConnectionBuilder for each connection",
    )
    log_errors: bool = Field(
        default=False,
        alias="STABILITY_LOG_ERRORS",
        description="Log HTTP error responses",
    )

    @field_validator("request_timeout")
    @classmethod
    def validate_request_timeout(cls, v: float) -> float:
        """Validate the timeout is a positive number of seconds."""
        if v <= 0:
            msg = f"Invalid request timeout: {v}. Must be greater than 0"
            raise ValueError(msg)
        return v

    @field_validator("uri_base")
    @classmethod
    def validate_uri_base(cls, v: str) -> str:
        """Validate the base URI is not blank."""
        if not v.strip():
            msg = "uri_base must not be empty"
            raise ValueError(msg)
        return v.strip()

    def get_api_key(self) -> str:
        """Get the API key as a plain string.

        Returns:
            The API key value.

        Raises:
            ConfigurationError: If no API key has been set.
        """
        if self.api_key is None or not self.api_key.get_secret_value():
            raise ConfigurationError(MISSING_API_KEY_MESSAGE)
        return self.api_key.get_secret_value()

    def transport(
        self, customizer: Callable[[Any], None]
    ) -> Callable[[Any], None]:
        """Register a transport customizer.

        Can be used as a decorator. The customizer is called once per
        connection with the ConnectionBuilder and may add event hooks or swap
        the underlying httpx transport.

        Args:
            customizer: Callable taking a ConnectionBuilder.

        Returns:
            The customizer, unchanged.
        """
        self.transport_customizer = customizer
        return customizer


_settings_instance: StabilitySettings | None = None


def get_settings() -> StabilitySettings:
    """Get default settings (singleton, reads from environment).

    Returns:
        StabilitySettings instance.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = StabilitySettings()
    return _settings_instance


def configure(
    configurator: Callable[[StabilitySettings], Any],
) -> StabilitySettings:
    """Mutate the process-wide settings in place.

    Args:
        configurator: Called immediately with the default settings.

    Returns:
        The default settings after the call.
    """
    settings = get_settings()
    configurator(settings)
    return settings


def reset_settings() -> None:
    """Reset singleton (for testing)."""
    global _settings_instance
    _settings_instance = None
