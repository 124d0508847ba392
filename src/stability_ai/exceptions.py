"""Exception hierarchy for the Stability AI client.

Every error raised by this package inherits from StabilityError so callers can
catch the whole family at once, or pick the layer they care about.

Exception Hierarchy:
    StabilityError (base for all client exceptions)
    ├── ConfigurationError (missing or invalid settings, e.g. no API key)
    ├── ArgumentError (invalid caller-supplied parameter combination)
    ├── TransportError (non-2xx response, connection failure, timeout)
    └── ServerError (empty response or API-reported error message)

Usage:
    from stability_ai.exceptions import ServerError, TransportError

    try:
        client.generate_core("A lighthouse at dusk", json=True)
    except TransportError as e:
        print(e.status_code, e.body)
    except ServerError as e:
        print(f"Stability said: {e}")

None of these are retried internally.
"""

from __future__ import annotations

from typing import Any


class StabilityError(Exception):
    """Base exception for all Stability AI client errors.

    Attributes:
        message: Human-readable error message.
        details: Additional context about the error (optional).
        error_code: Machine-readable error code (optional).
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Additional context as key-value pairs.
            error_code: Machine-readable error code.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.error_code = error_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary.

        Returns:
            Dictionary with error details suitable for JSON serialization.
        """
        result: dict[str, Any] = {
            "error": self.__class__.__name__,
            "message": self.message,
        }
        if self.error_code:
            result["code"] = self.error_code
        if self.details:
            result["details"] = self.details
        return result


class ConfigurationError(StabilityError):
    """Configuration-related errors.

    Raised when the client is used without required settings, most notably
    when the API key was never provided.

    Example:
        >>> raise ConfigurationError("Stability AI api key missing!")
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(
            message, details=details, error_code=error_code or "CONFIGURATION_ERROR"
        )


class ArgumentError(StabilityError, ValueError):
    """Invalid parameter combination supplied by the caller.

    Also a ValueError, so generic argument handling keeps working.

    Example:
        >>> raise ArgumentError(
        ...     "strength is required for image-to-image mode",
        ...     field="strength",
        ... )
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        """Initialize argument error with field context.

        Args:
            message: Description of the invalid argument.
            field: Name of the offending parameter.
            details: Additional context.
            error_code: Machine-readable error code.
        """
        details = dict(details or {})
        if field:
            details["field"] = field
        super().__init__(
            message, details=details, error_code=error_code or "INVALID_ARGUMENT"
        )
        self.field = field


class TransportError(StabilityError):
    """HTTP-level failure.

    Raised for non-2xx responses and for connection failures or timeouts.
    For connection failures status_code and body are None.

    Attributes:
        status_code: HTTP status code, if a response was received.
        body: Response body (parsed JSON when possible), if any.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: Any = None,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        """Initialize transport error.

        Args:
            message: Description of the failure.
            status_code: HTTP status code from the API.
            body: Response body returned with the failure.
            details: Additional context.
            error_code: Machine-readable error code.
        """
        details = dict(details or {})
        if status_code:
            details["status_code"] = status_code
        super().__init__(
            message, details=details, error_code=error_code or "TRANSPORT_ERROR"
        )
        self.status_code = status_code
        self.body = body


class ServerError(StabilityError):
    """The API answered, but with nothing usable.

    Raised for empty bodies and for bodies carrying an ``error.message``.
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(
            message, details=details, error_code=error_code or "SERVER_ERROR"
        )


__all__ = [
    "ArgumentError",
    "ConfigurationError",
    "ServerError",
    "StabilityError",
    "TransportError",
]
