"""HTTP transport for the Stability API.

Builds one httpx client per request from the current settings, sends JSON or
multipart bodies, optionally decodes streamed events, and converts httpx
failures into TransportError.
"""

from __future__ import annotations

import json
import logging
import secrets
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from stability_ai.exceptions import ArgumentError, ServerError, TransportError
from stability_ai.multipart import encode_multipart
from stability_ai.params import FileRef, ParamValue, StreamSink
from stability_ai.settings import StabilitySettings, get_settings
from stability_ai.streaming import JSONStreamDecoder
from stability_ai.utils import sanitize_for_logging

logger = logging.getLogger(__name__)

EventHook = Callable[..., Any]


@dataclass
class ConnectionBuilder:
    """Options for the httpx client backing a single request.

    Transport customizers receive this object before the client is built and
    may add event hooks, swap the transport or pass extra client options.

    Attributes:
        timeout: Request timeout in seconds.
        multipart: Whether the request will carry a multipart body. Not used
            by ``build``; customizers may read it to treat uploads differently.
        event_hooks: httpx ``request`` and ``response`` hooks.
        transport: Replacement httpx transport (e.g. ``httpx.MockTransport``).
        options: Extra keyword arguments for ``httpx.Client``.
    """

    timeout: float
    multipart: bool = False
    event_hooks: dict[str, list[EventHook]] = field(
        default_factory=lambda: {"request": [], "response": []}
    )
    transport: httpx.BaseTransport | None = None
    options: dict[str, Any] = field(default_factory=dict)

    def build(self) -> httpx.Client:
        """Create the configured httpx client."""
        return httpx.Client(
            timeout=self.timeout,
            event_hooks=self.event_hooks,
            transport=self.transport,
            **self.options,
        )


def log_error_response(response: httpx.Response) -> None:
    """Response hook logging HTTP error responses.

    Args:
        response: Response about to be returned by httpx.
    """
    if not response.is_error:
        return
    response.read()
    logger.error(
        "Stability API error: %s %s returned %d: %s",
        response.request.method,
        response.request.url,
        response.status_code,
        sanitize_for_logging(response.text),
    )


def parse_body(response: httpx.Response) -> Any:
    """Decode a buffered response body.

    Args:
        response: Fully read response.

    Returns:
        None for an empty body, parsed JSON for JSON content types, raw
        bytes otherwise (e.g. ``image/*``).

    Raises:
        ServerError: If a JSON response cannot be parsed.
    """
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "").lower()
    if "json" not in content_type:
        return response.content
    try:
        return response.json()
    except ValueError as e:
        msg = "Invalid JSON in response from Stability"
        raise ServerError(
            msg, details={"body": sanitize_for_logging(response.text)}
        ) from e


def _json_body(parameters: Mapping[str, ParamValue]) -> bytes:
    for name, value in parameters.items():
        if isinstance(value, (FileRef, StreamSink)):
            msg = f"{type(value).__name__} is not allowed in a JSON request body"
            raise ArgumentError(msg, field=name)
    return json.dumps(parameters).encode("utf-8")


class HTTPTransport:
    """Low-level access to the Stability API.

    Example:
        ```python
        transport = HTTPTransport(StabilitySettings(api_key="sk-..."))

        balance = transport.get("/user/balance")

        events = []
        transport.post("/some/stream", {"prompt": "hi", "stream": StreamSink(events.append)})
        ```
    """

    def __init__(self, settings: StabilitySettings | None = None) -> None:
        """Initialize the transport.

        Args:
            settings: Settings to use. If not provided, the process-wide
                settings are read on every request.
        """
        self._settings = settings

    @property
    def settings(self) -> StabilitySettings:
        """Settings in effect for the next request."""
        return self._settings if self._settings is not None else get_settings()

    # =========================================================================
    # Request Operations
    # =========================================================================

    def get(self, path: str) -> Any:
        """Send a GET request.

        Args:
            path: API path below the versioned base URI.

        Returns:
            The parsed response body.

        Raises:
            ConfigurationError: If no API key is configured.
            TransportError: On non-2xx responses or connection failures.
        """
        return self._request("GET", path, headers=self.default_headers())

    def post(self, path: str, parameters: Mapping[str, ParamValue] | None = None) -> Any:
        """Send a JSON POST request.

        When ``parameters["stream"]`` is a StreamSink the server is sent
        ``"stream": true`` and every event of the response is passed to the
        sink as it arrives.

        Args:
            path: API path below the versioned base URI.
            parameters: JSON body parameters.

        Returns:
            The parsed response body, or None for streamed requests.

        Raises:
            ConfigurationError: If no API key is configured.
            ArgumentError: If a FileRef is passed.
            TransportError: On non-2xx responses or connection failures.
        """
        body = dict(parameters or {})
        sink = body.get("stream")
        headers = self.default_headers()

        if isinstance(sink, StreamSink):
            body["stream"] = True
            self._stream("POST", path, sink, headers=headers, content=_json_body(body))
            return None

        return self._request("POST", path, headers=headers, content=_json_body(body))

    def multipart_post(
        self,
        path: str,
        headers: Mapping[str, str] | None = None,
        parameters: Mapping[str, ParamValue] | None = None,
    ) -> Any:
        """Send a multipart/form-data POST request.

        Call headers override the default and configured headers.

        Args:
            path: API path below the versioned base URI.
            headers: Per-call headers, e.g. ``Accept``.
            parameters: Form fields; FileRef values are sent as uploads.

        Returns:
            The parsed response body.

        Raises:
            ConfigurationError: If no API key is configured.
            ArgumentError: If a StreamSink is passed.
            TransportError: On non-2xx responses or connection failures.
        """
        merged = self.default_headers()
        merged.update(headers or {})
        merged["Content-Type"] = f"multipart/form-data; boundary={secrets.token_hex(16)}"
        files = encode_multipart(parameters)
        return self._request("POST", path, headers=merged, multipart=True, files=files)

    def delete(self, path: str) -> Any:
        """Send a DELETE request.

        Args:
            path: API path below the versioned base URI.

        Returns:
            The parsed response body.

        Raises:
            ConfigurationError: If no API key is configured.
            TransportError: On non-2xx responses or connection failures.
        """
        return self._request("DELETE", path, headers=self.default_headers())

    # =========================================================================
    # Helpers
    # =========================================================================

    def uri(self, path: str) -> str:
        """Join base URI, API version and path with single slashes."""
        settings = self.settings
        parts = [
            settings.uri_base.rstrip("/"),
            settings.api_version.strip("/"),
            path.lstrip("/"),
        ]
        return "/".join(part for part in parts if part)

    def default_headers(self) -> httpx.Headers:
        """Authorization and JSON content type, then configured extra headers.

        Raises:
            ConfigurationError: If no API key is configured.
        """
        settings = self.settings
        headers = httpx.Headers(
            {
                "Authorization": f"Bearer {settings.get_api_key()}",
                "Content-Type": "application/json",
            }
        )
        headers.update(settings.extra_headers)
        return headers

    def _connection(self, multipart: bool = False) -> httpx.Client:
        settings = self.settings
        builder = ConnectionBuilder(timeout=settings.request_timeout, multipart=multipart)
        if settings.log_errors:
            builder.event_hooks["response"].append(log_error_response)
        if settings.transport_customizer is not None:
            settings.transport_customizer(builder)
        return builder.build()

    def _request(
        self,
        method: str,
        path: str,
        *,
        headers: httpx.Headers,
        multipart: bool = False,
        **kwargs: Any,
    ) -> Any:
        url = self.uri(path)
        with self._connection(multipart=multipart) as client:
            logger.debug("%s %s", method, url)
            try:
                response = client.request(method, url, headers=headers, **kwargs)
                response.raise_for_status()
            except httpx.HTTPError as e:
                self._handle_http_error(e)
                raise
            return parse_body(response)

    def _stream(
        self,
        method: str,
        path: str,
        sink: StreamSink,
        *,
        headers: httpx.Headers,
        **kwargs: Any,
    ) -> None:
        url = self.uri(path)
        decoder = JSONStreamDecoder(sink)
        with self._connection() as client:
            logger.debug("%s %s (streaming)", method, url)
            try:
                with client.stream(method, url, headers=headers, **kwargs) as response:
                    if response.is_error:
                        response.read()
                    response.raise_for_status()
                    for chunk in response.iter_text():
                        decoder(chunk)
            except httpx.HTTPError as e:
                self._handle_http_error(e)
                raise
        logger.debug("Delivered %d streamed events from %s", decoder.events, url)

    def _handle_http_error(self, error: httpx.HTTPError) -> None:
        """Convert httpx exceptions to TransportError.

        Args:
            error: Exception raised by httpx.

        Raises:
            TransportError: Always.
        """
        if isinstance(error, httpx.HTTPStatusError):
            response = error.response
            try:
                body = response.json()
            except ValueError:
                body = response.text
            msg = (
                f"HTTP {response.status_code} from "
                f"{response.request.method} {response.request.url}"
            )
            raise TransportError(msg, status_code=response.status_code, body=body) from error

        if isinstance(error, httpx.TimeoutException):
            msg = f"Request timed out after {self.settings.request_timeout}s"
            raise TransportError(msg) from error

        if isinstance(error, httpx.RequestError):
            msg = f"Connection error: {error}"
            raise TransportError(msg) from error

        raise TransportError(str(error)) from error


__all__ = ["ConnectionBuilder", "HTTPTransport", "log_error_response", "parse_body"]
