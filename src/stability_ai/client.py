"""Stability AI client for image generation.

Wraps HTTPTransport with the Stable Image generation endpoints.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import SecretStr

from stability_ai.exceptions import ArgumentError
from stability_ai.http import HTTPTransport
from stability_ai.models import (
    ACCEPT_IMAGE,
    ACCEPT_JSON,
    CORE_PATH,
    IMAGE_TO_IMAGE,
    SD3_PATH,
)
from stability_ai.params import ParamValue
from stability_ai.response import normalize_response
from stability_ai.settings import StabilitySettings, get_settings

logger = logging.getLogger(__name__)


class StabilityClient:
    """Client for Stability AI image generation.

    Without arguments the client follows the process-wide settings, so later
    ``stability_ai.configure`` calls affect it. Passing ``settings`` or any
    override gives the client its own copy.

    Example:
        ```python
        client = StabilityClient(api_key="sk-...")

        # Raw image bytes
        png = client.generate_core("A beautiful sunset over the city")

        # JSON with a base64 image
        result = client.generate_sd3("A futuristic cityscape at night", json=True)
        print(result.finish_reason)
        ```
    """

    def __init__(
        self,
        *,
        settings: StabilitySettings | None = None,
        api_key: str | None = None,
        api_version: str | None = None,
        request_timeout: float | None = None,
        uri_base: str | None = None,
        extra_headers: Mapping[str, str] | None = None,
        log_errors: bool | None = None,
        configure: Callable[[StabilitySettings], Any] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Explicit settings for this client.
            api_key: Overrides the API key.
            api_version: Overrides the API version path segment.
            request_timeout: Overrides the request timeout in seconds.
            uri_base: Overrides the base URI.
            extra_headers: Overrides the headers added to every request.
            log_errors: Overrides HTTP error logging.
            configure: Called with the client's settings after overrides
                are applied.
        """
        overrides: dict[str, Any] = {}
        if api_key:
            overrides["api_key"] = SecretStr(api_key)
        if api_version:
            overrides["api_version"] = api_version
        if request_timeout:
            overrides["request_timeout"] = request_timeout
        if uri_base:
            overrides["uri_base"] = uri_base
        if extra_headers:
            overrides["extra_headers"] = dict(extra_headers)
        if log_errors is not None:
            overrides["log_errors"] = log_errors

        if overrides:
            base = settings if settings is not None else get_settings()
            settings = base.model_copy(update={"extra_headers": dict(base.extra_headers)})
            # Assignment runs the field validators; model_copy(update=) does not.
            for name, value in overrides.items():
                setattr(settings, name, value)

        self._settings = settings
        self.http = HTTPTransport(settings)

        if configure is not None:
            configure(self.settings)

        logger.debug("Initialized Stability client for %s", self.settings.uri_base)

    @property
    def settings(self) -> StabilitySettings:
        """Settings used by this client."""
        return self._settings if self._settings is not None else get_settings()

    # =========================================================================
    # Generation
    # =========================================================================

    def generate_core(
        self,
        prompt: str,
        options: Mapping[str, ParamValue] | None = None,
        json: bool = False,
    ) -> Any:
        """Generate an image from text with Stable Image Core.

        Args:
            prompt: Description of the desired image. ``(word:weight)``
                adjusts the weight of individual words.
            options: Extra form fields: aspect_ratio, negative_prompt, seed,
                style_preset, output_format.
            json: Return a JSON result with a base64 ``image`` instead of raw
                image bytes.

        Returns:
            ResponseBody when ``json`` is true, otherwise image bytes.

        Raises:
            ConfigurationError: If no API key is configured.
            TransportError: On non-2xx responses or connection failures.
            ServerError: If the response is empty or reports an error.
        """
        headers = {"Accept": ACCEPT_JSON if json else ACCEPT_IMAGE}
        parameters = {"prompt": prompt, **(options or {})}
        response = self.http.multipart_post(CORE_PATH, headers=headers, parameters=parameters)
        return normalize_response(response)

    def generate_sd3(
        self,
        prompt: str,
        options: Mapping[str, ParamValue] | None = None,
        json: bool = False,
    ) -> Any:
        """Generate an image with Stable Diffusion 3.

        Args:
            prompt: Description of the desired image.
            options: Extra form fields: aspect_ratio, mode
                ("text-to-image" or "image-to-image"), image (FileRef,
                required for image-to-image), strength (required for
                image-to-image), negative_prompt, model ("sd3" or
                "sd3-turbo"), seed, output_format.
            json: Return a JSON result with a base64 ``image`` instead of raw
                image bytes.

        Returns:
            ResponseBody when ``json`` is true, otherwise image bytes.

        Raises:
            ArgumentError: If image-to-image mode lacks image or strength.
            ConfigurationError: If no API key is configured.
            TransportError: On non-2xx responses or connection failures.
            ServerError: If the response is empty or reports an error.
        """
        headers = {"Accept": ACCEPT_JSON if json else ACCEPT_IMAGE}
        parameters = {"prompt": prompt, **(options or {})}

        if parameters.get("mode") == IMAGE_TO_IMAGE:
            if parameters.get("image") is None:
                msg = "image is required for image-to-image mode"
                raise ArgumentError(msg, field="image")
            if parameters.get("strength") is None:
                msg = "strength is required for image-to-image mode"
                raise ArgumentError(msg, field="strength")

        response = self.http.multipart_post(SD3_PATH, headers=headers, parameters=parameters)
        return normalize_response(response)
