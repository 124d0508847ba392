"""Stability AI API client package.

Provides a client for the Stability AI image generation API, including JSON
and multipart requests, streamed event decoding and error classification.

Example:
    ```python
    import stability_ai
    from stability_ai import FileRef, StabilityClient

    stability_ai.configure(lambda config: setattr(config, "api_key", "sk-..."))
    client = StabilityClient()

    result = client.generate_core("A beautiful sunset over the city", json=True)
    print(result["finish_reason"], result.image[:16])

    with open("summer.jpg", "rb") as f:
        winter = client.generate_sd3(
            "Make it winter",
            options={"mode": "image-to-image", "image": FileRef.from_file(f), "strength": 0.75},
        )
    ```

Streaming Example:
    ```python
    from stability_ai import StreamSink

    client.http.post("/some/streaming/endpoint", {"prompt": "...", "stream": StreamSink(print)})
    ```
"""

from stability_ai.client import StabilityClient
from stability_ai.exceptions import (
    ArgumentError,
    ConfigurationError,
    ServerError,
    StabilityError,
    TransportError,
)
from stability_ai.http import ConnectionBuilder, HTTPTransport
from stability_ai.params import FileRef, StreamSink
from stability_ai.response import ResponseBody, normalize_response
from stability_ai.settings import (
    StabilitySettings,
    configure,
    get_settings,
    reset_settings,
)
from stability_ai.streaming import JSONStreamDecoder, decode_chunk

__all__ = [
    "ArgumentError",
    "ConfigurationError",
    "ConnectionBuilder",
    "FileRef",
    "HTTPTransport",
    "JSONStreamDecoder",
    "ResponseBody",
    "ServerError",
    "StabilityClient",
    "StabilityError",
    "StabilitySettings",
    "StreamSink",
    "TransportError",
    "configure",
    "decode_chunk",
    "get_settings",
    "normalize_response",
    "reset_settings",
]

__version__ = "0.1.0"
