"""Pytest configuration for stability-ai tests."""

from __future__ import annotations

import base64
import re
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import httpx
import pytest

from stability_ai.settings import StabilitySettings, reset_settings

if TYPE_CHECKING:
    from pathlib import Path

# Test constants
TEST_API_KEY = "sk-test-key-12345"
TEST_URI_BASE = "https://stability.test"
TEST_IMAGE_B64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8DwHwAFBQIA"
    "X8jx0gAAAABJRU5ErkJggg=="
)

SETTINGS_ENV_VARS = [
    "STABILITY_API_KEY",
    "STABILITY_API_VERSION",
    "STABILITY_URI_BASE",
    "STABILITY_REQUEST_TIMEOUT",
    "STABILITY_EXTRA_HEADERS",
    "STABILITY_LOG_ERRORS",
]


class StubServer:
    """In-process Stability API stand-in built on httpx.MockTransport.

    Records every request and answers with the configured response.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._reply: Callable[[httpx.Request], httpx.Response] = lambda request: (
            httpx.Response(200, json={})
        )

    def respond(self, status_code: int = 200, **kwargs: Any) -> None:
        """Answer every following request with a fresh response."""
        self._reply = lambda request: httpx.Response(status_code, **kwargs)

    def respond_with(self, reply: Callable[[httpx.Request], httpx.Response]) -> None:
        """Answer requests with a custom handler."""
        self._reply = reply

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self._reply(request)

    def install(self, builder: Any) -> None:
        """Transport customizer routing requests to this stub."""
        builder.transport = httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


def parse_multipart(request: httpx.Request) -> dict[str, tuple[str | None, bytes]]:
    """Split a multipart request body into ``{name: (filename, content)}``."""
    content_type = request.headers["content-type"]
    boundary = content_type.split("boundary=", 1)[1].encode()
    fields: dict[str, tuple[str | None, bytes]] = {}
    for part in request.content.split(b"--" + boundary):
        if not part.strip() or part.strip() == b"--":
            continue
        raw_headers, _, content = part.lstrip(b"\r\n").partition(b"\r\n\r\n")
        disposition = raw_headers.decode()
        name = re.search(r'name="([^"]*)"', disposition).group(1)
        filename_match = re.search(r'filename="([^"]*)"', disposition)
        filename = filename_match.group(1) if filename_match else None
        fields[name] = (filename, content.removesuffix(b"\r\n"))
    return fields


@pytest.fixture(autouse=True)
def reset_settings_after_test(monkeypatch: pytest.MonkeyPatch):
    """Isolate tests from the environment and reset the settings singleton."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set the API key in the environment."""
    monkeypatch.setenv("STABILITY_API_KEY", TEST_API_KEY)


@pytest.fixture
def stub_server() -> StubServer:
    """Stub server answering with an empty JSON object."""
    return StubServer()


@pytest.fixture
def settings(stub_server: StubServer) -> StabilitySettings:
    """Settings with a test key, routed to the stub server."""
    return StabilitySettings(
        api_key=TEST_API_KEY,
        uri_base=TEST_URI_BASE,
        transport_customizer=stub_server.install,
    )


@pytest.fixture
def multipart_parser() -> Callable[[httpx.Request], dict[str, tuple[str | None, bytes]]]:
    """Server-side multipart splitter."""
    return parse_multipart


@pytest.fixture
def sample_image_bytes() -> bytes:
    """Return sample PNG image bytes (1x1 red pixel)."""
    return base64.b64decode(TEST_IMAGE_B64)


@pytest.fixture
def sample_image_path(tmp_path: Path, sample_image_bytes: bytes) -> Path:
    """Create a temporary sample image file."""
    image_path = tmp_path / "sample_image.png"
    image_path.write_bytes(sample_image_bytes)
    return image_path
