"""Helpers for logging and for handling generated images."""

from __future__ import annotations

import base64
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from stability_ai.exceptions import ServerError

if TYPE_CHECKING:
    from pathlib import Path

# Patterns for dangerous characters in logs
CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x1f\x7f-\x9f]")
NEWLINE_PATTERN = re.compile(r"[\r\n]")


def sanitize_for_logging(value: Any, max_length: int = 500) -> str:
    r"""Make a value safe to put in a log line.

    Newlines become spaces, other control characters are dropped, and the
    result is truncated.

    Args:
        value: Value to sanitize (any type)
        max_length: Maximum length of output (default: 500)

    Returns:
        Sanitized string safe for logging

    Example:
        >>> sanitize_for_logging('{"error":\n"bad"}')
        '{"error": "bad"}'
    """
    if value is None:
        return "None"
    if isinstance(value, (bytes, bytearray)):
        text = bytes(value).decode("utf-8", errors="replace")
    else:
        text = str(value)

    text = NEWLINE_PATTERN.sub(" ", text)
    text = CONTROL_CHARS_PATTERN.sub("", text)

    if len(text) > max_length:
        return text[:max_length] + "... (truncated)"
    return text


def decode_base64_image(base64_data: str) -> bytes:
    """Decode base64 image data to bytes.

    Args:
        base64_data: Base64-encoded image data.

    Returns:
        Raw image bytes.
    """
    return base64.standard_b64decode(base64_data)


def get_file_extension(output_format: str) -> str:
    """Get file extension for an output format or MIME type.

    Args:
        output_format: Output format ("png", "jpeg", "webp") or MIME type
            (e.g., "image/png").

    Returns:
        File extension including the dot (e.g., ".png").
    """
    extensions = {
        "png": ".png",
        "jpeg": ".jpg",
        "jpg": ".jpg",
        "webp": ".webp",
    }
    key = output_format.lower().removeprefix("image/")
    return extensions.get(key, ".png")


def image_bytes(result: Any) -> bytes:
    """Extract image bytes from a generation result.

    Args:
        result: Raw bytes (``json=False``) or a mapping carrying a base64
            ``image`` field (``json=True``).

    Returns:
        Raw image bytes.

    Raises:
        ServerError: If the result carries no image.
    """
    if isinstance(result, (bytes, bytearray)):
        return bytes(result)
    if isinstance(result, Mapping) and result.get("image"):
        return decode_base64_image(result["image"])
    msg = "Response does not contain image data"
    raise ServerError(msg)


def save_image(result: Any, output_path: Path) -> Path:
    """Write a generation result to disk.

    Args:
        result: Raw bytes or a JSON result with a base64 ``image`` field.
        output_path: Destination file. Parent directories are created.

    Returns:
        The path written.
    """
    data = image_bytes(result)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "wb") as f:
        f.write(data)
    return output_path
