"""Validation of buffered API responses.

``normalize_response`` turns a parsed body into either a usable result or a
ServerError. Mapping bodies come back as ResponseBody, which accepts keys in
any case and as attributes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from stability_ai.exceptions import ServerError

EMPTY_RESPONSE_MESSAGE = (
    "Empty response from Stability. Might be worth retrying once or twice."
)


class ResponseBody(dict):
    """Dictionary with relaxed key lookup.

    ``body["image"]``, ``body["IMAGE"]`` and ``body.image`` all return the
    same value. Nested mappings, including those inside lists, are wrapped
    too.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        for key, value in (data or {}).items():
            self[key] = _wrap(value)

    def _resolve(self, key: Any) -> Any:
        if dict.__contains__(self, key) or not isinstance(key, str):
            return key
        lowered = key.lower()
        for existing in self.keys():
            if isinstance(existing, str) and existing.lower() == lowered:
                return existing
        return key

    def __getitem__(self, key: Any) -> Any:
        return super().__getitem__(self._resolve(key))

    def __contains__(self, key: object) -> bool:
        return super().__contains__(self._resolve(key))

    def get(self, key: Any, default: Any = None) -> Any:
        return super().get(self._resolve(key), default)

    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError:
            msg = f"{type(self).__name__!r} object has no attribute {name!r}"
            raise AttributeError(msg) from None


def _wrap(value: Any) -> Any:
    if isinstance(value, Mapping) and not isinstance(value, ResponseBody):
        return ResponseBody(value)
    if isinstance(value, list):
        return [_wrap(item) for item in value]
    return value


def is_blank(value: Any) -> bool:
    """Return True for None, False, whitespace-only strings and empty containers."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (bytes, bytearray, Mapping, list, tuple)):
        return len(value) == 0
    return False


def extract_error_message(body: Any) -> str | None:
    """Return ``body["error"]["message"]`` if present and not blank."""
    if not isinstance(body, Mapping):
        return None
    error = body.get("error")
    if not isinstance(error, Mapping):
        return None
    message = error.get("message")
    if is_blank(message):
        return None
    return str(message)


def normalize_response(body: Any) -> Any:
    """Validate a buffered response body.

    Args:
        body: Parsed JSON value, raw bytes, or None.

    Returns:
        ResponseBody for mappings, otherwise the body unchanged.

    Raises:
        ServerError: If the body is blank or reports an error message.
    """
    if is_blank(body):
        raise ServerError(EMPTY_RESPONSE_MESSAGE)

    message = extract_error_message(body)
    if message is not None:
        raise ServerError(message, details={"body": body})

    if isinstance(body, Mapping):
        return ResponseBody(body)
    return body


__all__ = [
    "EMPTY_RESPONSE_MESSAGE",
    "ResponseBody",
    "extract_error_message",
    "is_blank",
    "normalize_response",
]
