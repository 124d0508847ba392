"""Multipart form encoding for parameter mappings.

Produces the ``files=`` argument understood by httpx. Every field is encoded
as a part, so requests without any upload are still sent as
multipart/form-data instead of being url-encoded.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from stability_ai.exceptions import ArgumentError
from stability_ai.params import FileRef, ParamValue, StreamSink

# (name, (filename, content, content_type))
MultipartField = tuple[str, tuple[str | None, bytes, str | None]]

# Stability does not need a MIME type for uploads, so none is sniffed.
UPLOAD_CONTENT_TYPE = ""


def encode_field_value(value: Any) -> str:
    """Serialize a scalar the way form fields are usually written.

    Args:
        value: Scalar parameter value.

    Returns:
        String form of the value.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    return str(value)


def encode_multipart(
    parameters: Mapping[str, ParamValue] | None,
) -> list[MultipartField]:
    """Convert a parameter mapping into multipart parts.

    FileRef values become file uploads named after the file's basename with
    an empty content type. All other values become plain form fields.

    Args:
        parameters: Request parameters.

    Returns:
        List of parts in the order of the mapping.

    Raises:
        ArgumentError: If a StreamSink is passed; streaming is JSON only.
        FileNotFoundError: If a FileRef points at a missing file.
    """
    fields: list[MultipartField] = []
    for name, value in (parameters or {}).items():
        if isinstance(value, StreamSink):
            msg = "streaming is not supported for multipart requests"
            raise ArgumentError(msg, field=name)
        if isinstance(value, FileRef):
            fields.append((name, (value.filename, value.read(), UPLOAD_CONTENT_TYPE)))
        else:
            fields.append((name, (None, encode_field_value(value).encode("utf-8"), None)))
    return fields


__all__ = ["MultipartField", "encode_field_value", "encode_multipart"]
