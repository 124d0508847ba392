"""Decoding of streamed ``data:``/``error:`` JSON events.

A streamed response is a raw byte stream in which JSON objects are embedded
behind ``data: `` or ``error: `` markers. Each chunk handed over by the HTTP
layer is scanned on its own. A JSON object split across two chunks is not
reassembled, so both halves are dropped as malformed.

Example:
    ```python
    events = []
    decode_chunk('data: {"a":1}\\nerror: {"b":2}\\ndata: not-json', events.append)
    # events == [{"a": 1}, {"b": 2}]
    ```
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Iterator
from typing import Any

logger = logging.getLogger(__name__)

# Marker, then everything from the first "{" to the last "}" on the line.
EVENT_PATTERN = re.compile(r"(?:data|error): (\{.*\})", re.IGNORECASE)


def iter_json_fragments(chunk: str | bytes) -> Iterator[str]:
    """Yield the JSON candidates embedded in a chunk, left to right.

    Args:
        chunk: Raw chunk from the response body.

    Yields:
        The text of each ``{...}`` following a data or error marker.
    """
    if isinstance(chunk, bytes):
        chunk = chunk.decode("utf-8", errors="replace")
    for match in EVENT_PATTERN.finditer(chunk):
        yield match.group(1)


def decode_chunk(chunk: str | bytes, sink: Callable[[Any], Any]) -> int:
    """Parse every event in a chunk and hand it to the sink.

    Fragments that are not valid JSON are skipped; scanning continues with
    the next fragment.

    Args:
        chunk: Raw chunk from the response body.
        sink: Called once per successfully parsed event.

    Returns:
        Number of events delivered.
    """
    delivered = 0
    for fragment in iter_json_fragments(chunk):
        try:
            event = json.loads(fragment)
        except json.JSONDecodeError:
            logger.debug("Skipping malformed stream fragment (%d chars)", len(fragment))
            continue
        sink(event)
        delivered += 1
    return delivered


class JSONStreamDecoder:
    """Chunk callback bound to a single sink.

    Keeps no state between chunks apart from the running event count.
    """

    def __init__(self, sink: Callable[[Any], Any]) -> None:
        self.sink = sink
        self.events = 0

    def __call__(self, chunk: str | bytes) -> int:
        delivered = decode_chunk(chunk, self.sink)
        self.events += delivered
        return delivered


__all__ = ["EVENT_PATTERN", "JSONStreamDecoder", "decode_chunk", "iter_json_fragments"]
