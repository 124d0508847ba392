"""Tagged request parameter values.

A request parameter is one of three things, decided where the request is
built:

- a scalar (str, int, float, bool or None), sent as-is
- a FileRef, sent as a file upload in multipart requests
- a StreamSink, marking a JSON request as streaming; the server receives
  ``"stream": true`` and each decoded event goes to the sink
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Union

Scalar = Union[str, int, float, bool, None]


@dataclass(frozen=True)
class FileRef:
    """Reference to a file to upload.

    Attributes:
        path: Path of the file; its basename is sent as the filename.
            Strings are converted to Path.
        stream: Open binary file object. When None, the file at ``path`` is
            read when the request is encoded.
        offset: Stream position the upload starts from. Seekable streams are
            rewound to it on every read, so a retried request sends the
            whole file again.
    """

    path: Path
    stream: IO[bytes] | None = field(default=None, compare=False)
    offset: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))

    @classmethod
    def from_file(cls, file: IO[bytes]) -> FileRef:
        """Wrap an already opened binary file.

        Args:
            file: File object opened in binary mode, with a ``name``.

        Returns:
            FileRef reading from the given file.
        """
        offset = file.tell() if file.seekable() else 0
        return cls(path=Path(os.fsdecode(file.name)), stream=file, offset=offset)

    @property
    def filename(self) -> str:
        """Filename sent in the Content-Disposition header."""
        return self.path.name

    def read(self) -> bytes:
        """Return the file contents.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        if self.stream is not None:
            if self.stream.seekable():
                self.stream.seek(self.offset)
            return self.stream.read()
        return self.path.read_bytes()


@dataclass(frozen=True)
class StreamSink:
    """Callback receiving each event of a streamed response.

    Attributes:
        callback: Called once per decoded JSON event.
    """

    callback: Callable[[Any], Any]

    def __call__(self, event: Any) -> Any:
        return self.callback(event)


ParamValue = Union[Scalar, FileRef, StreamSink]

__all__ = ["FileRef", "ParamValue", "Scalar", "StreamSink"]
