"""Diagnostic error sinks."""

from __future__ import annotations

import sys
from typing import BinaryIO, TextIO


class TextStreamSink:
    """
    Byte sink over a text stream.

    Used when stderr has been replaced by a text-only stream (an IDE
    console, a notebook, ``io.StringIO`` in tests).
    """

    def __init__(self, stream: TextIO, encoding: str = "utf-8"):
        self._stream = stream
        self._encoding = encoding

    def write(self, data: bytes) -> int:
        self._stream.write(data.decode(self._encoding, errors="replace"))
        return len(data)

    def flush(self) -> None:
        self._stream.flush()


class NullSink:
    """Discards diagnostics; used when the process has no stderr at all."""

    def write(self, data: bytes) -> int:
        return len(data)

    def flush(self) -> None:
        pass


def default_error_sink(encoding: str = "utf-8") -> BinaryIO | TextStreamSink | NullSink:
    """The process's standard error, as a byte stream.

    Falls back to the interpreter's original stderr when the current one is
    missing, and decodes into text-only replacements with ``encoding``.
    """
    for stream in (sys.stderr, sys.__stderr__):
        if stream is None:
            continue
        buffer = getattr(stream, "buffer", None)
        if buffer is not None:
            return buffer
        return TextStreamSink(stream, encoding)
    return NullSink()
