"""
Log delivery pipeline.

The LogsWriter pulls a build's log, substitutes a diagnostic payload when
the log cannot be read, and stops delivering for good after any such
failure.
"""

from logship.delivery.payload import LogPayload, PayloadOrigin
from logship.delivery.sinks import NullSink, TextStreamSink, default_error_sink
from logship.delivery.writer import SERIALIZE_ERROR_MESSAGE, UNBOUNDED_LINES, LogsWriter

__all__ = [
    "LogPayload",
    "LogsWriter",
    "NullSink",
    "PayloadOrigin",
    "SERIALIZE_ERROR_MESSAGE",
    "TextStreamSink",
    "UNBOUNDED_LINES",
    "default_error_sink",
]
