"""Tests for delivery payloads and error sinks."""

import io
import sys

from logship.delivery import LogPayload, NullSink, PayloadOrigin, TextStreamSink, default_error_sink


class TestLogPayload:
    def test_from_log(self):
        payload = LogPayload.from_log(["a", "b"])
        assert payload.lines == ("a", "b")
        assert payload.origin is PayloadOrigin.BUILD_LOG
        assert not payload.is_diagnostic
        assert len(payload) == 2

    def test_from_generator(self):
        payload = LogPayload.from_log(line for line in ["x", "y"])
        assert payload.lines == ("x", "y")

    def test_diagnostic_splits_on_newlines(self):
        payload = LogPayload.diagnostic("Unable to serialize log data.\nTraceback\nOSError: x")
        assert payload.lines == ("Unable to serialize log data.", "Traceback", "OSError: x")
        assert payload.is_diagnostic

    def test_diagnostic_single_line(self):
        assert LogPayload.diagnostic("boom").lines == ("boom",)

    def test_origin_values(self):
        assert PayloadOrigin.BUILD_LOG.value == "build_log"
        assert PayloadOrigin.DIAGNOSTIC.value == "diagnostic"



# ===========================================================================
# Error sinks
# ===========================================================================


class TestDefaultErrorSink:
    def test_stderr_buffer(self):
        assert default_error_sink() is sys.stderr.buffer

    def test_text_only_stderr_wrapped(self, monkeypatch):
        stderr = io.StringIO()
        monkeypatch.setattr(sys, "stderr", stderr)

        sink = default_error_sink("latin-1")
        sink.write("café\n".encode("latin-1"))
        sink.flush()

        assert isinstance(sink, TextStreamSink)
        assert stderr.getvalue() == "café\n"

    def test_missing_stderr_falls_back_to_original(self, monkeypatch):
        original = io.TextIOWrapper(io.BytesIO())
        monkeypatch.setattr(sys, "stderr", None)
        monkeypatch.setattr(sys, "__stderr__", original)
        assert default_error_sink() is original.buffer

    def test_no_stderr_at_all(self, monkeypatch):
        monkeypatch.setattr(sys, "stderr", None)
        monkeypatch.setattr(sys, "__stderr__", None)
        sink = default_error_sink()
        assert isinstance(sink, NullSink)
        assert sink.write(b"dropped") == 7
        sink.flush()


class TestTextStreamSink:
    def test_undecodable_bytes_replaced(self):
        stream = io.StringIO()
        TextStreamSink(stream).write(b"ok \xff")
        assert stream.getvalue() == "ok �"
