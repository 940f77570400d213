"""Build log delivery pipeline.

Manifesto:
    Shipping logs must never take the build down.  A LogsWriter pulls the
    build's log, hands it to a transport with the build's metadata, and
    when the log store fails it ships an explanation instead of the log,
    reports the failure once on its error sink, and goes quiet for the
    rest of the build.

Architecture:
    ::

        LogsWriter(build, error_sink, listener, encoding)
            │ resolve metadata (once, may raise)
            │ resolve host url (never raises)
            ▼
        write_build_log(max_lines)
            │ broken? ──────────────► no-op
            │ build.fetch_log(n)
            │   ok  ──► LogPayload(BUILD_LOG)
            │   OSError ──► _log_error_message() ──► latch broken
            │               LogPayload(DIAGNOSTIC)
            ▼
        transport.deliver(lines, metadata)

    The broken latch only ever goes False → True and is written only by
    ``_log_error_message``. Instances are not safe for concurrent use;
    callers serialize ``write``/``write_build_log`` per build.

Tags:
    logship, delivery, pipeline, broken-latch, log-shipping

Doc-Types:
    api-reference
"""

from __future__ import annotations

import sys
import traceback
from collections.abc import Sequence
from typing import Any

from logship.core.errors import InvalidConfigError, categorize_error, is_retryable
from logship.core.protocols import ErrorSink, ExecutionUnit, HostLocator, LogTransport, MetadataProvider
from logship.delivery.payload import LogPayload
from logship.delivery.sinks import default_error_sink
from logship.framework.logging import get_logger, set_context
from logship.metadata.bundle import BuildMetadata
from logship.metadata.host import StaticHostLocator
from logship.metadata.provider import EnvironmentMetadataProvider

log = get_logger(__name__)

UNBOUNDED_LINES = sys.maxsize
SERIALIZE_ERROR_MESSAGE = "Unable to serialize log data."


def _check_text_encoding(encoding: str) -> None:
    # Bytes-to-bytes codecs such as rot13 or hex pass codecs.lookup but cannot encode text.
    try:
        "".encode(encoding)
    except LookupError as e:
        raise InvalidConfigError("encoding", encoding) from e


class LogsWriter:
    """
    Ships the log of one build to a LogTransport.

    Create one writer per build attempt. Construction resolves the build's
    metadata and propagates any I/O error or interruption raised while
    doing so. The build's identifiers then replace the current
    logging context, so events logged by transports carry the job and build
    number.

    Args:
        build: The build whose log is shipped (``None`` disables delivery)
        error_sink: Byte stream for diagnostics, stderr when omitted
        listener: Build output listener, handed to the metadata provider
        encoding: Charset used to encode diagnostics
        transport: Where log lines are delivered
        metadata_provider: Resolves BuildMetadata (environment-based by default)
        host_locator: Resolves the hosting service's root URL
    """

    def __init__(
        self,
        build: ExecutionUnit | None,
        error_sink: ErrorSink | None = None,
        listener: Any = None,
        encoding: str = "utf-8",
        *,
        transport: LogTransport,
        metadata_provider: MetadataProvider | None = None,
        host_locator: HostLocator | None = None,
    ):
        _check_text_encoding(encoding)

        self._error_sink = error_sink if error_sink is not None else default_error_sink(encoding)
        self._build = build
        self._listener = listener
        self._transport = transport
        self._encoding = encoding
        self._broken = False

        provider = metadata_provider or EnvironmentMetadataProvider()
        metadata = provider.resolve(build, listener) if build is not None else None

        self._host_url = (host_locator or StaticHostLocator()).root_url()
        if metadata is not None and self._host_url:
            metadata = metadata.with_host_url(self._host_url)
        self._metadata: BuildMetadata | None = metadata

        if metadata is not None:
            set_context(
                job=metadata.job_name,
                build_number=metadata.build_number,
                build_id=metadata.build_id,
                node=metadata.node_name,
            )
        self._log = log

    @property
    def charset(self) -> str:
        """Encoding used for diagnostics written to the error sink."""
        return self._encoding

    @property
    def build(self) -> ExecutionUnit | None:
        return self._build

    @property
    def metadata(self) -> BuildMetadata | None:
        return self._metadata

    @property
    def host_url(self) -> str:
        return self._host_url

    def is_connection_broken(self) -> bool:
        """True if delivery failed earlier or the writer was created without a build or metadata."""
        return self._broken or self._build is None or self._metadata is None

    def write(self, line: object) -> None:
        """Deliver a single line. Empty lines and broken writers are ignored."""
        if self.is_connection_broken():
            return
        text = "" if line is None else str(line)
        if not text:
            return
        self.write_lines([text])

    def write_lines(self, lines: Sequence[str]) -> None:
        """Deliver an ordered batch of lines."""
        if self.is_connection_broken():
            return
        self._deliver(LogPayload.from_log(lines))

    def write_build_log(self, max_lines: int) -> LogPayload | None:
        """
        Deliver the most recent ``max_lines`` lines of the build log.

        A negative ``max_lines`` ships the whole log. If the log cannot be
        read, a diagnostic payload is shipped in its place and the writer
        stays broken afterwards.

        Returns:
            The payload handed to the transport, or None if nothing was done.
        """
        if self.is_connection_broken():
            return None

        payload = self._read_build_log(max_lines)
        self._deliver(payload)
        return payload

    def _read_build_log(self, max_lines: int) -> LogPayload:
        requested = UNBOUNDED_LINES if max_lines < 0 else max_lines
        try:
            return LogPayload.from_log(self._build.fetch_log(requested))
        except OSError as e:
            self._log.warning(
                "delivery.log_unavailable",
                error=str(e),
                error_type=e.__class__.__name__,
                category=categorize_error(e).value,
            )
            trace = "".join(traceback.format_exception(e)).rstrip("\n")
            message = f"{SERIALIZE_ERROR_MESSAGE}\n{trace}"
            self._log_error_message(message)
            return LogPayload.diagnostic(message)

    def _deliver(self, payload: LogPayload) -> None:
        # Called after the viability check; a diagnostic payload is shipped
        # even though the latch was set while producing it.
        if not payload.lines:
            return
        result = self._transport.deliver(list(payload.lines), self._metadata)
        if result is not None and not result.success:
            self._log.debug(
                "delivery.not_delivered",
                transport=result.transport_name,
                origin=payload.origin.value,
                reason=result.message,
                retryable=result.error is not None and is_retryable(result.error),
            )
        else:
            self._log.debug("delivery.sent", lines=len(payload), origin=payload.origin.value)

    def _log_error_message(self, message: str) -> None:
        """Latch the writer broken, then report ``message`` on the error sink."""
        self._broken = True
        try:
            self._error_sink.write(f"{message}\n".encode(self._encoding, errors="replace"))
            self._error_sink.flush()
        except (OSError, ValueError):
            self._log.exception("delivery.error_sink_failed")
