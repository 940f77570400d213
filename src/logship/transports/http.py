"""HTTP log-intake transport.

Manifesto:
    Any HTTP intake that accepts a JSON array of log entries should be a
    valid target.  Each line becomes one entry carrying the build's
    metadata, and a delivery never raises: failures come back as a
    DeliveryResult so the build is never interrupted by its log backend.

Tags:
    logship, transports, http, httpx, intake, HTTP-POST

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Any

import httpx

from logship.core.errors import InvalidConfigError, NetworkError, TransportError
from logship.core.settings import LogShipSettings
from logship.framework.logging import get_logger
from logship.metadata.bundle import BuildMetadata
from logship.transports.base import BaseTransport
from logship.transports.protocol import DeliveryResult, TransportType

log = get_logger(__name__)


class HttpLogTransport(BaseTransport):
    """
    POSTs log lines to an HTTP intake as JSON.

    Entry format::

        {"message": "...", "source": "ci", "service": "build",
         "hostname": "agent-1", "tags": "branch:main,job:etl",
         "build": {...BuildMetadata.to_dict()...}}

    A delivery larger than ``max_batch_lines`` is split into several
    requests, sent in order; the first failing request stops the delivery.
    """

    def __init__(
        self,
        intake_url: str,
        *,
        api_key: str | None = None,
        api_key_header: str = "X-API-Key",
        service: str = "build",
        source: str = "ci",
        timeout: float = 10.0,
        max_batch_lines: int = 1000,
        client: httpx.Client | None = None,
        name: str = "http",
        enabled: bool = True,
    ):
        super().__init__(name, TransportType.HTTP, enabled=enabled)
        if not intake_url.startswith(("http://", "https://")):
            raise InvalidConfigError("intake_url", intake_url)
        if max_batch_lines <= 0:
            raise InvalidConfigError("max_batch_lines", max_batch_lines)
        self._url = intake_url
        self._api_key = api_key
        self._api_key_header = api_key_header
        self._service = service
        self._source = source
        self._max_batch_lines = max_batch_lines
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: LogShipSettings, **kwargs: Any) -> HttpLogTransport:
        """Create a transport from LogShipSettings; kwargs override."""
        options: dict[str, Any] = {
            "intake_url": settings.intake_url,
            "api_key": settings.api_key.get_secret_value() if settings.api_key else None,
            "api_key_header": settings.api_key_header,
            "service": settings.service,
            "source": settings.source,
            "timeout": settings.request_timeout,
            "max_batch_lines": settings.max_batch_lines,
        }
        options.update(kwargs)
        return cls(**options)

    @property
    def url(self) -> str:
        return self._url

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers[self._api_key_header] = self._api_key
        return headers

    def _build_entries(self, lines: list[str], metadata: BuildMetadata) -> list[dict[str, Any]]:
        """Build one intake entry per line, preserving order."""
        build = metadata.to_dict()
        tags = metadata.tag_string()
        entries = []
        for line in lines:
            entry: dict[str, Any] = {
                "message": line,
                "source": self._source,
                "service": self._service,
                "build": build,
            }
            if metadata.hostname:
                entry["hostname"] = metadata.hostname
            if tags:
                entry["tags"] = tags
            entries.append(entry)
        return entries

    def _send(self, lines: list[str], metadata: BuildMetadata) -> DeliveryResult:
        entries = self._build_entries(lines, metadata)
        sent = 0
        requests = 0
        status = None

        for start in range(0, len(entries), self._max_batch_lines):
            chunk = entries[start : start + self._max_batch_lines]
            try:
                response = self._client.post(self._url, json=chunk, headers=self._headers())
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                error = TransportError(
                    f"Intake returned HTTP {status}",
                    retry_after=_retry_after(e.response),
                    cause=e,
                ).with_context(transport=self._name, url=self._url, http_status=status)
                log.warning("transport.rejected", sent=sent, **error.to_dict())
                return DeliveryResult.fail(self._name, error, lines=sent)
            except httpx.TransportError as e:
                error = NetworkError(str(e) or e.__class__.__name__, cause=e).with_context(
                    transport=self._name, url=self._url
                )
                log.warning("transport.unreachable", sent=sent, **error.to_dict())
                return DeliveryResult.fail(self._name, error, lines=sent)
            except httpx.HTTPError as e:
                error = TransportError(str(e), cause=e).with_context(transport=self._name, url=self._url)
                log.warning("transport.failed", sent=sent, **error.to_dict())
                return DeliveryResult.fail(self._name, error, lines=sent)

            sent += len(chunk)
            requests += 1
            status = response.status_code

        log.debug("transport.delivered", lines=sent, requests=requests)
        return DeliveryResult.ok(
            self._name,
            lines=sent,
            response={"status": status, "requests": requests},
        )

    def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpLogTransport:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _retry_after(response: httpx.Response) -> int | None:
    value = response.headers.get("Retry-After", "")
    return int(value) if value.isdigit() else None
