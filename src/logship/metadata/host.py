"""Host locators: resolve the root URL of the service hosting the builds."""

from __future__ import annotations

from logship.core.settings import LogShipSettings


def _normalize(url: str | None) -> str:
    url = (url or "").strip()
    if url and not url.endswith("/"):
        url += "/"
    return url


class StaticHostLocator:
    """Returns a fixed root URL, always with a trailing slash (or empty)."""

    def __init__(self, url: str | None = ""):
        self._url = _normalize(url)

    def root_url(self) -> str:
        return self._url


class SettingsHostLocator:
    """Reads the root URL from ``LogShipSettings.host_url``."""

    def __init__(self, settings: LogShipSettings):
        self._settings = settings

    def root_url(self) -> str:
        return _normalize(self._settings.host_url)
