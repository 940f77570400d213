"""File-backed build: a build whose log is a file on local disk."""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from logship.framework.logging import get_logger

log = get_logger(__name__)


class LocalBuild:
    """
    Execution unit backed by a log file.

    ``fetch_log`` returns the last ``max_lines`` lines of the file. When
    earlier lines are dropped, the first element is a marker
    ``"[...truncated N B...]"`` giving the size of the dropped text, so the
    returned list holds ``max_lines + 1`` entries.
    """

    def __init__(
        self,
        log_path: str | Path,
        *,
        name: str | None = None,
        number: str | int | None = None,
        environment: Mapping[str, str] | None = None,
        encoding: str = "utf-8",
    ):
        self.log_path = Path(log_path)
        self.name = name
        self.number = str(number) if number is not None else None
        self.encoding = encoding
        self._environment = dict(environment or {})

    def fetch_log(self, max_lines: int) -> list[str]:
        """Read the tail of the log file. Raises OSError if it cannot be read."""
        kept: deque[bytes] = deque(maxlen=max(max_lines, 0))
        total = 0
        with self.log_path.open("rb") as fh:
            for raw in fh:
                total += len(raw)
                kept.append(raw)

        lines = [raw.decode(self.encoding, errors="replace").rstrip("\r\n") for raw in kept]
        dropped = total - sum(len(raw) for raw in kept)
        if dropped > 0:
            lines.insert(0, f"[...truncated {dropped} B...]")

        log.debug("build.log_fetched", path=str(self.log_path), lines=len(lines), truncated_bytes=dropped)
        return lines

    def environment(self, listener: Any = None) -> dict[str, str]:
        """Configured environment plus JOB_NAME / BUILD_NUMBER from this build."""
        env = dict(self._environment)
        if self.name:
            env["JOB_NAME"] = self.name
        if self.number:
            env["BUILD_NUMBER"] = self.number
        return env

    def __repr__(self) -> str:
        return f"LocalBuild({str(self.log_path)!r}, name={self.name!r}, number={self.number!r})"
