"""Immutable metadata bundle describing one build."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class BuildMetadata:
    """
    Snapshot of contextual attributes for one build.

    Captured once when a LogsWriter is created and attached, unchanged, to
    every batch handed to a transport.
    """

    job_name: str | None = None
    build_id: str | None = None
    build_number: str | None = None
    build_url: str | None = None
    build_tag: str | None = None
    node_name: str | None = None
    hostname: str | None = None
    branch: str | None = None
    workspace: str | None = None
    host_url: str | None = None
    tags: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))

    def with_host_url(self, host_url: str) -> BuildMetadata:
        """Return a copy carrying the hosting service's root URL."""
        return replace(self, host_url=host_url)

    def tag_string(self) -> str:
        """Render tags as ``key:value`` pairs, comma separated, keys sorted."""
        parts = []
        for key in sorted(self.tags):
            value = self.tags[key]
            parts.append(f"{key}:{value}" if value else key)
        return ",".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization, omitting unset fields."""
        result: dict[str, Any] = {}
        for key in (
            "job_name",
            "build_id",
            "build_number",
            "build_url",
            "build_tag",
            "node_name",
            "hostname",
            "branch",
            "workspace",
            "host_url",
        ):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.tags:
            result["tags"] = dict(self.tags)
        return result
