"""Resolve build metadata from the build's environment.

Manifesto:
    Build systems already export what a log backend needs (job name,
    build number, node, branch) as environment variables.  The provider
    reads them once, when the writer is created, and freezes them into a
    BuildMetadata bundle.

Tags:
    logship, metadata, environment, build-data

Doc-Types:
    api-reference
"""

from __future__ import annotations

import socket
from collections.abc import Mapping
from typing import Any

from logship.core.protocols import EnvironmentSource
from logship.framework.logging import get_logger
from logship.metadata.bundle import BuildMetadata

log = get_logger(__name__)

# First non-empty variable wins.
_BRANCH_VARS = ("GIT_BRANCH", "BRANCH_NAME", "CI_COMMIT_BRANCH")


class EnvironmentMetadataProvider:
    """
    Builds a BuildMetadata bundle from ``build.environment(listener)``.

    Builds that cannot report an environment get a bundle carrying only
    the hostname and global tags. I/O errors and interruptions raised by
    the build propagate to the caller.
    """

    def __init__(self, *, global_tags: Mapping[str, str] | None = None, hostname: str | None = None):
        self._global_tags = dict(global_tags or {})
        self._hostname = hostname

    def resolve(self, build: Any, listener: Any) -> BuildMetadata:
        env: Mapping[str, str] = {}
        if isinstance(build, EnvironmentSource):
            env = build.environment(listener)

        tags = dict(self._global_tags)
        job_name = _get(env, "JOB_NAME")
        branch = _first(env, _BRANCH_VARS)
        if job_name:
            tags.setdefault("job", job_name)
        if branch:
            tags.setdefault("branch", branch)

        metadata = BuildMetadata(
            job_name=job_name,
            build_id=_get(env, "BUILD_ID"),
            build_number=_get(env, "BUILD_NUMBER"),
            build_url=_get(env, "BUILD_URL"),
            build_tag=_get(env, "BUILD_TAG"),
            node_name=_get(env, "NODE_NAME"),
            hostname=self._resolve_hostname(env),
            branch=branch,
            workspace=_get(env, "WORKSPACE"),
            tags=tags,
        )
        log.debug("metadata.resolved", job=metadata.job_name, build_number=metadata.build_number)
        return metadata

    def _resolve_hostname(self, env: Mapping[str, str]) -> str | None:
        if self._hostname:
            return self._hostname
        return _get(env, "HOSTNAME") or socket.gethostname() or None


def _get(env: Mapping[str, str], key: str) -> str | None:
    value = env.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _first(env: Mapping[str, str], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = _get(env, key)
        if value:
            return value
    return None
