"""Execution units: builds whose logs can be shipped."""

from logship.execution.local import LocalBuild

__all__ = ["LocalBuild"]
