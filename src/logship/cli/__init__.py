"""logship command line interface."""

from logship.cli.app import app

__all__ = ["app"]
